"""Presentational HTML fragments.

Each component is a plain function returning an HTML string rendered from a
Jinja2 template in ``presida/ui/templates``. Autoescaping is on, so caller
text such as the modal message is always escaped.
"""

from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape

_env = Environment(
    loader=PackageLoader("presida.ui", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)

PLAN_LIMIT_TITLE = "Limite do Plano Atingido"
UPGRADE_URL = "/pricing"


def _render(template_name: str, **context) -> str:
    return _env.get_template(template_name).render(**context).strip()


def render_logo(class_name: str = "h-6 w-6") -> str:
    """Render the product logo image."""
    return _render("logo.html", class_name=class_name)


def render_plan_limit_modal(
    is_open: bool,
    message: str,
    show_upgrade_button: bool = True,
) -> str:
    """Render the plan-limit dialog.

    Returns an empty string when the dialog is closed. The "Fechar" button
    carries ``data-dismiss`` for the page script to close it; the upgrade
    action links to the pricing page.
    """
    if not is_open:
        return ""
    return _render(
        "plan_limit_modal.html",
        title=PLAN_LIMIT_TITLE,
        message=message,
        show_upgrade_button=show_upgrade_button,
        upgrade_url=UPGRADE_URL,
    )


def render_switch(checked: bool, loading: bool = False, action: Optional[str] = None) -> str:
    """Render a toggle switch.

    Args:
    ----
        checked (bool): Current state.
        loading (bool): Disable the switch and show a spinner.
        action (str, optional): URL posted to when the switch is clicked.

    """
    return _render("switch.html", checked=checked, loading=loading, action=action)
