"""Server-rendered presentational fragments and the shared theme."""

from presida.ui.components import render_logo, render_plan_limit_modal, render_switch
from presida.ui.theme import THEME, tailwind_config

__all__ = [
    "THEME",
    "render_logo",
    "render_plan_limit_modal",
    "render_switch",
    "tailwind_config",
]
