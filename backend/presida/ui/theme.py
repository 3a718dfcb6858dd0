"""Shared visual theme.

Colour scales, font stack and dark-mode strategy, in the shape of a Tailwind
``theme.extend`` section so the frontend build can consume it as JSON.
"""

from typing import Any

PRIMARY = {
    "DEFAULT": "#00FF7F",
    "50": "#E6FFEF",
    "100": "#B3FFD9",
    "200": "#80FFC2",
    "300": "#4DFFAB",
    "400": "#1AFF95",
    "500": "#00FF7F",
    "600": "#00CC66",
    "700": "#00994C",
    "800": "#006633",
    "900": "#003319",
}

SECONDARY = {
    "DEFAULT": "#1E293B",
    "50": "#8DA2BC",
    "100": "#7D95B3",
    "200": "#5D7CA1",
    "300": "#46627F",
    "400": "#33485D",
    "500": "#1E293B",
    "600": "#151E29",
    "700": "#0C1218",
    "800": "#030506",
    "900": "#000000",
}

DARK = {
    "DEFAULT": "#121212",
    "paper": "#1E1E1E",
    "border": "#2C2C2C",
    "light": "#3A3A3A",
}

FONT_SANS = [
    'Inter var, Inter, -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, '
    "Helvetica, Arial, sans-serif",
]

DARK_MODE = "class"

THEME: dict[str, Any] = {
    "colors": {"primary": PRIMARY, "secondary": SECONDARY, "dark": DARK},
    "fontFamily": {"sans": FONT_SANS},
    "animation": {"pulse-slow": "pulse 3s cubic-bezier(0.4, 0, 0.6, 1) infinite"},
}


def tailwind_config(content: list[str] | None = None) -> dict[str, Any]:
    """Full Tailwind configuration with the theme under ``extend``."""
    return {
        "content": content or ["./index.html", "./src/**/*.{js,ts,jsx,tsx}"],
        "darkMode": DARK_MODE,
        "theme": {"extend": THEME},
        "plugins": [],
    }
