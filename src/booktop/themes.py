"""Colour palettes for the table, dialogs and read-state symbols.

Each palette is exposed twice: as ``THEME_COLORS`` for Rich markup built in
Python, and as ``$th-<key>`` CSS variables (underscores become hyphens) on a
registered Textual theme.
"""

from __future__ import annotations

from textual.theme import Theme as TextualTheme

from booktop.models import ReadState

DEFAULT_THEME_NAME = "monokai"

THEMES: dict[str, dict[str, str]] = {
    "monokai": {
        "background": "#272822",
        "panel": "#1e1e1e",
        "panel_alt": "#3e3d32",
        "highlight": "#49483e",
        "text": "#f8f8f2",
        "muted": "#75715e",
        "accent": "#66d9ef",
        "accent_alt": "#e6db74",
        "green": "#a6e22e",
        "orange": "#fd971f",
        "error": "#f92672",
        "scrollbar": "#75715e",
    },
    "catppuccin-mocha": {
        "background": "#1e1e2e",
        "panel": "#181825",
        "panel_alt": "#313244",
        "highlight": "#45475a",
        "text": "#cdd6f4",
        "muted": "#6c7086",
        "accent": "#89b4fa",
        "accent_alt": "#f9e2af",
        "green": "#a6e3a1",
        "orange": "#fab387",
        "error": "#f38ba8",
        "scrollbar": "#585b70",
    },
    "solarized-dark": {
        "background": "#002b36",
        "panel": "#073642",
        "panel_alt": "#0e4b59",
        "highlight": "#174652",
        "text": "#93a1a1",
        "muted": "#657b83",
        "accent": "#268bd2",
        "accent_alt": "#b58900",
        "green": "#859900",
        "orange": "#cb4b16",
        "error": "#dc322f",
        "scrollbar": "#586e75",
    },
}
THEME_NAMES: list[str] = list(THEMES)
DEFAULT_THEME = THEMES[DEFAULT_THEME_NAME]

# Palette key used to color each read-state symbol in the table
READ_STATE_COLOR_KEYS: dict[ReadState, str] = {
    ReadState.READ: "green",
    ReadState.READING: "accent",
    ReadState.STOPPED: "orange",
    ReadState.UNREAD: "muted",
}


def _css_variables(colors: dict[str, str]) -> dict[str, str]:
    return {f"th-{key.replace('_', '-')}": value for key, value in colors.items()}


def _textual_theme(name: str, colors: dict[str, str]) -> TextualTheme:
    return TextualTheme(
        name=name,
        primary=colors["accent"],
        secondary=colors["accent_alt"],
        accent=colors["green"],
        foreground=colors["text"],
        background=colors["background"],
        surface=colors["panel"],
        panel=colors["panel_alt"],
        warning=colors["orange"],
        error=colors["error"],
        success=colors["green"],
        dark=True,
        variables=_css_variables(colors),
    )


TEXTUAL_THEMES: dict[str, TextualTheme] = {
    name: _textual_theme(name, colors) for name, colors in THEMES.items()
}

# Active palette for Rich markup; mutated in place so importers see theme changes
THEME_COLORS: dict[str, str] = dict(DEFAULT_THEME)


def apply_theme_colors(name: str) -> str:
    """Load palette ``name`` into THEME_COLORS, falling back to monokai.

    Returns the name actually applied.
    """
    if name not in THEMES:
        name = DEFAULT_THEME_NAME
    THEME_COLORS.clear()
    THEME_COLORS.update(THEMES[name])
    return name


def next_theme_name(current: str) -> str:
    """The theme after ``current`` in THEME_NAMES, wrapping around."""
    if current not in THEMES:
        return THEME_NAMES[0]
    return THEME_NAMES[(THEME_NAMES.index(current) + 1) % len(THEME_NAMES)]


def read_state_color(state: ReadState) -> str:
    return THEME_COLORS[READ_STATE_COLOR_KEYS[state]]


__all__ = [
    "DEFAULT_THEME",
    "DEFAULT_THEME_NAME",
    "READ_STATE_COLOR_KEYS",
    "TEXTUAL_THEMES",
    "THEMES",
    "THEME_COLORS",
    "THEME_NAMES",
    "apply_theme_colors",
    "next_theme_name",
    "read_state_color",
]
