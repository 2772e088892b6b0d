"""Theme definitions for track graphs."""

from djgraph.themes.dark import DARK_THEME
from djgraph.themes.light import LIGHT_THEME

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
