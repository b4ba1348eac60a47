"""Color palettes and Rich theming for todo-tui.

Each palette supplies the accent shades; the neutral slate shades are
shared. Styles are referenced by name in the renderer (``[header]``,
``row_selected`` ...) so switching palette only swaps the Theme.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from rich.console import Console
from rich.theme import Theme

logger = logging.getLogger(__name__)

# Tailwind slate shades shared by every palette
SLATE_950 = "#020617"
SLATE_900 = "#0f172a"
SLATE_500 = "#64748b"
SLATE_200 = "#e2e8f0"

SUCCESS = "#22c55e"
WARNING = "#eab308"


@dataclass(frozen=True)
class Palette:
    """Accent colors for one theme: dark (900) and light (400) shades."""

    name: str
    c900: str
    c400: str


PALETTES: List[Palette] = [
    Palette("blue", c900="#1e3a8a", c400="#60a5fa"),
    Palette("emerald", c900="#064e3b", c400="#34d399"),
    Palette("indigo", c900="#312e81", c400="#818cf8"),
    Palette("red", c900="#7f1d1d", c400="#f87171"),
]


def palette_index(name: Optional[str]) -> int:
    """Index of the named palette, falling back to the first one."""
    for i, palette in enumerate(PALETTES):
        if palette.name == (name or "").lower():
            return i
    if name:
        logger.warning(f"Unknown palette {name!r}, using {PALETTES[0].name!r}")
    return 0


def next_palette(index: int) -> int:
    return (index + 1) % len(PALETTES)


def previous_palette(index: int) -> int:
    return (index - 1) % len(PALETTES)


def theme_styles(palette: Palette) -> Dict[str, str]:
    """Style definitions for the given palette."""
    return {
        "header": f"{SLATE_200} on {palette.c900} bold",
        "row": f"{SLATE_200} on {SLATE_950}",
        "row_alt": f"{SLATE_200} on {SLATE_900}",
        "row_selected": f"{palette.c400} reverse",
        "border": palette.c400,
        "accent": f"{palette.c400} bold",
        "muted": SLATE_500,
        "done": SUCCESS,
        "pending": WARNING,
        "status": f"{SLATE_200} italic",
        "error": "red bold",
    }


def build_theme(palette: Palette) -> Theme:
    """Compile a palette into a Rich Theme."""
    return Theme(theme_styles(palette))


def get_themed_console(palette: Optional[Palette] = None, **kwargs) -> Console:
    """Get a console with the palette's theme applied."""
    return Console(theme=build_theme(palette or PALETTES[0]), **kwargs)


def get_status_emoji(done: bool, use_emoji: bool = True) -> str:
    if not use_emoji:
        return "[x]" if done else "[ ]"
    return "✅" if done else "⬜"
