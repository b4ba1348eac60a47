"""Key bindings: raw key strings (as returned by readchar) to actions."""

from enum import Enum
from typing import Dict, Optional

from readchar import key

ESC = "\x1b"
ENTER = "\r"
LF = "\n"
TAB = "\t"
DELETE = "\x1b[3~"


class Action(Enum):
    QUIT = "quit"
    UP = "up"
    DOWN = "down"
    ADD = "add"
    EDIT = "edit"
    TOGGLE = "toggle"
    DELETE = "delete"
    MOVE_ITEM_UP = "move_item_up"
    MOVE_ITEM_DOWN = "move_item_down"
    HIDE_COMPLETED = "hide_completed"
    NEXT_COLOR = "next_color"
    PREVIOUS_COLOR = "previous_color"
    INFO = "info"

    # text input
    SUBMIT = "submit"
    CANCEL = "cancel"
    BACKSPACE = "backspace"
    SWITCH_FIELD = "switch_field"


BROWSE_BINDINGS: Dict[str, Action] = {
    "q": Action.QUIT,
    ESC: Action.QUIT,
    "k": Action.UP,
    key.UP: Action.UP,
    "j": Action.DOWN,
    key.DOWN: Action.DOWN,
    "a": Action.ADD,
    "r": Action.EDIT,
    "e": Action.EDIT,
    " ": Action.TOGGLE,
    "n": Action.TOGGLE,
    ENTER: Action.TOGGLE,
    LF: Action.TOGGLE,
    "x": Action.DELETE,
    DELETE: Action.DELETE,
    "K": Action.MOVE_ITEM_UP,
    "J": Action.MOVE_ITEM_DOWN,
    "t": Action.HIDE_COMPLETED,
    "l": Action.NEXT_COLOR,
    key.RIGHT: Action.NEXT_COLOR,
    "h": Action.PREVIOUS_COLOR,
    key.LEFT: Action.PREVIOUS_COLOR,
    "i": Action.INFO,
}

EDIT_BINDINGS: Dict[str, Action] = {
    ESC: Action.CANCEL,
    ENTER: Action.SUBMIT,
    LF: Action.SUBMIT,
    TAB: Action.SWITCH_FIELD,
    key.BACKSPACE: Action.BACKSPACE,
    "\x7f": Action.BACKSPACE,
    "\x08": Action.BACKSPACE,
}

INFO_BINDINGS: Dict[str, Action] = {
    ESC: Action.CANCEL,
    "i": Action.CANCEL,
    "q": Action.CANCEL,
    key.UP: Action.UP,
    key.LEFT: Action.UP,
    "k": Action.UP,
    key.DOWN: Action.DOWN,
    key.RIGHT: Action.DOWN,
    "j": Action.DOWN,
    ENTER: Action.TOGGLE,
    LF: Action.TOGGLE,
    " ": Action.TOGGLE,
}

HELP_LINES = [
    ("a", "add todo"),
    ("r / e", "edit todo"),
    ("space / enter / n", "toggle done"),
    ("x / del", "delete todo"),
    ("j k / ↓ ↑", "move cursor"),
    ("J K", "move todo down / up"),
    ("t", "hide completed"),
    ("h l / ← →", "previous / next color"),
    ("i", "info and options"),
    ("q / esc", "quit"),
]


def lookup(bindings: Dict[str, Action], pressed: str) -> Optional[Action]:
    return bindings.get(pressed)


def is_text(pressed: str) -> bool:
    """True for a single printable character (typed text, not a control key)."""
    return len(pressed) == 1 and pressed.isprintable()
