"""todo-tui - a terminal todo list driven by single key presses."""

__version__ = "0.1.0"

from .todo import TodoItem
from .store import TodoList
from .cursor import CursorState

__all__ = ["TodoItem", "TodoList", "CursorState", "__version__"]
