"""In-memory item store: the ordered list of todo items.

Index-based operations never raise on a bad index. A stale or
out-of-range index (including any index into an empty list) is a no-op
that returns a falsy value, so the interaction loop can dispatch keys
without guarding every call.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .todo import TodoItem

logger = logging.getLogger(__name__)


class TodoList:
    """Ordered collection of TodoItems; insertion order is display order."""

    def __init__(self, items: Optional[Iterable[TodoItem]] = None):
        self.items: List[TodoItem] = list(items) if items else []

    # -------------------- queries --------------------
    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[TodoItem]:
        return iter(self.items)

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self.items)

    def get(self, index: int) -> Optional[TodoItem]:
        if not self._valid(index):
            return None
        return self.items[index]

    def visible_indices(self, hide_completed: bool = False) -> List[int]:
        """Store indices shown in the list view, in display order."""
        if not hide_completed:
            return list(range(len(self.items)))
        return [i for i, item in enumerate(self.items) if not item.done]

    def counts(self) -> Tuple[int, int]:
        """Return (pending, done) counts."""
        done = sum(1 for item in self.items if item.done)
        return len(self.items) - done, done

    # -------------------- mutations --------------------
    def add(self, text: str, description: str = "") -> TodoItem:
        item = TodoItem(text=text, description=description)
        self.items.append(item)
        logger.debug(f"Added item {len(self.items) - 1}: {text!r}")
        return item

    def toggle(self, index: int) -> bool:
        """Flip ``done`` on the item at ``index``. False if index is invalid."""
        if not self._valid(index):
            logger.debug(f"toggle({index}) ignored, list has {len(self.items)} items")
            return False
        self.items[index].toggle()
        return True

    def remove(self, index: int) -> Optional[TodoItem]:
        """Delete and return the item at ``index``; None if index is invalid."""
        if not self._valid(index):
            logger.debug(f"remove({index}) ignored, list has {len(self.items)} items")
            return None
        item = self.items.pop(index)
        logger.debug(f"Removed item {index}: {item.text!r}")
        return item

    def update(self, index: int, text: str, description: str = "") -> bool:
        """Replace text and description, keeping completion state and timestamps."""
        if not self._valid(index):
            logger.debug(f"update({index}) ignored, list has {len(self.items)} items")
            return False
        item = self.items[index]
        item.text = text
        item.description = description
        return True

    def move(self, index: int, offset: int) -> Optional[int]:
        """Move an item by ``offset`` positions.

        Returns the item's new index, or None when either end of the move
        falls outside the list.
        """
        target = index + offset
        if not self._valid(index) or not self._valid(target):
            return None
        item = self.items.pop(index)
        self.items.insert(target, item)
        return target

    def swap(self, first: int, second: int) -> bool:
        """Exchange two items in place. False if either index is invalid."""
        if not self._valid(first) or not self._valid(second):
            return False
        self.items[first], self.items[second] = self.items[second], self.items[first]
        return True

    # -------------------- serialization --------------------
    def to_dicts(self) -> List[Dict[str, Any]]:
        return [item.to_dict() for item in self.items]

    @classmethod
    def from_dicts(cls, data: Iterable[Dict[str, Any]]) -> "TodoList":
        return cls(TodoItem.from_dict(raw) for raw in data)

    def __repr__(self) -> str:
        pending, done = self.counts()
        return f"TodoList(pending={pending}, done={done})"
