"""Cursor (selected row) for the list view."""

from dataclasses import dataclass


@dataclass
class CursorState:
    """Index of the highlighted row in the visible list.

    ``selected`` stays in ``[0, n)`` for a non-empty view and is 0 for an
    empty one. ``wrap`` controls whether moving past either end jumps to
    the other end or stops.
    """

    selected: int = 0
    wrap: bool = False

    def clamp(self, count: int) -> int:
        if count <= 0:
            self.selected = 0
        else:
            self.selected = max(0, min(self.selected, count - 1))
        return self.selected

    def select(self, index: int, count: int) -> int:
        self.selected = index
        return self.clamp(count)

    def move_up(self, count: int) -> int:
        if count <= 0:
            return self.clamp(count)
        if self.selected <= 0:
            self.selected = count - 1 if self.wrap else 0
        else:
            self.selected -= 1
        return self.clamp(count)

    def move_down(self, count: int) -> int:
        if count <= 0:
            return self.clamp(count)
        if self.selected >= count - 1:
            self.selected = 0 if self.wrap else count - 1
        else:
            self.selected += 1
        return self.clamp(count)
