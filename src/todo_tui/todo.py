"""Todo item data model for todo-tui."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .utils.datetime import ensure_aware, now_utc, parse_iso, to_iso_string


@dataclass
class TodoItem:
    """A single entry in the todo list.

    Items carry no id of their own; they are addressed by their position
    in the owning list.
    """

    text: str
    done: bool = False
    description: str = ""
    created: datetime = field(default_factory=now_utc)
    completed_date: Optional[datetime] = None

    def __post_init__(self):
        self.created = ensure_aware(self.created)
        self.completed_date = ensure_aware(self.completed_date)
        if self.done and not self.completed_date:
            self.completed_date = now_utc()
        elif not self.done:
            self.completed_date = None

    def complete(self):
        """Mark the item as done."""
        self.done = True
        self.completed_date = now_utc()

    def reopen(self):
        """Mark a done item as pending again."""
        self.done = False
        self.completed_date = None

    def toggle(self) -> bool:
        """Flip the completion state and return the new value."""
        if self.done:
            self.reopen()
        else:
            self.complete()
        return self.done

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "done": self.done,
            "description": self.description,
            "created": to_iso_string(self.created),
            "completed_date": to_iso_string(self.completed_date),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TodoItem":
        return cls(
            text=str(data.get("text", "")),
            done=bool(data.get("done", False)),
            description=str(data.get("description") or ""),
            created=parse_iso(data.get("created")) or now_utc(),
            completed_date=parse_iso(data.get("completed_date")),
        )
