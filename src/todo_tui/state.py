"""Modes and per-mode state of the interaction loop."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Mode(Enum):
    BROWSING = "browsing"
    EDITING = "editing"
    INFO = "info"
    TERMINATED = "terminated"


class Field(Enum):
    NAME = "name"
    DESCRIPTION = "description"


@dataclass
class EditForm:
    """Buffers for the add/edit popup."""

    name: str = ""
    description: str = ""
    focus: Field = Field.NAME
    editing_index: Optional[int] = None

    @property
    def is_new(self) -> bool:
        return self.editing_index is None


@dataclass
class Option:
    """A checkbox in the info overlay, bound to an App attribute."""

    label: str
    attribute: str


@dataclass
class InfoState:
    options: List[Option] = field(default_factory=lambda: [
        Option("Hide completed", "hide_completed"),
        Option("Lock color", "lock_color"),
        Option("Wrap cursor", "wrap_cursor"),
    ])
    selected: int = 0
