"""Storage layer for todo-tui: a markdown checklist with YAML frontmatter.

The list is kept human-editable. Each item is one checklist line, with its
description as indented sub-items::

    ---
    title: Todo
    items:
    - created: '2026-10-18T09:00:00+00:00'
      completed_date: null
    ---
    # Todo

    - [ ] buy milk
      - two litres

Timestamps live in the frontmatter, matched to checklist lines by position.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import frontmatter
import yaml

from .config import ConfigModel
from .store import TodoList
from .todo import TodoItem
from .utils.datetime import now_utc, parse_iso, to_iso_string

logger = logging.getLogger(__name__)

TASK_LINE_RE = re.compile(r"^- \[( |x|X)\]\s?(.*)$")
DETAIL_LINE_RE = re.compile(r"^\s{2,}- ?(.*)$")
DEFAULT_TITLE = "Todo"
ITEM_METADATA_KEYS = ("created", "completed_date")


class StorageError(Exception):
    """Raised when the todo file exists but cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class TodoMarkdownFormat:
    """Conversion between a TodoItem and its checklist lines."""

    @staticmethod
    def to_markdown(item: TodoItem) -> str:
        checkbox = "- [x]" if item.done else "- [ ]"
        lines = [f"{checkbox} {item.text}"]
        if item.description:
            lines.extend(f"  - {line}" for line in item.description.split("\n"))
        return "\n".join(lines)

    @staticmethod
    def parse_lines(content: str) -> List[TodoItem]:
        """Parse checklist lines; anything else (headings, prose) is skipped."""
        items: List[TodoItem] = []
        description: List[str] = []

        def flush():
            if items and description:
                items[-1].description = "\n".join(description)
            description.clear()

        for line in content.split("\n"):
            task = TASK_LINE_RE.match(line)
            if task:
                flush()
                items.append(TodoItem(text=task.group(2).strip(), done=task.group(1) != " "))
                continue
            detail = DETAIL_LINE_RE.match(line)
            if detail and items:
                description.append(detail.group(1))
        flush()
        return items


class ListMarkdownFormat:
    """Conversion between a whole TodoList and the markdown document."""

    @staticmethod
    def to_markdown(todos: TodoList, title: str = DEFAULT_TITLE,
                    created: Optional[str] = None) -> str:
        metadata: Dict[str, Any] = {
            "title": title,
            "created": created or to_iso_string(now_utc()),
            "modified": to_iso_string(now_utc()),
            "items": [
                {key: record[key] for key in ITEM_METADATA_KEYS}
                for record in todos.to_dicts()
            ],
        }
        lines = [f"# {title}", ""]
        lines.extend(TodoMarkdownFormat.to_markdown(item) for item in todos)
        post = frontmatter.Post("\n".join(lines), **metadata)
        return frontmatter.dumps(post) + "\n"

    @staticmethod
    def from_markdown(content: str) -> Tuple[TodoList, Dict[str, Any]]:
        """Parse a document into the list and its frontmatter metadata."""
        post = frontmatter.loads(content)
        items = TodoMarkdownFormat.parse_lines(post.content)

        meta_items = post.metadata.get("items") or []
        if not isinstance(meta_items, list):
            meta_items = []
        if meta_items and len(meta_items) != len(items):
            logger.warning(
                f"Item metadata count ({len(meta_items)}) does not match "
                f"checklist lines ({len(items)}); extra entries ignored"
            )
        records = [item.to_dict() for item in items]
        for record, meta in zip(records, meta_items):
            if not isinstance(meta, dict):
                continue
            if parse_iso(meta.get("created")):
                record["created"] = meta["created"]
            if record["done"] and parse_iso(meta.get("completed_date")):
                record["completed_date"] = meta["completed_date"]
        return TodoList.from_dicts(records), dict(post.metadata)


class Storage:
    """File-based storage for a single todo list."""

    def __init__(self, config: ConfigModel, path: Optional[Path] = None):
        self.config = config
        self.path = Path(path) if path else config.get_data_path()
        self._created: Optional[str] = None

    def load(self) -> TodoList:
        """Load the list; a missing file is an empty list."""
        if not self.path.exists():
            logger.info(f"No todo file at {self.path}, starting empty")
            return TodoList()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
            todos, metadata = ListMarkdownFormat.from_markdown(content)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError) as e:
            raise StorageError(f"Error loading {self.path}: {e}", self.path) from e

        created = metadata.get("created")
        self._created = to_iso_string(parse_iso(created)) if created else None
        logger.info(f"Loaded {len(todos)} items from {self.path}")
        return todos

    def save(self, todos: TodoList) -> bool:
        """Write the list to disk; False (and a logged error) on failure."""
        try:
            content = ListMarkdownFormat.to_markdown(todos, created=self._created)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error saving {self.path}: {e}")
            return False

        logger.debug(f"Saved {len(todos)} items to {self.path}")
        return True
