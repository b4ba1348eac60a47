"""Interaction loop: read a key, dispatch it, redraw.

The loop is a small state machine over ``Mode``. ``handle_key`` is the
whole transition function and never touches the terminal, so it can be
driven directly in tests; ``run`` adds the terminal around it.
"""

import logging
from typing import List, Optional

from . import keys, theme
from .config import ConfigModel
from .cursor import CursorState
from .keys import Action
from .render import render_app
from .state import EditForm, Field, InfoState, Mode, Option
from .storage import Storage
from .store import TodoList

logger = logging.getLogger(__name__)

STATUS_MSG_MAX_LEN = 30


class App:
    """The todo list application state and its key dispatcher."""

    def __init__(
        self,
        store: Optional[TodoList] = None,
        config: Optional[ConfigModel] = None,
        storage: Optional[Storage] = None,
    ):
        self.config = config or ConfigModel()
        self.store = store if store is not None else TodoList()
        self.storage = storage

        self.mode = Mode.BROWSING
        self.cursor = CursorState(wrap=self.config.wrap_cursor)
        self.form = EditForm()
        self.info = InfoState()
        self.hide_completed = self.config.hide_completed
        self.lock_color = self.config.lock_color
        self.palette_index = theme.palette_index(self.config.palette)
        self.status_msg: Optional[str] = None

    # -------------------- derived state --------------------
    @property
    def wrap_cursor(self) -> bool:
        return self.cursor.wrap

    @wrap_cursor.setter
    def wrap_cursor(self, value: bool) -> None:
        self.cursor.wrap = value

    @property
    def palette(self) -> theme.Palette:
        return theme.PALETTES[self.palette_index]

    @property
    def terminated(self) -> bool:
        return self.mode == Mode.TERMINATED

    def visible(self) -> List[int]:
        return self.store.visible_indices(self.hide_completed)

    def selected_index(self) -> Optional[int]:
        """Store index under the cursor, or None for an empty view."""
        visible = self.visible()
        if not visible:
            return None
        return visible[self.cursor.clamp(len(visible))]

    def _clamp(self) -> None:
        self.cursor.clamp(len(self.visible()))

    def _focus_store_index(self, index: int) -> None:
        """Put the cursor on a store index if it is visible, else just clamp."""
        visible = self.visible()
        if index in visible:
            self.cursor.select(visible.index(index), len(visible))
        else:
            self.cursor.clamp(len(visible))

    def _persist(self) -> None:
        if self.storage is None:
            return
        if not self.storage.save(self.store):
            self.status_msg = "Error saving todos (see log)"

    # -------------------- dispatch --------------------
    def handle_key(self, pressed: str) -> Mode:
        """Apply one key press and return the resulting mode."""
        if self.mode == Mode.TERMINATED:
            return self.mode
        if self.mode == Mode.EDITING:
            self._handle_editing(pressed)
        elif self.mode == Mode.INFO:
            self._handle_info(pressed)
        else:
            self._handle_browsing(pressed)
        return self.mode

    def quit(self) -> None:
        self.mode = Mode.TERMINATED

    def _handle_browsing(self, pressed: str) -> None:
        action = keys.lookup(keys.BROWSE_BINDINGS, pressed)
        if action is None:
            return
        self.status_msg = None
        count = len(self.visible())

        if action == Action.QUIT:
            self.quit()
        elif action == Action.UP:
            self.cursor.move_up(count)
        elif action == Action.DOWN:
            self.cursor.move_down(count)
        elif action == Action.ADD:
            self.form = EditForm()
            self.mode = Mode.EDITING
        elif action == Action.EDIT:
            self._start_edit()
        elif action == Action.TOGGLE:
            self._toggle_selected()
        elif action == Action.DELETE:
            self._delete_selected()
        elif action in (Action.MOVE_ITEM_UP, Action.MOVE_ITEM_DOWN):
            self._move_selected(-1 if action == Action.MOVE_ITEM_UP else 1)
        elif action == Action.HIDE_COMPLETED:
            self.hide_completed = not self.hide_completed
            self._clamp()
            self.status_msg = "Hiding completed" if self.hide_completed else "Showing all"
        elif action == Action.NEXT_COLOR:
            if not self.lock_color:
                self.palette_index = theme.next_palette(self.palette_index)
        elif action == Action.PREVIOUS_COLOR:
            if not self.lock_color:
                self.palette_index = theme.previous_palette(self.palette_index)
        elif action == Action.INFO:
            self.mode = Mode.INFO

    def _start_edit(self) -> None:
        index = self.selected_index()
        item = self.store.get(index) if index is not None else None
        if item is None:
            return
        self.form = EditForm(
            name=item.text,
            description=item.description,
            editing_index=index,
        )
        self.mode = Mode.EDITING

    def _toggle_selected(self) -> None:
        index = self.selected_index()
        if index is None or not self.store.toggle(index):
            return
        item = self.store.items[index]
        verb = "Done" if item.done else "Reopened"
        self.status_msg = f"{verb}: {item.text[:STATUS_MSG_MAX_LEN]}"
        self._clamp()
        self._persist()

    def _delete_selected(self) -> None:
        index = self.selected_index()
        if index is None:
            return
        item = self.store.remove(index)
        if item is None:
            return
        self.status_msg = f"Deleted: {item.text[:STATUS_MSG_MAX_LEN]}"
        self._clamp()
        self._persist()

    def _move_selected(self, offset: int) -> None:
        index = self.selected_index()
        if index is None:
            return
        visible = self.visible()
        position = visible.index(index) + offset
        if not 0 <= position < len(visible):
            return
        # hidden items between the two stay where they are
        target = visible[position]
        if not self.store.swap(index, target):
            return
        self._focus_store_index(target)
        self._persist()

    # -------------------- editing mode --------------------
    def _field_limit(self, which: Field) -> int:
        if which == Field.NAME:
            return self.config.max_name_length
        return self.config.max_description_length

    def _handle_editing(self, pressed: str) -> None:
        action = keys.lookup(keys.EDIT_BINDINGS, pressed)
        form = self.form

        if action == Action.CANCEL:
            self.form = EditForm()
            self.mode = Mode.BROWSING
            self.status_msg = "Cancelled"
        elif action == Action.SWITCH_FIELD:
            form.focus = Field.DESCRIPTION if form.focus == Field.NAME else Field.NAME
        elif action == Action.BACKSPACE:
            if form.focus == Field.NAME:
                form.name = form.name[:-1]
            else:
                form.description = form.description[:-1]
        elif action == Action.SUBMIT:
            if form.focus == Field.NAME:
                form.focus = Field.DESCRIPTION
            else:
                self._submit_form()
        elif keys.is_text(pressed):
            if form.focus == Field.NAME:
                if len(form.name) < self._field_limit(Field.NAME):
                    form.name += pressed
            elif len(form.description) < self._field_limit(Field.DESCRIPTION):
                form.description += pressed

    def _submit_form(self) -> None:
        form = self.form
        name = form.name.strip()
        if not name:
            form.focus = Field.NAME
            self.status_msg = "Name required"
            return

        description = form.description.strip()
        if form.is_new:
            self.store.add(name, description)
            index = len(self.store) - 1
            self.status_msg = f"Added: {name[:STATUS_MSG_MAX_LEN]}"
        else:
            index = form.editing_index
            if not self.store.update(index, name, description):
                self.status_msg = "Todo no longer exists"
                index = None
            else:
                self.status_msg = f"Updated: {name[:STATUS_MSG_MAX_LEN]}"

        self.form = EditForm()
        self.mode = Mode.BROWSING
        if index is not None:
            self._focus_store_index(index)
            self._persist()
        else:
            self._clamp()

    # -------------------- info mode --------------------
    def _handle_info(self, pressed: str) -> None:
        action = keys.lookup(keys.INFO_BINDINGS, pressed)
        options = self.info.options

        if action == Action.CANCEL:
            self.mode = Mode.BROWSING
        elif action == Action.UP:
            self.info.selected = (self.info.selected - 1) % len(options)
        elif action == Action.DOWN:
            self.info.selected = (self.info.selected + 1) % len(options)
        elif action == Action.TOGGLE:
            option = options[self.info.selected]
            setattr(self, option.attribute, not getattr(self, option.attribute))
            self._clamp()

    def option_checked(self, option: Option) -> bool:
        return bool(getattr(self, option.attribute))

    # -------------------- main loop --------------------
    def run(self, terminal) -> None:
        """Drive the loop until quit; the terminal is released on every exit path."""
        with terminal:
            terminal.draw(render_app(self, terminal.size()))
            while not self.terminated:
                try:
                    pressed = terminal.next_event()
                except KeyboardInterrupt:
                    logger.info("Interrupted, quitting")
                    self.quit()
                    break
                self.handle_key(pressed)
                if not self.terminated:
                    terminal.draw(render_app(self, terminal.size()))
        logger.info(f"Session ended with {len(self.store)} items")
