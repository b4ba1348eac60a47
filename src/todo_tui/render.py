"""Build the full-screen Rich renderable for the current app state.

Nothing here mutates the app; every frame is rebuilt from scratch.
Every table row, form field and the footer render at a fixed height, so
the window arithmetic below always keeps the cursor row and the footer
on screen.
"""

from typing import List, Tuple

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .keys import HELP_LINES
from .state import Field, Mode
from .theme import get_status_emoji, theme_styles

INFO_TEXT = "(a) add | (i) info | (esc) quit"
HIGHLIGHT_SYMBOL = " █ "
ELLIPSIS = "…"
DEFAULT_SIZE = (80, 24)
# title(1) + table header and rule(2) + footer panel(3)
RESERVED_ROWS = 6
# borders and padding around a form field: outer panel(4) + field panel(4)
FIELD_CHROME = 8
POPUP_ROWS = {Mode.EDITING: 9, Mode.INFO: 6 + len(HELP_LINES)}


def visible_window(selected: int, total: int, max_rows: int) -> Tuple[int, int]:
    """Return the [start, end) slice of rows to show, keeping ``selected`` in view."""
    if max_rows <= 0:
        return selected, min(selected + 1, total)
    if total <= max_rows:
        return 0, total
    start = max(0, min(selected - max_rows // 2, total - max_rows))
    return start, start + max_rows


def one_line(value: str) -> str:
    return " ".join(value.splitlines())


def tail(value: str, width: int) -> str:
    """The end of ``value`` that fits in ``width`` cells, marked when cut."""
    width = max(1, width)
    if len(value) <= width:
        return value
    return ELLIPSIS + value[-(width - 1):] if width > 1 else value[-1:]


def render_table(app, max_rows: int) -> Table:
    styles = theme_styles(app.palette)
    table = Table(
        box=box.SIMPLE_HEAD,
        expand=True,
        header_style=styles["header"],
        border_style=styles["border"],
        show_edge=False,
    )
    table.add_column("", width=len(HIGHLIGHT_SYMBOL), no_wrap=True)
    table.add_column("", width=3, no_wrap=True)
    table.add_column("Todo", ratio=2, no_wrap=True, overflow="ellipsis")
    table.add_column("Description", ratio=3, no_wrap=True, overflow="ellipsis")
    table.add_column("Status", width=8, no_wrap=True)
    table.add_column("Created", width=16, no_wrap=True)

    visible = app.visible()
    if not visible:
        message = "Nothing to do. Press (a) to add a todo." if not len(app.store) else "All todos are completed."
        table.add_row("", "", Text(message, style=styles["muted"], no_wrap=False, overflow="fold"), "", "", "")
        return table

    selected = app.cursor.clamp(len(visible))
    start, end = visible_window(selected, len(visible), max_rows)
    for row, store_index in enumerate(visible[start:end], start=start):
        item = app.store.items[store_index]
        is_selected = row == selected
        if is_selected:
            row_style = styles["row_selected"]
        else:
            row_style = styles["row_alt"] if row % 2 else styles["row"]
        status = Text("Done", style=styles["done"]) if item.done else Text("Pending", style=styles["pending"])
        text = Text(one_line(item.text), style="strike" if item.done else "")
        table.add_row(
            HIGHLIGHT_SYMBOL if is_selected else "",
            Text(get_status_emoji(item.done, app.config.use_emoji)),
            text,
            Text(one_line(item.description)),
            status,
            item.created.astimezone().strftime("%Y-%m-%d %H:%M"),
            style=row_style,
        )
    return table


def render_footer(app) -> Panel:
    styles = theme_styles(app.palette)
    pending, done = app.store.counts()
    parts: List[Text] = [Text(INFO_TEXT)]
    parts.append(Text(f"  {pending} pending, {done} done", style=styles["muted"]))
    if app.hide_completed:
        parts.append(Text("  (completed hidden)", style=styles["muted"]))
    if app.status_msg:
        parts.append(Text(f"  {app.status_msg}", style=styles["status"]))
    return Panel(
        Text.assemble(*parts, justify="center", no_wrap=True, overflow="ellipsis"),
        box=box.DOUBLE,
        border_style=styles["border"],
    )


def render_edit_popup(app, width: int = DEFAULT_SIZE[0]) -> Panel:
    styles = theme_styles(app.palette)
    form = app.form
    # one cell is kept for the text cursor
    room = width - FIELD_CHROME - 1

    def field_panel(title: str, value: str, which: Field, limit: int) -> Panel:
        focused = form.focus == which
        cursor = "▏" if focused else ""
        return Panel(
            Text(tail(one_line(value), room) + cursor, no_wrap=True, overflow="crop"),
            title=title,
            title_align="left",
            subtitle=f"{len(value)}/{limit}",
            subtitle_align="right",
            border_style=styles["border"] if focused else "white",
        )

    body = Group(
        field_panel("Name", form.name, Field.NAME, app.config.max_name_length),
        field_panel("Description", form.description, Field.DESCRIPTION,
                    app.config.max_description_length),
        Text("(tab) switch field | (enter) next / save | (esc) cancel",
             style=styles["muted"], no_wrap=True, overflow="ellipsis"),
    )
    title = "Add todo" if form.is_new else "Edit todo"
    return Panel(body, title=title, border_style=styles["border"], padding=(0, 1))


def render_info_popup(app) -> Panel:
    styles = theme_styles(app.palette)

    options = Table.grid(padding=(0, 3))
    for _ in app.info.options:
        options.add_column(no_wrap=True, overflow="ellipsis")
    cells = []
    for i, option in enumerate(app.info.options):
        mark = "[✔]" if app.option_checked(option) else "[ ]"
        style = styles["accent"] if i == app.info.selected else ""
        cells.append(Text(f"{mark} {option.label}", style=style))
    options.add_row(*cells)

    commands = Table.grid(padding=(0, 2))
    commands.add_column(style=styles["accent"], no_wrap=True)
    commands.add_column(no_wrap=True, overflow="ellipsis")
    for keys_label, description in HELP_LINES:
        commands.add_row(keys_label, description)

    body = Group(
        Text(f"palette: {app.palette.name}", style=styles["muted"], justify="center", no_wrap=True),
        options,
        Panel(commands, title="Commands", title_align="left", border_style=styles["border"]),
    )
    return Panel(body, title="todo-tui", border_style=styles["border"], padding=(0, 1))


def render_app(app, size: Tuple[int, int] = DEFAULT_SIZE) -> RenderableType:
    """Render the whole screen for ``app`` at the given (width, height)."""
    styles = theme_styles(app.palette)
    width, height = size
    popup_rows = POPUP_ROWS.get(app.mode, 0)
    max_rows = max(1, height - RESERVED_ROWS - popup_rows)

    parts: List[RenderableType] = [
        Text(" todo-tui ", style=styles["header"], no_wrap=True),
        render_table(app, max_rows),
    ]
    if app.mode == Mode.EDITING:
        parts.append(render_edit_popup(app, width))
    elif app.mode == Mode.INFO:
        parts.append(render_info_popup(app))
    parts.append(render_footer(app))
    return Group(*parts)
