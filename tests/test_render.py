"""Tests for screen rendering."""

import io

import pytest
from rich.console import Console

from todo_tui.app import App
from todo_tui.config import ConfigModel
from todo_tui.render import render_app, tail, visible_window
from todo_tui.store import TodoList


def render_text(app, size=(160, 40)):
    console = Console(file=io.StringIO(), width=size[0], record=True, color_system=None)
    console.print(render_app(app, size))
    return console.export_text()


class TestVisibleWindow:
    @pytest.mark.parametrize("selected,total,rows,expected", [
        (0, 5, 10, (0, 5)),
        (0, 50, 10, (0, 10)),
        (25, 50, 10, (20, 30)),
        (49, 50, 10, (40, 50)),
    ])
    def test_window(self, selected, total, rows, expected):
        assert visible_window(selected, total, rows) == expected

    def test_selected_always_inside(self):
        for selected in range(30):
            start, end = visible_window(selected, 30, 7)
            assert start <= selected < end


class TestRenderApp:
    def test_empty_list(self):
        text = render_text(App())
        assert "Nothing to do" in text
        assert "0 pending, 0 done" in text

    def test_items_and_counts(self, store):
        store.toggle(1)
        text = render_text(App(store))

        assert "write report" in text
        assert "buy milk" in text
        assert "2 pending, 1 done" in text
        assert "Done" in text
        assert "Pending" in text

    def test_hidden_completed_items_not_drawn(self, store):
        store.toggle(1)
        app = App(store)
        app.handle_key("t")
        text = render_text(app)

        assert "buy milk" not in text
        assert "completed hidden" in text

    def test_all_completed_and_hidden(self):
        todos = TodoList()
        todos.add("only")
        todos.toggle(0)
        app = App(todos, ConfigModel(hide_completed=True))
        assert "All todos are completed" in render_text(app)

    def test_edit_popup(self):
        app = App()
        app.handle_key("a")
        for pressed in "ahoy":
            app.handle_key(pressed)
        text = render_text(app)

        assert app.form.name == "ahoy"
        assert "Add todo" in text
        assert "Name" in text
        assert "ahoy" in text
        assert "4/50" in text

    def test_info_popup(self):
        app = App(config=ConfigModel(lock_color=True))
        app.handle_key("i")
        text = render_text(app)

        assert "[✔] Lock color" in text
        assert "[ ] Hide completed" in text
        assert "Commands" in text

    def test_status_message_in_footer(self, store):
        app = App(store)
        app.handle_key("x")
        assert "Deleted: write report" in render_text(app)

    def test_long_list_is_windowed(self):
        todos = TodoList()
        for n in range(100):
            todos.add(f"item-{n:03d}")
        app = App(todos)
        for _ in range(60):
            app.handle_key("j")
        text = render_text(app, size=(160, 30))

        assert "item-060" in text
        assert "item-000" not in text
        assert "item-099" not in text

    def test_plain_markers_without_emoji(self, store):
        text = render_text(App(store, ConfigModel(use_emoji=False)))
        assert "[ ]" in text


def line_count(text):
    return len(text.rstrip("\n").split("\n"))


class TestFixedHeight:
    """Long names and descriptions never push rows or the footer off screen."""

    @pytest.fixture
    def long_list(self):
        todos = TodoList()
        for n in range(30):
            todos.add(f"item-{n:03d}", "d" * 255)
        return todos

    def test_long_descriptions_fit_the_screen(self, long_list):
        app = App(long_list)
        for _ in range(10):
            app.handle_key("j")
        text = render_text(app, size=(100, 24))

        assert line_count(text) <= 24
        assert "item-010" in text
        assert "30 pending, 0 done" in text

    def test_multiline_description_stays_on_one_row(self):
        todos = TodoList()
        todos.add("first", "line one\nline two\nline three")
        todos.add("second")
        text = render_text(App(todos), size=(100, 24))

        assert "line one line two" in text
        assert line_count(text) == 1 + 2 + 2 + 3

    def test_edit_popup_with_long_description(self, long_list):
        app = App(long_list)
        app.handle_key("a")
        app.handle_key("\t")
        for _ in range(255):
            app.handle_key("z")
        text = render_text(app, size=(80, 24))

        assert line_count(text) <= 24
        assert "255/255" in text
        assert "0 done" in text

    def test_info_popup_fits(self, long_list):
        app = App(long_list)
        app.handle_key("i")
        text = render_text(app, size=(80, 24))

        assert line_count(text) <= 24
        assert "Commands" in text
        assert "0 done" in text

    def test_tail_keeps_the_end(self):
        assert tail("abcdef", 10) == "abcdef"
        assert tail("abcdef", 4) == "…def"
