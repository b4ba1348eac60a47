"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from todo_tui.config import Config, ConfigModel  # noqa: E402
from todo_tui.store import TodoList  # noqa: E402


class FakeTerminal:
    """Scripted stand-in for the terminal handle.

    Keys are fed from a list; an exception instance or class in the list is
    raised instead of returned. Running out of keys raises KeyboardInterrupt,
    as Ctrl-C would.
    """

    def __init__(self, keys=(), size=(160, 40)):
        self.keys = list(keys)
        self.frames = []
        self.acquire_count = 0
        self.release_count = 0
        self.active = False
        self._size = size

    def __enter__(self):
        self.acquire_count += 1
        self.active = True
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.active:
            self.active = False
            self.release_count += 1

    def size(self):
        return self._size

    def draw(self, renderable):
        assert self.active, "draw() outside of an acquired terminal"
        self.frames.append(renderable)

    def next_event(self):
        if not self.keys:
            raise KeyboardInterrupt
        pressed = self.keys.pop(0)
        if isinstance(pressed, BaseException) or (
            isinstance(pressed, type) and issubclass(pressed, BaseException)
        ):
            raise pressed
        return pressed


@pytest.fixture(autouse=True)
def reset_config():
    """Each test starts without a cached configuration."""
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def tmp_config(tmp_path):
    return ConfigModel(data_dir=str(tmp_path))


@pytest.fixture
def store():
    todos = TodoList()
    for text in ("write report", "buy milk", "call mom"):
        todos.add(text)
    return todos


@pytest.fixture
def fake_terminal():
    def factory(keys=(), **kwargs):
        return FakeTerminal(keys, **kwargs)
    return factory
