"""Tests for the in-memory item store."""

import random

from todo_tui.store import TodoList


def snapshot(todos):
    return [(item.text, item.done) for item in todos]


class TestAdd:
    def test_length_matches_number_of_adds(self):
        """Every add grows the list by exactly one."""
        todos = TodoList()
        for n in range(1, 25):
            todos.add(f"task {n}")
            assert len(todos) == n

    def test_add_appends_pending_item(self):
        todos = TodoList()
        item = todos.add("buy milk", "semi-skimmed")

        assert todos.items[-1] is item
        assert item.done is False
        assert item.description == "semi-skimmed"

    def test_duplicates_allowed(self):
        todos = TodoList()
        todos.add("same")
        todos.add("same")
        assert snapshot(todos) == [("same", False), ("same", False)]


class TestToggle:
    def test_toggle_twice_restores_state(self, store):
        """toggle is an involution."""
        before = snapshot(store)
        assert store.toggle(1)
        assert store.items[1].done
        assert store.toggle(1)
        assert snapshot(store) == before

    def test_out_of_range_is_noop(self, store):
        before = snapshot(store)
        assert store.toggle(3) is False
        assert store.toggle(-1) is False
        assert snapshot(store) == before

    def test_toggle_on_empty_list(self):
        assert TodoList().toggle(0) is False


class TestRemove:
    def test_remove_shifts_following_items(self, store):
        """Removing keeps the text/done pairing of the remaining items."""
        store.toggle(2)
        before = snapshot(store)

        removed = store.remove(1)

        assert removed.text == "buy milk"
        assert len(store) == 2
        assert snapshot(store) == [before[0], before[2]]

    def test_out_of_range_is_noop(self, store):
        assert store.remove(5) is None
        assert store.remove(-1) is None
        assert len(store) == 3

    def test_remove_on_empty_list(self):
        assert TodoList().remove(0) is None


class TestUpdateAndReorder:
    def test_update_keeps_done_and_created(self, store):
        store.toggle(0)
        created = store.items[0].created

        assert store.update(0, "write final report", "due friday")

        item = store.items[0]
        assert item.text == "write final report"
        assert item.description == "due friday"
        assert item.done
        assert item.created == created

    def test_update_out_of_range(self, store):
        assert store.update(9, "x") is False

    def test_move(self, store):
        assert store.move(0, 2) == 2
        assert [i.text for i in store] == ["buy milk", "call mom", "write report"]

    def test_move_out_of_range(self, store):
        assert store.move(0, -1) is None
        assert store.move(2, 1) is None
        assert [i.text for i in store] == ["write report", "buy milk", "call mom"]

    def test_swap(self, store):
        assert store.swap(0, 2)
        assert [i.text for i in store] == ["call mom", "buy milk", "write report"]
        assert store.swap(0, 3) is False


class TestQueries:
    def test_visible_indices(self, store):
        store.toggle(1)
        assert store.visible_indices() == [0, 1, 2]
        assert store.visible_indices(hide_completed=True) == [0, 2]

    def test_counts(self, store):
        store.toggle(0)
        assert store.counts() == (2, 1)

    def test_get(self, store):
        assert store.get(0).text == "write report"
        assert store.get(3) is None

    def test_dicts_roundtrip(self, store):
        store.toggle(2)
        restored = TodoList.from_dicts(store.to_dicts())
        assert snapshot(restored) == snapshot(store)


def test_buy_milk_scenario():
    """empty -> add -> toggle -> remove."""
    todos = TodoList()
    todos.add("buy milk")
    assert snapshot(todos) == [("buy milk", False)]
    todos.toggle(0)
    assert snapshot(todos) == [("buy milk", True)]
    todos.remove(0)
    assert snapshot(todos) == []


def test_random_operations_never_raise():
    """Arbitrary indices, valid or not, never raise and keep the length consistent."""
    rng = random.Random(1234)
    todos = TodoList()
    expected = 0
    for _ in range(500):
        op = rng.choice(["add", "toggle", "remove", "move"])
        index = rng.randint(-2, expected + 2)
        if op == "add":
            todos.add("t")
            expected += 1
        elif op == "toggle":
            todos.toggle(index)
        elif op == "remove":
            if todos.remove(index) is not None:
                expected -= 1
        else:
            todos.move(index, rng.choice([-1, 1]))
        assert len(todos) == expected
