"""Shared helpers for todo-tui."""
