"""Allow ``python -m todo_tui``."""

from .cli import main

if __name__ == "__main__":
    main()
