"""Sliding-tile puzzle solver: board parsing, A* search and a curses animation."""

__version__ = "0.1.0"
__all__ = ["board", "solver", "cli"]