"""BookBound: a personal reading-pace planner."""

__version__ = "0.1.0"
