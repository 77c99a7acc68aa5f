"""Dayboard - task board with drag-and-drop reordering."""

__version__ = "0.1.0"
