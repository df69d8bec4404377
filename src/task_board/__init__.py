"""Task tracking board: SQLite store, JSON API and an optimistic console view."""

__version__ = "1.0.0"
