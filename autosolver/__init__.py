"""Lesson autosolver: translation-backed exercise solving."""

__version__ = "1.0.0"
