"""
Loading Package

Deck ingest from JSON files.
"""

from .loader import Deck, LoaderError, load_deck, parse_deck, DEFAULT_BACK_ICON

__all__ = [
    "Deck",
    "LoaderError",
    "load_deck",
    "parse_deck",
    "DEFAULT_BACK_ICON",
]
