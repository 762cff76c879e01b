"""
Module: duplex_cards.loading.loader

Purpose:
    Load a card deck from its JSON description with schema validation.

Key Functions:
    - load_deck(): Read and parse a deck file
    - parse_deck(): Build a Deck from decoded JSON

Key Classes:
    - Deck: Deck-level attributes plus ordered cards
    - LoaderError: Exception for loading failures

Dependencies:
    - jsonschema (via duplex_cards.schemas): Deck validation
    - duplex_cards.layout.models: Card

Used By:
    - duplex_cards.controller: Main build controller
    - duplex_cards.cli: Layout preview
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple

from duplex_cards.layout.models import Card
from duplex_cards.schemas import validate_deck, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BACK_ICON = "❓"

# Deck files written for the first, Italian-language workshop decks
KEY_ALIASES = {
    "titolo": "title",
    "sottotitolo": "subtitle",
    "icona_esercizio": "back_icon",
    "carte": "cards",
}
CARD_FIELD_ALIASES = {
    "titolo": "title",
    "icona": "icon",
    "tipo": "type",
    "testo": "text",
    "classe": "class",
}


class LoaderError(Exception):
    """Error loading a deck file."""

    def __init__(self, message: str, path: Optional[Path] = None, errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


@dataclass(frozen=True)
class Deck:
    """
    A loaded deck (immutable).

    Attributes:
        cards: Cards in deck order
        title: Deck title for the printed document
        subtitle: Deck subtitle
        back_icon: Symbol printed on every card back
        source: File the deck was read from, if any
    """

    cards: Tuple[Card, ...]
    title: str = ""
    subtitle: str = ""
    back_icon: str = DEFAULT_BACK_ICON
    source: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index):
        return self.cards[index]


def load_deck(path: Path | str) -> Deck:
    """
    Load a deck from a JSON file.

    Args:
        path: Path to the deck JSON

    Returns:
        Parsed Deck

    Raises:
        LoaderError: If the file is missing, not JSON, or fails validation

    Example:
        >>> deck = load_deck("decks/kpi.json")
        >>> len(deck)
        24
    """
    path = Path(path)
    if not path.exists():
        raise LoaderError(f"Deck file not found: {path}", path=path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}", path=path) from e
    except OSError as e:
        raise LoaderError(f"Could not read {path}: {e}", path=path) from e

    deck = parse_deck(data, source=path)
    logger.info(f"Loaded {len(deck)} cards from {path}")
    return deck


def parse_deck(data: Any, source: Optional[Path] = None) -> Deck:
    """
    Build a Deck from decoded JSON.

    Italian keys (titolo, sottotitolo, icona_esercizio, carte) are
    accepted as aliases of the English ones.

    Args:
        data: Decoded deck JSON
        source: Originating file, for error messages

    Returns:
        Parsed Deck

    Raises:
        LoaderError: If data does not match the deck schema
    """
    if isinstance(data, dict):
        data = _apply_aliases(data, KEY_ALIASES)

    try:
        validate_deck(data)
    except ValidationError as e:
        where = f" in {source}" if source else ""
        raise LoaderError(f"Invalid deck{where}: {e}", path=source, errors=e.errors) from e

    cards = tuple(
        _parse_card(raw, position)
        for position, raw in enumerate(data["cards"], start=1)
    )

    back_icon = data.get("back_icon")
    return Deck(
        cards=cards,
        title=_as_text(data.get("title")),
        subtitle=_as_text(data.get("subtitle")),
        back_icon=DEFAULT_BACK_ICON if not back_icon else str(back_icon),
        source=source,
    )


def _apply_aliases(data: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    """Map alias keys onto English keys; English keys win on conflict."""
    result = dict(data)
    for alias, key in aliases.items():
        if alias in result:
            value = result.pop(alias)
            result.setdefault(key, value)
    return result


def _parse_card(raw: Dict[str, Any], position: int) -> Card:
    """Build a Card; cards without an id get C<position>."""
    raw = _apply_aliases(raw, CARD_FIELD_ALIASES)
    fields = {name: _as_text(value) for name, value in raw.items() if name != "id"}
    card_id = raw.get("id")
    if card_id is None or card_id == "":
        card_id = f"C{position}"
    return Card(card_id=str(card_id), fields=fields)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
