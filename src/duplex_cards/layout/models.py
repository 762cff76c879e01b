"""
Module: duplex_cards.layout.models

Purpose:
    Data models for sheet layout.
    Immutable dataclasses representing cards, slots and sheets.

Key Classes:
    - Card: Card record loaded from a deck file
    - CardSlot: Slot holding one deck card
    - Placeholder: Empty slot padding a partial sheet
    - SheetPage: Front and back slot sequences of one sheet
    - LayoutResult: Final layout output

Key Functions:
    - split_rows(): Row view of a flat slot sequence

Dependencies:
    - dataclasses (std)

Used By:
    - duplex_cards.layout.paginator: Creates SheetPages
    - duplex_cards.templating: Renders slots
    - duplex_cards.output: Document and PDF rendering
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Tuple, Union

from .config import LayoutConfig

PLACEHOLDER_LABEL = "P"


@dataclass(frozen=True)
class Card:
    """
    A single card record (immutable).

    The layout engine never looks inside a card; only the loader and the
    renderers read ``fields``.

    Attributes:
        card_id: Stable identifier ("C1", "C2"... when the deck has no ids)
        fields: Card attributes by name (title, type, text, ...)
    """

    card_id: str
    fields: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str, default: str = "") -> str:
        """Return a field value, or default when absent."""
        return self.fields.get(name, default)


@dataclass(frozen=True)
class CardSlot:
    """
    A slot occupied by a deck card.

    Attributes:
        card: The caller's card record (opaque)
        deck_index: Position of the card in the original deck (0-indexed)
    """

    card: Any
    deck_index: int

    @property
    def is_placeholder(self) -> bool:
        return False

    @property
    def label(self) -> str:
        """Short label for previews and manifests."""
        card_id = getattr(self.card, "card_id", None)
        if card_id is None and isinstance(self.card, Mapping):
            card_id = self.card.get("id")
        return str(card_id) if card_id is not None else f"#{self.deck_index + 1}"


@dataclass(frozen=True)
class Placeholder:
    """An empty slot used to complete a partial sheet."""

    @property
    def is_placeholder(self) -> bool:
        return True

    @property
    def label(self) -> str:
        return PLACEHOLDER_LABEL


Slot = Union[CardSlot, Placeholder]


@dataclass(frozen=True)
class SheetPage:
    """
    Layout of one physical double-sided sheet.

    ``fronts`` and ``backs`` always have the same length (the sheet
    capacity) and hold the same slots, in mirrored order on the back.

    Attributes:
        index: Sheet number (0-indexed)
        fronts: Slots on the front side, row-major
        backs: Slots on the back side, row-major

    Example:
        >>> page.front_rows(4)
        ((CardSlot(...), ...), (...))
    """

    index: int
    fronts: Tuple[Slot, ...]
    backs: Tuple[Slot, ...]

    @property
    def card_count(self) -> int:
        """Number of real cards on this sheet."""
        return sum(1 for slot in self.fronts if not slot.is_placeholder)

    @property
    def placeholder_count(self) -> int:
        return len(self.fronts) - self.card_count

    def front_rows(self, row_width: int) -> Tuple[Tuple[Slot, ...], ...]:
        return split_rows(self.fronts, row_width)

    def back_rows(self, row_width: int) -> Tuple[Tuple[Slot, ...], ...]:
        return split_rows(self.backs, row_width)


def split_rows(slots: Sequence[Slot], row_width: int) -> Tuple[Tuple[Slot, ...], ...]:
    """Split a flat slot sequence into consecutive rows of row_width."""
    return tuple(
        tuple(slots[i:i + row_width])
        for i in range(0, len(slots), row_width)
    )


@dataclass(frozen=True)
class LayoutResult:
    """
    Final layout output.

    Attributes:
        pages: Tuple of SheetPages in deck order
        config: Layout configuration that produced the pages

    Example:
        >>> result = layout_deck(cards, LayoutConfig())
        >>> result.page_count
        2
    """

    pages: Tuple[SheetPage, ...]
    config: LayoutConfig

    @property
    def page_count(self) -> int:
        """Number of sheets in layout."""
        return len(self.pages)

    @property
    def card_count(self) -> int:
        """Total number of real cards across all sheets."""
        return sum(p.card_count for p in self.pages)
