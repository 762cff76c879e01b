"""
Module: duplex_cards.layout.paginator

Purpose:
    Split a deck into fixed-size sheets and derive the mirrored back
    side of each sheet so that every card's back prints behind its front
    after the sheet is flipped.

Key Functions:
    - paginate(): Main pagination function (plain parameters)
    - layout_deck(): Same, driven by a LayoutConfig
    - mirror_back(): Back-side slot order for one front sequence

Algorithm:
    1. Chunk the deck into groups of page_capacity cards, in order
    2. Pad the last chunk with Placeholders to page_capacity
    3. Split the fronts into rows of row_width slots
    4. Short edge: reverse the slots within each row
       Long edge: reverse the order of the rows
    5. Flatten the rows to get the back sequence

Dependencies:
    - duplex_cards.layout.models: CardSlot, Placeholder, SheetPage
    - duplex_cards.layout.config: LayoutConfig, FlipMode

Used By:
    - duplex_cards.controller: Main build controller
    - duplex_cards.cli: Layout preview
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence, Tuple

from .config import (
    DEFAULT_PAGE_CAPACITY,
    DEFAULT_ROW_WIDTH,
    FlipMode,
    LayoutConfig,
)
from .models import CardSlot, LayoutResult, Placeholder, SheetPage, Slot, split_rows

logger = logging.getLogger(__name__)


def paginate(
    deck: Sequence[Any],
    page_capacity: int = DEFAULT_PAGE_CAPACITY,
    row_width: int = DEFAULT_ROW_WIDTH,
    flip_mode: Any = FlipMode.SHORT_EDGE,
) -> List[SheetPage]:
    """
    Arrange deck cards onto double-sided sheets.

    Args:
        deck: Ordered cards (any objects; they are not inspected)
        page_capacity: Card slots per sheet side
        row_width: Card slots per row
        flip_mode: "short-edge" or "long-edge" (case-insensitive);
            anything else is treated as "short-edge"

    Returns:
        One SheetPage per ceil(len(deck) / page_capacity) chunk.
        Empty deck gives an empty list.

    Raises:
        InvalidParameterError: If page_capacity/row_width are not positive
            integers or row_width does not divide page_capacity

    Example:
        >>> pages = paginate(cards[:8])
        >>> [s.label for s in pages[0].backs]
        ['C4', 'C3', 'C2', 'C1', 'C8', 'C7', 'C6', 'C5']
    """
    config = LayoutConfig(
        page_capacity=page_capacity,
        row_width=row_width,
        flip_mode=flip_mode,
    )
    return list(layout_deck(deck, config).pages)


def layout_deck(deck: Sequence[Any], config: LayoutConfig) -> LayoutResult:
    """
    Arrange deck cards onto sheets using an explicit configuration.

    Args:
        deck: Ordered cards
        config: Layout configuration

    Returns:
        LayoutResult with one SheetPage per chunk
    """
    cards = list(deck)
    capacity = config.page_capacity
    pages: List[SheetPage] = []

    for page_index, start in enumerate(range(0, len(cards), capacity)):
        chunk = cards[start:start + capacity]
        fronts: List[Slot] = [
            CardSlot(card=card, deck_index=start + offset)
            for offset, card in enumerate(chunk)
        ]
        fronts.extend(Placeholder() for _ in range(capacity - len(chunk)))

        backs = mirror_back(fronts, config.row_width, config.flip_mode)
        pages.append(SheetPage(index=page_index, fronts=tuple(fronts), backs=backs))

        if len(chunk) < capacity:
            logger.debug(
                f"Sheet {page_index} padded with {capacity - len(chunk)} placeholders"
            )

    logger.info(
        f"Paginated {len(cards)} cards onto {len(pages)} sheets "
        f"({config.rows_per_page}x{config.row_width}, {config.flip_mode.value})"
    )

    return LayoutResult(pages=tuple(pages), config=config)


def mirror_back(
    fronts: Sequence[Slot],
    row_width: int,
    flip_mode: Any = FlipMode.SHORT_EDGE,
) -> Tuple[Slot, ...]:
    """
    Derive the back-side slot order for a padded front sequence.

    Args:
        fronts: Front slots, row-major, length a multiple of row_width
        row_width: Slots per row
        flip_mode: Flip edge (normalized via FlipMode.parse)

    Returns:
        Back slots, row-major
    """
    mode = FlipMode.parse(flip_mode)
    rows = split_rows(fronts, row_width)

    if mode is FlipMode.LONG_EDGE:
        mirrored = rows[::-1]
    else:
        mirrored = tuple(row[::-1] for row in rows)

    return tuple(slot for row in mirrored for slot in row)
