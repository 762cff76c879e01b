"""
Module: duplex_cards.layout

Purpose:
    Sheet layout engine for duplex card printing.
    Converts an ordered deck into sheets of front/back slot sequences.

Key Functions:
    - paginate(): Arrange cards onto sheets
    - layout_deck(): Arrange cards using a LayoutConfig
    - mirror_back(): Back-side order for one sheet

Key Classes:
    - LayoutConfig: Configuration for sheet layout
    - FlipMode: Duplex flip edge
    - SheetPage: Single sheet layout
    - LayoutResult: Complete layout

Used By:
    - duplex_cards.controller: Main build controller
"""

from .config import (
    DEFAULT_PAGE_CAPACITY,
    DEFAULT_ROW_WIDTH,
    FlipMode,
    InvalidParameterError,
    LayoutConfig,
)
from .models import Card, CardSlot, Placeholder, Slot, SheetPage, LayoutResult, split_rows
from .paginator import paginate, layout_deck, mirror_back

__all__ = [
    # Config
    "DEFAULT_PAGE_CAPACITY",
    "DEFAULT_ROW_WIDTH",
    "FlipMode",
    "InvalidParameterError",
    "LayoutConfig",
    # Models
    "Card",
    "CardSlot",
    "Placeholder",
    "Slot",
    "SheetPage",
    "LayoutResult",
    # Functions
    "paginate",
    "layout_deck",
    "mirror_back",
    "split_rows",
]
