"""
Module: duplex_cards.layout.config

Purpose:
    Configuration for the sheet layout engine.
    Defines sheet capacity, row width and the duplex flip edge.

Key Classes:
    - FlipMode: Physical edge the sheet is turned over on
    - LayoutConfig: Immutable layout configuration
    - InvalidParameterError: Raised for unusable numeric parameters

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - duplex_cards.layout.paginator: Sheet arrangement
    - duplex_cards.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


# Two rows of four cards on an A4 landscape sheet
DEFAULT_PAGE_CAPACITY = 8
DEFAULT_ROW_WIDTH = 4


class InvalidParameterError(ValueError):
    """Layout parameters that cannot describe a sheet grid."""
    pass


class FlipMode(str, Enum):
    """
    Edge along which a printed sheet is turned over for duplex printing.

    SHORT_EDGE keeps rows in place and mirrors each row left-to-right.
    LONG_EDGE swaps the rows top-to-bottom and keeps each row's order.
    """

    SHORT_EDGE = "short-edge"
    LONG_EDGE = "long-edge"

    @classmethod
    def parse(cls, value: Any) -> "FlipMode":
        """
        Normalize a user supplied flip mode.

        Matching is case-insensitive. Anything unrecognized (None, empty
        string, typos, non-strings) falls back to SHORT_EDGE.

        Example:
            >>> FlipMode.parse("LONG-EDGE")
            <FlipMode.LONG_EDGE: 'long-edge'>
            >>> FlipMode.parse("sideways")
            <FlipMode.SHORT_EDGE: 'short-edge'>
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for mode in cls:
                if mode.value == normalized:
                    return mode
        logger.debug(f"Unrecognized flip mode {value!r}, using {cls.SHORT_EDGE.value}")
        return cls.SHORT_EDGE


def _require_positive_int(name: str, value: Any) -> None:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an integer: {value!r}")
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive: {value}")


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for sheet layout (immutable).

    Attributes:
        page_capacity: Card slots per sheet side
        row_width: Card slots per printed row
        flip_mode: Duplex flip edge (any value is normalized via FlipMode.parse)

    Raises:
        InvalidParameterError: If page_capacity or row_width is not a
            positive integer, or row_width does not divide page_capacity

    Example:
        >>> config = LayoutConfig(page_capacity=9, row_width=3)
        >>> config.rows_per_page
        3
    """

    page_capacity: int = DEFAULT_PAGE_CAPACITY
    row_width: int = DEFAULT_ROW_WIDTH
    flip_mode: FlipMode = FlipMode.SHORT_EDGE

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        _require_positive_int("page_capacity", self.page_capacity)
        _require_positive_int("row_width", self.row_width)
        if self.page_capacity % self.row_width != 0:
            raise InvalidParameterError(
                f"row_width {self.row_width} does not divide page_capacity {self.page_capacity}"
            )
        # Frozen: normalize through object.__setattr__
        object.__setattr__(self, "flip_mode", FlipMode.parse(self.flip_mode))

    @property
    def rows_per_page(self) -> int:
        """Number of card rows on each sheet side."""
        return self.page_capacity // self.row_width
