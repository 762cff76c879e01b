"""
Module: duplex_cards.config

Purpose:
    Configuration dataclass for the sheet building pipeline. Immutable
    configuration with validation on construction.

Key Classes:
    - SheetConfig: Main configuration for building card sheets

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - duplex_cards.controller: Main build controller
    - duplex_cards.cli: Argument mapping
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from duplex_cards.layout.config import (
    DEFAULT_PAGE_CAPACITY,
    DEFAULT_ROW_WIDTH,
    FlipMode,
    LayoutConfig,
)


@dataclass(frozen=True)
class SheetConfig:
    """
    Configuration for building card sheets (immutable).

    Attributes:
        input_path: Deck JSON file
        pdf_path: PDF output file (optional)
        html_path: HTML output file for browser preview/printing (optional)
        template_path: Card template file; None uses the packaged default
        main_template_path: Outer document template; None uses the packaged default
        page_capacity: Cards per sheet side
        row_width: Cards per row
        flip_mode: Duplex flip edge; unknown values mean short edge
        landscape: Print sheets in landscape orientation
        margin_cm: Page margin in centimetres
        symbol_font_path: TrueType font for icons the standard PDF fonts
            cannot draw; None searches common system fonts
        write_metadata: Write build_metadata.json next to the outputs

    Example:
        >>> config = SheetConfig(
        ...     input_path=Path("decks/kpi.json"),
        ...     pdf_path=Path("out/kpi.pdf"),
        ...     flip_mode="long-edge",
        ... )
    """

    # Required
    input_path: Path

    # Outputs (at least one)
    pdf_path: Optional[Path] = None
    html_path: Optional[Path] = None

    # Templates
    template_path: Optional[Path] = None
    main_template_path: Optional[Path] = None

    # Layout
    page_capacity: int = DEFAULT_PAGE_CAPACITY
    row_width: int = DEFAULT_ROW_WIDTH
    flip_mode: Any = FlipMode.SHORT_EDGE

    # Paper
    landscape: bool = True
    margin_cm: float = 1.0
    symbol_font_path: Optional[Path] = None

    write_metadata: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.pdf_path is None and self.html_path is None:
            raise ValueError("At least one output (pdf_path or html_path) is required")
        if self.margin_cm < 0:
            raise ValueError(f"margin_cm must be non-negative: {self.margin_cm}")

    def layout_config(self) -> LayoutConfig:
        """
        Build the LayoutConfig for this run.

        Raises:
            InvalidParameterError: If the layout parameters are unusable
        """
        return LayoutConfig(
            page_capacity=self.page_capacity,
            row_width=self.row_width,
            flip_mode=self.flip_mode,
        )
