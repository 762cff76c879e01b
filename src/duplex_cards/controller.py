"""
Module: duplex_cards.controller

Purpose:
    Orchestrate the complete sheet building pipeline.
    Load → Paginate → Render fragments → Assemble HTML → Render PDF

Key Functions:
    - build_sheets(): Main entry point for building card sheets

Key Classes:
    - BuildResult: Complete build result
    - BuildError: Exception for build failures

Dependencies:
    - duplex_cards.loading: Deck loading
    - duplex_cards.layout: Sheet pagination
    - duplex_cards.templating: Card templates
    - duplex_cards.output: HTML and PDF rendering

Used By:
    - duplex_cards.cli: Command line interface
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from reportlab.lib.units import cm

from .config import SheetConfig
from .layout import InvalidParameterError, LayoutResult, layout_deck
from .loading import Deck, LoaderError, load_deck
from .output import assemble_document, load_main_template, render_to_pdf, write_html
from .templating import TemplateError, load_templates

logger = logging.getLogger(__name__)

METADATA_FILENAME = "build_metadata.json"


class BuildError(Exception):
    """Error during build pipeline."""
    pass


@dataclass(frozen=True)
class BuildResult:
    """
    Complete build result (immutable).

    Attributes:
        deck: Loaded deck
        layout: Sheet layout
        pdf_path: Path to generated PDF (if requested)
        html_path: Path to generated HTML (if requested)
        metadata_path: Path to build_metadata.json (if requested)
        warnings: Any warnings during build

    Example:
        >>> result = build_sheets(config)
        >>> print(f"Printed {result.card_count} cards on {result.page_count} sheets")
    """

    deck: Deck
    layout: LayoutResult
    pdf_path: Optional[Path] = None
    html_path: Optional[Path] = None
    metadata_path: Optional[Path] = None
    warnings: tuple[str, ...] = ()

    @property
    def page_count(self) -> int:
        """Number of physical sheets."""
        return self.layout.page_count

    @property
    def card_count(self) -> int:
        return self.layout.card_count


def build_sheets(config: SheetConfig) -> BuildResult:
    """
    Build card sheets from start to finish.

    Pipeline:
    1. Load deck JSON
    2. Paginate cards onto sheets with mirrored backs
    3. (Optional) Render and write the HTML document
    4. (Optional) Render the PDF
    5. (Optional) Write build metadata

    Args:
        config: Build configuration

    Returns:
        BuildResult with paths and layout

    Raises:
        BuildError: If any step fails

    Example:
        >>> config = SheetConfig(input_path=Path("deck.json"), pdf_path=Path("out/deck.pdf"))
        >>> result = build_sheets(config)
        >>> print(f"Generated {result.page_count} sheets")
    """
    warnings: List[str] = []
    start_time = time.perf_counter()

    logger.info(f"Starting build for {config.input_path}")

    # 1. Load deck
    try:
        deck = load_deck(config.input_path)
    except LoaderError as e:
        raise BuildError(f"Failed to load deck: {e}") from e

    if len(deck) == 0:
        warnings.append("Deck has no cards")
        logger.warning(f"Deck {config.input_path} has no cards")

    # 2. Paginate
    try:
        layout = layout_deck(deck.cards, config.layout_config())
    except InvalidParameterError as e:
        raise BuildError(f"Invalid layout parameters: {e}") from e

    # 3. HTML document
    html_path = None
    if config.html_path is not None:
        html_path = Path(config.html_path)
        try:
            templates = load_templates(config.template_path)
            main_template = load_main_template(config.main_template_path)
        except TemplateError as e:
            raise BuildError(f"Template configuration error: {e}") from e
        document = assemble_document(layout, deck, templates, main_template)
        try:
            write_html(document, html_path)
        except OSError as e:
            raise BuildError(f"Failed to write HTML: {e}") from e

    # 4. PDF
    pdf_path = None
    if config.pdf_path is not None:
        pdf_path = Path(config.pdf_path)
        try:
            render_to_pdf(
                layout,
                deck,
                pdf_path,
                landscape=config.landscape,
                margin_pt=config.margin_cm * cm,
                symbol_font=config.symbol_font_path,
            )
        except (OSError, ValueError) as e:
            raise BuildError(f"Failed to render PDF: {e}") from e

    # 5. Metadata
    metadata_path = None
    if config.write_metadata:
        output_dir = (pdf_path or html_path).parent
        metadata_path = output_dir / METADATA_FILENAME
        _write_metadata(metadata_path, _build_metadata(config, deck, layout))
        logger.info(f"Wrote build metadata to {metadata_path}")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Built {layout.page_count} sheets in {elapsed:.2f}s")

    return BuildResult(
        deck=deck,
        layout=layout,
        pdf_path=pdf_path,
        html_path=html_path,
        metadata_path=metadata_path,
        warnings=tuple(warnings),
    )


def _build_metadata(config: SheetConfig, deck: Deck, layout: LayoutResult) -> dict:
    """
    Build metadata dictionary for a run.

    The manifest lists the slot labels of every sheet side, "P" marking
    placeholders, so a print shop can check back alignment without
    opening the PDF.

    Example:
        >>> _build_metadata(config, deck, layout)["manifest"][0]["backs"]
        ['C4', 'C3', 'C2', 'C1', 'C8', 'C7', 'C6', 'C5']
    """
    layout_config = layout.config
    return {
        "generated_at": datetime.now().isoformat(),
        "input": str(config.input_path),
        "title": deck.title,
        "card_count": layout.card_count,
        "page_count": layout.page_count,
        "page_capacity": layout_config.page_capacity,
        "row_width": layout_config.row_width,
        "flip_mode": layout_config.flip_mode.value,
        "pdf": str(config.pdf_path) if config.pdf_path else None,
        "html": str(config.html_path) if config.html_path else None,
        "manifest": [
            {
                "sheet": page.index + 1,  # 1-indexed for humans
                "fronts": [slot.label for slot in page.fronts],
                "backs": [slot.label for slot in page.backs],
            }
            for page in layout.pages
        ],
    }


def _write_metadata(metadata_path: Path, metadata: dict) -> None:
    """
    Write metadata JSON file.

    Raises:
        BuildError: If writing fails
    """
    try:
        metadata_path.parent.mkdir(parents=True, exist_ok=True)
        with open(metadata_path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise BuildError(f"Failed to write metadata: {e}") from e
