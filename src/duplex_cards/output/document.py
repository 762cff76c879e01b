"""
Module: duplex_cards.output.document

Purpose:
    Assemble rendered card fragments into a printable HTML document.
    Each sheet contributes a front container followed by a back
    container, separated from the next sheet by page breaks.

Key Functions:
    - assemble_document(): Build the full HTML document
    - render_sheets(): Sheet containers only (no main template)
    - load_main_template(): Read the outer page template
    - write_html(): Write the document to disk

Dependencies:
    - duplex_cards.templating: Fragment rendering and substitution
    - duplex_cards.layout.models: LayoutResult

Used By:
    - duplex_cards.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from duplex_cards.layout.models import LayoutResult, SheetPage
from duplex_cards.loading import Deck
from duplex_cards.templating import (
    CardTemplates,
    TemplateError,
    read_template_file,
    render_back,
    render_front,
    substitute,
)
from duplex_cards.templating.templates import ASSETS_DIR

logger = logging.getLogger(__name__)

DEFAULT_MAIN_TEMPLATE = ASSETS_DIR / "main-template.html"
PAGE_BREAK_MARKUP = '<div class="page-break"></div>'
SHEETS_TOKEN = "SHEETS"
SHEETS_MARKER = "{{" + SHEETS_TOKEN + "}}"


def load_main_template(path: Optional[Path | str] = None) -> str:
    """
    Load the outer document template.

    Raises:
        TemplateError: If the file is missing or has no {{SHEETS}} token
    """
    path = Path(path) if path is not None else DEFAULT_MAIN_TEMPLATE
    text = read_template_file(path)
    if SHEETS_MARKER not in text.replace(" ", ""):
        raise TemplateError(f"Main template {path} has no {SHEETS_MARKER} marker", path=path)
    return text


def render_sheets(layout: LayoutResult, deck: Deck, templates: CardTemplates) -> str:
    """
    Render every sheet as front and back containers.

    Args:
        layout: Layout result from the paginator
        deck: Deck providing the back icon
        templates: Card templates

    Returns:
        HTML for all sheets, page-break separated
    """
    parts: List[str] = []
    for page in layout.pages:
        if parts:
            parts.append(PAGE_BREAK_MARKUP)
        parts.extend(_render_sheet(page, deck, templates))
    return "\n".join(parts)


def _render_sheet(page: SheetPage, deck: Deck, templates: CardTemplates) -> List[str]:
    fronts = "".join(render_front(slot, templates) for slot in page.fronts)
    backs = "".join(render_back(slot, templates, deck.back_icon) for slot in page.backs)
    sheet_no = page.index + 1
    return [
        f'<section class="sheet sheet-front" data-sheet="{sheet_no}">{fronts}</section>',
        PAGE_BREAK_MARKUP,
        f'<section class="sheet sheet-back" data-sheet="{sheet_no}">{backs}</section>',
    ]


def assemble_document(
    layout: LayoutResult,
    deck: Deck,
    templates: CardTemplates,
    main_template: Optional[str] = None,
) -> str:
    """
    Build the complete HTML document.

    Args:
        layout: Layout result from the paginator
        deck: Deck providing title, subtitle and back icon
        templates: Card templates
        main_template: Outer template text, or None for the packaged one

    Returns:
        Full HTML document
    """
    if main_template is None:
        main_template = load_main_template()

    if layout.page_count == 0:
        logger.warning("Empty layout, document will contain no sheets")

    document = substitute(
        main_template,
        {
            "TITLE": deck.title,
            "SUBTITLE": deck.subtitle,
            "ROW_WIDTH": layout.config.row_width,
        },
        markup={SHEETS_TOKEN: render_sheets(layout, deck, templates)},
    )
    logger.debug(f"Assembled HTML document with {layout.page_count} sheets")
    return document


def write_html(document: str, output_path: Path) -> None:
    """Write an assembled document as UTF-8."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document, encoding="utf-8")
    logger.info(f"Wrote HTML document to {output_path}")
