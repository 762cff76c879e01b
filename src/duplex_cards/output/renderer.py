"""
Module: duplex_cards.output.renderer

Purpose:
    Render a LayoutResult to a print-ready PDF using ReportLab.
    Every sheet becomes two PDF pages: the front side, then the back
    side, with card cells on identical grid coordinates so that duplex
    printing lines each back up behind its front.

Key Functions:
    - render_to_pdf(): Main rendering function
    - grid_cells(): Cell rectangles for one sheet side

Dependencies:
    - reportlab: PDF generation
    - PIL: Card artwork
    - duplex_cards.output.fonts: Symbol font selection for icons
    - duplex_cards.layout.models: LayoutResult, SheetPage

Used By:
    - duplex_cards.controller: Pipeline orchestration
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image
from reportlab.lib.pagesizes import A4, landscape as to_landscape, portrait as to_portrait
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from duplex_cards.layout.models import LayoutResult, SheetPage, Slot
from duplex_cards.loading import Deck
from duplex_cards.output.fonts import FontPicker, find_symbol_fonts, load_symbol_font

logger = logging.getLogger(__name__)

# Constants
DEFAULT_MARGIN_PT = 1 * cm
CELL_GAP_PT = 0.4 * cm
CELL_PADDING_PT = 0.3 * cm

TITLE_FONT = "Helvetica-Bold"
BODY_FONT = "Helvetica"
FLAVOR_FONT = "Helvetica-Oblique"
HEADER_FONT_SIZE = 14
TITLE_FONT_SIZE = 12
BODY_FONT_SIZE = 8
BACK_ICON_FONT_SIZE = 36
FOOTER_FONT_SIZE = 6

Rect = Tuple[float, float, float, float]  # x, y (bottom-left), width, height


def render_to_pdf(
    layout: LayoutResult,
    deck: Deck,
    output_path: Path,
    *,
    page_size: Tuple[float, float] = A4,
    landscape: bool = True,
    margin_pt: float = DEFAULT_MARGIN_PT,
    show_outlines: bool = True,
    show_footer: bool = True,
    symbol_font: Optional[Path] = None,
) -> int:
    """
    Render layout result to PDF file.

    Args:
        layout: Layout result from paginator
        deck: Deck providing back icon and card base directory
        output_path: Path to write PDF
        page_size: Paper size in points (default A4)
        landscape: Rotate paper to landscape (default True)
        margin_pt: Page margin in points (default 1cm)
        show_outlines: Draw card borders as cutting guides
        show_footer: Print sheet number and side in the bottom margin
        symbol_font: TrueType font tried first for icons and other text
            the standard PDF fonts cannot encode

    Returns:
        Number of PDF pages written (2 per sheet)

    Raises:
        OSError: If PDF cannot be written
        ValueError: If the margins leave no room for the grid, or
            symbol_font cannot be loaded

    Example:
        >>> render_to_pdf(layout, deck, Path("out/cards.pdf"))
        4
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    size = to_landscape(page_size) if landscape else to_portrait(page_size)
    page_width_pt, page_height_pt = size
    cells = grid_cells(
        page_width_pt,
        page_height_pt,
        rows=layout.config.rows_per_page,
        columns=layout.config.row_width,
        margin_pt=margin_pt,
    )
    base_dir = deck.source.parent if deck.source else Path.cwd()
    picker = _font_picker(symbol_font)

    c = canvas.Canvas(str(output_path), pagesize=size)
    c.setTitle(deck.title or "Cards")

    pdf_pages = 0
    for page in layout.pages:
        _render_side(c, page, page.fronts, cells, deck, base_dir, picker, is_back=False, show_outlines=show_outlines)
        if show_footer:
            _draw_footer(c, page, "front", page_width_pt, margin_pt)
        c.showPage()

        _render_side(c, page, page.backs, cells, deck, base_dir, picker, is_back=True, show_outlines=show_outlines)
        if show_footer:
            _draw_footer(c, page, "back", page_width_pt, margin_pt)
        c.showPage()
        pdf_pages += 2

    if pdf_pages == 0:
        logger.warning("Empty layout, creating PDF with a single blank page")
        c.showPage()
        pdf_pages = 1

    c.save()

    logger.info(f"Rendered {layout.page_count} sheets ({pdf_pages} pages) to {output_path}")
    return pdf_pages


def grid_cells(
    page_width_pt: float,
    page_height_pt: float,
    *,
    rows: int,
    columns: int,
    margin_pt: float = DEFAULT_MARGIN_PT,
    gap_pt: float = CELL_GAP_PT,
) -> List[Rect]:
    """
    Compute card cell rectangles, row-major from the top-left.

    Returns:
        rows * columns rectangles in slot order

    Raises:
        ValueError: If margins and gaps leave no room for cells
    """
    usable_width = page_width_pt - 2 * margin_pt - (columns - 1) * gap_pt
    usable_height = page_height_pt - 2 * margin_pt - (rows - 1) * gap_pt
    if usable_width <= 0 or usable_height <= 0:
        raise ValueError("Margins exceed page size")

    cell_width = usable_width / columns
    cell_height = usable_height / rows

    cells: List[Rect] = []
    for row in range(rows):
        # PDF origin is bottom-left; row 0 is the top row
        y = page_height_pt - margin_pt - (row + 1) * cell_height - row * gap_pt
        for col in range(columns):
            x = margin_pt + col * (cell_width + gap_pt)
            cells.append((x, y, cell_width, cell_height))
    return cells


def _render_side(
    c: canvas.Canvas,
    page: SheetPage,
    slots: Tuple[Slot, ...],
    cells: List[Rect],
    deck: Deck,
    base_dir: Path,
    picker: FontPicker,
    *,
    is_back: bool,
    show_outlines: bool,
) -> None:
    """Draw one side of a sheet; placeholder cells stay blank."""
    for slot, cell in zip(slots, cells):
        if slot.is_placeholder:
            continue
        if show_outlines:
            _draw_outline(c, cell)
        if is_back:
            _draw_card_back(c, slot, cell, deck.back_icon, picker)
        else:
            _draw_card_front(c, slot, cell, base_dir, picker)

    logger.debug(
        f"Drew sheet {page.index} {'back' if is_back else 'front'} "
        f"({page.card_count} cards)"
    )


def _draw_outline(c: canvas.Canvas, cell: Rect) -> None:
    x, y, w, h = cell
    c.saveState()
    c.setLineWidth(0.5)
    c.setStrokeColorRGB(0.6, 0.6, 0.6)
    c.roundRect(x, y, w, h, radius=0.3 * cm, stroke=1, fill=0)
    c.restoreState()


def _card_field(card, name: str) -> str:
    fields = getattr(card, "fields", None)
    if fields is None and isinstance(card, dict):
        fields = card
    return str((fields or {}).get(name) or "")


def _font_picker(symbol_font: Optional[Path]) -> FontPicker:
    """Symbol fonts for this render, the explicit one first."""
    symbol_fonts = find_symbol_fonts()
    if symbol_font is not None:
        font = load_symbol_font(symbol_font)
        if font is None:
            raise ValueError(f"Cannot load font: {symbol_font}")
        symbol_fonts.insert(0, font)
    return FontPicker(symbol_fonts)


def _draw_card_front(
    c: canvas.Canvas,
    slot: Slot,
    cell: Rect,
    base_dir: Path,
    picker: FontPicker,
) -> None:
    """
    Draw card front text and optional artwork.

    Layout, top to bottom: icon and emoji header, title, type, artwork,
    text, flavor.
    """
    x, y, w, h = cell
    card = slot.card
    left = x + CELL_PADDING_PT
    inner_w = w - 2 * CELL_PADDING_PT
    cursor = y + h - CELL_PADDING_PT

    cursor = _draw_header(c, _card_field(card, "icon"), _card_field(card, "emoji"), left, cursor, inner_w, picker)
    cursor = _draw_wrapped(c, _card_field(card, "title"), left, cursor, inner_w, TITLE_FONT, TITLE_FONT_SIZE, picker)
    cursor = _draw_wrapped(c, _card_field(card, "type"), left, cursor, inner_w, BODY_FONT, BODY_FONT_SIZE, picker)

    image_name = _card_field(card, "image")
    if image_name:
        cursor = _draw_image(c, base_dir / image_name, left, cursor, inner_w, h / 3)

    cursor = _draw_wrapped(c, _card_field(card, "text"), left, cursor, inner_w, BODY_FONT, BODY_FONT_SIZE, picker)
    _draw_wrapped(c, _card_field(card, "flavor"), left, cursor, inner_w, FLAVOR_FONT, BODY_FONT_SIZE, picker)


def _draw_header(
    c: canvas.Canvas,
    icon: str,
    emoji: str,
    x: float,
    top: float,
    width: float,
    picker: FontPicker,
) -> float:
    """Draw icon at the left and emoji at the right of the header row."""
    if not icon and not emoji:
        return top
    baseline = top - HEADER_FONT_SIZE
    c.saveState()
    if icon:
        font, text = picker.pick(icon, BODY_FONT)
        c.setFont(font, HEADER_FONT_SIZE)
        c.drawString(x, baseline, text)
    if emoji:
        font, text = picker.pick(emoji, BODY_FONT)
        c.setFont(font, HEADER_FONT_SIZE)
        c.drawRightString(x + width, baseline, text)
    c.restoreState()
    return baseline - HEADER_FONT_SIZE * 0.4


def _draw_card_back(
    c: canvas.Canvas,
    slot: Slot,
    cell: Rect,
    back_icon: str,
    picker: FontPicker,
) -> None:
    """Draw the deck back icon centered, with the card class underneath."""
    x, y, w, h = cell
    c.saveState()
    font, icon = picker.pick(back_icon, BODY_FONT)
    c.setFont(font, BACK_ICON_FONT_SIZE)
    c.drawCentredString(x + w / 2, y + h / 2, icon)
    card_class = _card_field(slot.card, "class")
    if card_class:
        font, card_class = picker.pick(card_class, BODY_FONT)
        c.setFont(font, BODY_FONT_SIZE)
        c.drawCentredString(x + w / 2, y + CELL_PADDING_PT, card_class)
    c.restoreState()


def _draw_wrapped(
    c: canvas.Canvas,
    text: str,
    x: float,
    top: float,
    width: float,
    font: str,
    size: int,
    picker: FontPicker,
) -> float:
    """
    Draw text wrapped to width starting below top.

    Returns:
        Y coordinate below the last line drawn
    """
    if not text:
        return top
    font, text = picker.pick(text, font)
    leading = size * 1.2
    c.saveState()
    c.setFont(font, size)
    for line in simpleSplit(text, font, size, width):
        top -= leading
        c.drawString(x, top, line)
    c.restoreState()
    return top - size * 0.4


def _draw_image(
    c: canvas.Canvas,
    path: Path,
    x: float,
    top: float,
    width: float,
    max_height: float,
) -> float:
    """
    Draw card artwork scaled to fit, preserving aspect ratio.

    Missing or unreadable images are logged and skipped.
    """
    if not path.exists():
        logger.warning(f"Card image not found: {path}")
        return top
    try:
        with Image.open(path) as img:
            img_width, img_height = img.size
            reader = _pil_to_reader(img)
    except OSError as e:
        logger.warning(f"Could not read card image {path}: {e}")
        return top

    scale = min(width / img_width, max_height / img_height)
    draw_w = img_width * scale
    draw_h = img_height * scale
    c.drawImage(
        reader,
        x + (width - draw_w) / 2,
        top - draw_h,
        width=draw_w,
        height=draw_h,
        preserveAspectRatio=True,
        mask="auto",
    )
    return top - draw_h - CELL_PADDING_PT


def _draw_footer(
    c: canvas.Canvas,
    page: SheetPage,
    side: str,
    page_width_pt: float,
    margin_pt: float,
) -> None:
    """
    Draw centered sheet label in the bottom margin.

    Helps collate fronts and backs when feeding sheets back by hand.
    """
    c.saveState()
    c.setFont(BODY_FONT, FOOTER_FONT_SIZE)
    c.setFillColorRGB(0.4, 0.4, 0.4)
    c.drawCentredString(page_width_pt / 2, max(4.0, margin_pt / 3), f"Sheet {page.index + 1} - {side}")
    c.restoreState()


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """
    Convert PIL image to ReportLab ImageReader.

    Args:
        img: PIL Image object

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)
