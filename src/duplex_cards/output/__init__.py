"""
Module: duplex_cards.output

Purpose:
    Document and PDF generation for laid-out sheets.

Key Functions:
    - assemble_document(): Build the HTML document
    - write_html(): Write the HTML document
    - render_to_pdf(): Render sheets to PDF

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling
    - duplex_cards.layout.models: LayoutResult

Used By:
    - duplex_cards.controller: Pipeline orchestration
"""

from .document import assemble_document, load_main_template, render_sheets, write_html
from .renderer import render_to_pdf, grid_cells

__all__ = [
    "assemble_document",
    "load_main_template",
    "render_sheets",
    "write_html",
    "render_to_pdf",
    "grid_cells",
]
