"""Command line entry point for duplex-cards.

Usage:
  duplex-cards build -i deck.json -o cards.pdf -b cards.html --flip long-edge
  duplex-cards preview -i deck.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import SheetConfig
from .controller import BuildError, build_sheets
from .layout import (
    DEFAULT_PAGE_CAPACITY,
    DEFAULT_ROW_WIDTH,
    FlipMode,
    InvalidParameterError,
    SheetPage,
    paginate,
)
from .loading import LoaderError, load_deck

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def _check_flip(value: str) -> None:
    if FlipMode.parse(value).value != value.strip().lower():
        logger.warning(f"Unknown flip mode {value!r}, using {FlipMode.SHORT_EDGE.value}")


def cmd_build(args: argparse.Namespace) -> int:
    if not args.output and not args.browser:
        print("Error: specify at least one output format (-o for PDF or -b for HTML). Use -h for help.", file=sys.stderr)
        return 1

    _check_flip(args.flip)
    try:
        config = SheetConfig(
            input_path=Path(args.input),
            pdf_path=Path(args.output) if args.output else None,
            html_path=Path(args.browser) if args.browser else None,
            template_path=Path(args.template) if args.template else None,
            main_template_path=Path(args.main_template) if args.main_template else None,
            page_capacity=args.cards_per_page,
            row_width=args.cards_per_row,
            flip_mode=args.flip,
            landscape=not args.portrait,
            margin_cm=args.margin_cm,
            symbol_font_path=Path(args.font) if args.font else None,
            write_metadata=args.metadata,
        )
        result = build_sheets(config)
    except (BuildError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.html_path:
        print(f"Wrote HTML: {result.html_path}")
    if result.pdf_path:
        print(f"Wrote PDF: {result.pdf_path}")
    if result.metadata_path:
        print(f"Wrote metadata: {result.metadata_path}")
    print(f"{result.card_count} cards on {result.page_count} sheets")
    for w in result.warnings:
        print(f"  warning: {w}", file=sys.stderr)
    return 0


def format_grid(slots, row_width: int) -> List[str]:
    """Render a slot sequence as text rows, "P" for placeholders."""
    labels = [slot.label for slot in slots]
    cell = max((len(label) for label in labels), default=1)
    return [
        "  ".join(label.ljust(cell) for label in labels[i:i + row_width]).rstrip()
        for i in range(0, len(labels), row_width)
    ]


def format_page(page: SheetPage, row_width: int) -> List[str]:
    lines = [f"Sheet {page.index + 1}:", "  Front:"]
    lines.extend("    " + row for row in format_grid(page.fronts, row_width))
    lines.append("  Back:")
    lines.extend("    " + row for row in format_grid(page.backs, row_width))
    return lines


def cmd_preview(args: argparse.Namespace) -> int:
    """Print each sheet's front and back grid."""
    _check_flip(args.flip)
    try:
        deck = load_deck(args.input)
        pages = paginate(deck.cards, args.cards_per_page, args.cards_per_row, args.flip)
    except (LoaderError, InvalidParameterError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    mode = FlipMode.parse(args.flip).value
    print(f"{len(deck)} cards, {len(pages)} sheets, flip on {mode}")
    for page in pages:
        print()
        for line in format_page(page, args.cards_per_row):
            print(line)
    return 0


def _add_layout_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-i", "--input", required=True, help="Deck JSON file")
    parser.add_argument(
        "--cards-per-page",
        type=int,
        default=DEFAULT_PAGE_CAPACITY,
        help=f"Cards per sheet side (default: {DEFAULT_PAGE_CAPACITY})",
    )
    parser.add_argument(
        "--cards-per-row",
        type=int,
        default=DEFAULT_ROW_WIDTH,
        help=f"Cards per row; must divide --cards-per-page (default: {DEFAULT_ROW_WIDTH})",
    )
    parser.add_argument(
        "--flip",
        default=FlipMode.SHORT_EDGE.value,
        help="Duplex flip edge: short-edge or long-edge (default: short-edge)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="duplex-cards", description="Double-sided card sheet generator")
    sub = p.add_subparsers(dest="cmd", required=True)

    build = sub.add_parser("build", help="Generate printable sheets (PDF and/or HTML)")
    _add_layout_options(build)
    build.add_argument("-o", "--output", help="Write the PDF to this file")
    build.add_argument("-b", "--browser", help="Write the HTML document to this file")
    build.add_argument("-t", "--template", help="Card template file for the HTML output (default: packaged template)")
    build.add_argument("--main-template", help="Outer document template for the HTML output (default: packaged template)")
    build.add_argument("--portrait", action="store_true", help="Portrait paper instead of landscape")
    build.add_argument("--margin-cm", type=float, default=1.0, help="Page margin in cm (default: 1.0)")
    build.add_argument(
        "--font",
        help="TrueType font for icons and emoji in the PDF (default: first suitable system font)",
    )
    build.add_argument(
        "--metadata",
        action="store_true",
        help="Write build_metadata.json with the per-sheet card order",
    )
    build.set_defaults(func=cmd_build)

    preview = sub.add_parser("preview", help="Print the front/back grid of every sheet")
    _add_layout_options(preview)
    preview.set_defaults(func=cmd_preview)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
