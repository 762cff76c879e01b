"""
Module: duplex_cards.output.fonts

Purpose:
    Choose a font that can draw each piece of card text in the PDF.
    The built-in PDF fonts only encode WinAnsi (cp1252) characters, while
    card icons are usually emoji or dingbats. A TrueType font covering
    them is registered with ReportLab when one is available; characters
    no font covers are drawn as "?" instead of a wrong glyph.

Key Functions:
    - load_symbol_font(): Register one TrueType font file
    - find_symbol_fonts(): Register every readable candidate font

Key Classes:
    - FontPicker: Font and drawable text for a string

Dependencies:
    - reportlab.pdfbase: TrueType font registration

Used By:
    - duplex_cards.output.renderer: Card text drawing
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

logger = logging.getLogger(__name__)

SYMBOL_FONT_PREFIX = "DuplexSymbols"
REPLACEMENT_CHAR = "?"
STANDARD_FONT_ENCODING = "cp1252"

# Tried in order; the first font covering a string is used for it
SYMBOL_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/noto/NotoSansSymbols2-Regular.ttf",
    "/usr/share/fonts/noto/NotoSansSymbols2-Regular.ttf",
    "/usr/share/fonts/truetype/ancient-scripts/Symbola_hint.ttf",
    "/usr/share/fonts/TTF/Symbola.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/seguisym.ttf",
    "C:/Windows/Fonts/arialuni.ttf",
]

# Emoji presentation selectors carry no glyph of their own
_INVISIBLE = str.maketrans("", "", "\ufe0e\ufe0f")

# Registered fonts by file path; None marks an unreadable file
_LOADED: Dict[str, Optional[TTFont]] = {}


def load_symbol_font(path: Path | str) -> Optional[TTFont]:
    """
    Register a TrueType font with ReportLab.

    Args:
        path: Font file (.ttf)

    Returns:
        The registered TTFont, or None if the file cannot be read
    """
    key = str(path)
    if key not in _LOADED:
        try:
            font = TTFont(f"{SYMBOL_FONT_PREFIX}-{len(_LOADED)}", key)
        except (OSError, TTFError) as e:
            logger.debug(f"Skipping font {key}: {e}")
            font = None
        else:
            pdfmetrics.registerFont(font)
            logger.debug(f"Registered font {font.fontName} from {key}")
        _LOADED[key] = font
    return _LOADED[key]


def find_symbol_fonts(candidates: Optional[Iterable[Path | str]] = None) -> List[TTFont]:
    """
    Register every existing, readable font from the candidate list.

    Args:
        candidates: Font paths to try (default: SYMBOL_FONT_CANDIDATES)

    Returns:
        Registered fonts, in candidate order
    """
    paths = SYMBOL_FONT_CANDIDATES if candidates is None else candidates
    fonts = []
    for path in paths:
        if not Path(path).exists():
            continue
        font = load_symbol_font(path)
        if font is not None:
            fonts.append(font)
    return fonts


def covers(font: TTFont, text: str) -> bool:
    """True if the font has a glyph for every character of text."""
    glyphs = font.face.charToGlyph
    return all(ord(ch) in glyphs for ch in text.translate(_INVISIBLE))


def _standard_encodable(text: str) -> bool:
    try:
        text.encode(STANDARD_FONT_ENCODING)
    except UnicodeEncodeError:
        return False
    return True


class FontPicker:
    """
    Pick the font used to draw a string.

    Text the standard fonts can encode keeps the requested standard font.
    Other text goes to the first symbol font covering all of it; failing
    that, uncovered characters are replaced and a warning is logged once
    per distinct string.

    Example:
        >>> picker = FontPicker(find_symbol_fonts())
        >>> picker.pick("❓", "Helvetica")
        ('DuplexSymbols-0', '❓')
    """

    def __init__(self, symbol_fonts: Sequence[TTFont] = ()):
        self.symbol_fonts = list(symbol_fonts)
        self._warned: Set[str] = set()

    def pick(self, text: str, base_font: str) -> Tuple[str, str]:
        """
        Font name and drawable text for text.

        Args:
            text: Text to draw
            base_font: Standard font to use when it can encode the text

        Returns:
            (font_name, text_to_draw)
        """
        text = text.translate(_INVISIBLE)
        if _standard_encodable(text):
            return base_font, text

        for font in self.symbol_fonts:
            if covers(font, text):
                return font.fontName, text

        if text not in self._warned:
            self._warned.add(text)
            logger.warning(
                f"No available font can draw {text!r}; "
                f"uncovered characters are printed as {REPLACEMENT_CHAR!r}"
            )
        drawable = "".join(
            ch if _standard_encodable(ch) else REPLACEMENT_CHAR for ch in text
        )
        return base_font, drawable
