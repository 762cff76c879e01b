"""
Unit tests for PDF font selection.
"""

import logging
from types import SimpleNamespace

from duplex_cards.output import fonts
from duplex_cards.output.fonts import FontPicker, covers, find_symbol_fonts, load_symbol_font


def _fake_font(name, codepoints):
    return SimpleNamespace(fontName=name, face=SimpleNamespace(charToGlyph={cp: 1 for cp in codepoints}))


class TestFontPicker:
    """Tests for FontPicker.pick()."""

    def test_pick_when_latin_text_then_standard_font(self):
        picker = FontPicker([_fake_font("Sym", [0x2753])])

        assert picker.pick("Qualità – 100%", "Helvetica") == ("Helvetica", "Qualità – 100%")

    def test_pick_when_symbol_font_covers_icon_then_symbol_font(self):
        # Arrange
        picker = FontPicker([_fake_font("Sym", [0x2753])])

        # Act
        font, text = picker.pick("❓", "Helvetica")

        # Assert
        assert font == "Sym"
        assert text == "❓"

    def test_pick_when_first_font_lacks_glyph_then_next_font(self):
        picker = FontPicker([_fake_font("A", [0x2605]), _fake_font("B", [0x2753])])

        assert picker.pick("❓", "Helvetica")[0] == "B"

    def test_pick_when_no_font_covers_icon_then_replacement_char(self, caplog):
        picker = FontPicker()

        with caplog.at_level(logging.WARNING):
            first = picker.pick("❓", "Helvetica")
            second = picker.pick("❓", "Helvetica")

        assert first == second == ("Helvetica", "?")
        assert caplog.text.count("No available font") == 1

    def test_pick_when_mixed_text_uncovered_then_only_symbols_replaced(self):
        picker = FontPicker()

        assert picker.pick("KPI 📊", "Helvetica-Bold") == ("Helvetica-Bold", "KPI ?")

    def test_pick_when_variation_selector_then_dropped(self):
        picker = FontPicker([_fake_font("Sym", [0x2764])])

        assert picker.pick("❤️", "Helvetica") == ("Sym", "❤")


class TestSymbolFonts:
    """Tests for font discovery and registration."""

    def test_covers_when_glyph_missing_then_false(self):
        font = _fake_font("Sym", [0x2753])

        assert covers(font, "❓")
        assert not covers(font, "❓★")

    def test_find_when_candidates_missing_then_empty(self, tmp_path):
        assert find_symbol_fonts([tmp_path / "missing.ttf"]) == []

    def test_find_when_file_not_a_font_then_skipped(self, tmp_path):
        # Arrange
        bogus = tmp_path / "bogus.ttf"
        bogus.write_bytes(b"not a font file")

        # Act & Assert
        assert load_symbol_font(bogus) is None
        assert find_symbol_fonts([bogus]) == []

    def test_find_when_default_candidates_empty_then_empty(self, monkeypatch):
        monkeypatch.setattr(fonts, "SYMBOL_FONT_CANDIDATES", [])

        assert find_symbol_fonts() == []
