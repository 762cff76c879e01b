"""
Unit tests for PDF rendering.

Generated PDFs are opened with PyMuPDF to check page count and where
card text landed on each side.
"""

import logging

import fitz
import pytest
from reportlab.lib.pagesizes import A4, landscape

from duplex_cards.layout import LayoutConfig, layout_deck
from duplex_cards.loading import DEFAULT_BACK_ICON, parse_deck
from duplex_cards.output import fonts, grid_cells, render_to_pdf
from duplex_cards.output.fonts import covers, find_symbol_fonts


def _deck(count, **card_extra):
    return parse_deck({
        "title": "Test deck",
        "back_icon": "X",
        "cards": [
            {"id": f"C{i}", "title": f"Card{i}", "class": f"K{i}", **card_extra}
            for i in range(1, count + 1)
        ],
    })


def _word_center(page, word):
    for x0, y0, x1, y1, text, *_ in page.get_text("words"):
        if text == word:
            return (x0 + x1) / 2, (y0 + y1) / 2
    raise AssertionError(f"{word!r} not found on page")


class TestGridCells:
    """Tests for grid_cells()."""

    def test_cells_when_two_by_four_then_row_major_from_top_left(self):
        # Arrange
        width, height = landscape(A4)

        # Act
        cells = grid_cells(width, height, rows=2, columns=4, margin_pt=20, gap_pt=10)

        # Assert
        assert len(cells) == 8
        first, second, fifth = cells[0], cells[1], cells[4]
        assert first[0] == pytest.approx(20)
        assert second[0] > first[0]
        assert fifth[0] == pytest.approx(first[0])
        assert fifth[1] < first[1]  # second row sits lower on the page
        assert first[1] + first[3] == pytest.approx(height - 20)

    def test_cells_when_margins_exceed_page_then_raises(self):
        with pytest.raises(ValueError, match="Margins exceed"):
            grid_cells(100, 100, rows=1, columns=1, margin_pt=60)


class TestRenderToPdf:
    """Tests for render_to_pdf()."""

    def test_render_when_two_sheets_then_four_pages(self, tmp_path):
        # Arrange
        deck = _deck(10)
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "out" / "cards.pdf"

        # Act
        pages = render_to_pdf(layout, deck, output)

        # Assert
        assert pages == 4
        with fitz.open(output) as doc:
            assert doc.page_count == 4
            assert doc[0].rect.width > doc[0].rect.height  # landscape

    def test_render_when_portrait_then_tall_pages(self, tmp_path):
        deck = _deck(2)
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        render_to_pdf(layout, deck, output, landscape=False)

        with fitz.open(output) as doc:
            assert doc[0].rect.height > doc[0].rect.width

    def test_render_when_short_edge_then_first_card_back_top_right(self, tmp_path):
        # Arrange
        deck = _deck(1)
        layout = layout_deck(deck.cards, LayoutConfig(flip_mode="short-edge"))
        output = tmp_path / "cards.pdf"

        # Act
        render_to_pdf(layout, deck, output)

        # Assert
        with fitz.open(output) as doc:
            front, back = doc[0], doc[1]
            fx, fy = _word_center(front, "Card1")
            bx, by = _word_center(back, "K1")
            assert fx < front.rect.width / 2 and fy < front.rect.height / 2
            assert bx > back.rect.width * 3 / 4 and by < back.rect.height / 2

    def test_render_when_long_edge_then_first_card_back_bottom_left(self, tmp_path):
        deck = _deck(1)
        layout = layout_deck(deck.cards, LayoutConfig(flip_mode="long-edge"))
        output = tmp_path / "cards.pdf"

        render_to_pdf(layout, deck, output)

        with fitz.open(output) as doc:
            back = doc[1]
            bx, by = _word_center(back, "K1")
            assert bx < back.rect.width / 4 and by > back.rect.height / 2

    def test_render_when_placeholders_then_not_drawn(self, tmp_path):
        deck = _deck(1)
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        render_to_pdf(layout, deck, output, show_footer=False)

        with fitz.open(output) as doc:
            back_words = [w[4] for w in doc[1].get_text("words")]
            assert back_words == ["X", "K1"]

    def test_render_when_footer_then_sheet_label_printed(self, tmp_path):
        deck = _deck(1)
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        render_to_pdf(layout, deck, output)

        with fitz.open(output) as doc:
            assert "Sheet 1 - back" in doc[1].get_text()

    def test_render_when_empty_layout_then_single_blank_page(self, tmp_path, caplog):
        deck = _deck(0)
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "empty.pdf"

        with caplog.at_level(logging.WARNING):
            pages = render_to_pdf(layout, deck, output)

        assert pages == 1
        assert "Empty layout" in caplog.text
        with fitz.open(output) as doc:
            assert doc.page_count == 1

    def test_render_when_card_image_then_embedded(self, tmp_path, sample_image):
        # Arrange
        deck = parse_deck(
            {"cards": [{"title": "Pic", "image": sample_image.name}]},
            source=tmp_path / "deck.json",
        )
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        # Act
        render_to_pdf(layout, deck, output)

        # Assert
        with fitz.open(output) as doc:
            assert len(doc[0].get_images()) == 1

    def test_render_when_card_image_missing_then_warns_and_continues(self, tmp_path, caplog):
        deck = parse_deck(
            {"cards": [{"title": "Pic", "image": "missing.png"}]},
            source=tmp_path / "deck.json",
        )
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        with caplog.at_level(logging.WARNING):
            render_to_pdf(layout, deck, output)

        assert "Card image not found" in caplog.text
        assert output.exists()


class TestCardSymbols:
    """Tests for icons, emoji and the deck back icon in the PDF."""

    def test_render_when_icon_and_emoji_then_header_row_on_front(self, tmp_path):
        # Arrange
        deck = parse_deck({"cards": [{"title": "Lead", "icon": "IC", "emoji": "EM"}]})
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        # Act
        render_to_pdf(layout, deck, output)

        # Assert
        with fitz.open(output) as doc:
            front = doc[0]
            icon_x, icon_y = _word_center(front, "IC")
            emoji_x, emoji_y = _word_center(front, "EM")
            _, title_y = _word_center(front, "Lead")
            assert icon_x < emoji_x
            assert icon_y == pytest.approx(emoji_y)
            assert icon_y < title_y  # header sits above the title

    def test_render_when_default_icon_and_no_symbol_font_then_question_mark(self, tmp_path, monkeypatch):
        # Arrange
        monkeypatch.setattr(fonts, "SYMBOL_FONT_CANDIDATES", [])
        deck = parse_deck({"cards": [{"id": "C1", "class": "K1"}]})
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        # Act
        render_to_pdf(layout, deck, output, show_footer=False)

        # Assert
        assert deck.back_icon == DEFAULT_BACK_ICON
        with fitz.open(output) as doc:
            assert [w[4] for w in doc[1].get_text("words")] == ["?", "K1"]

    def test_render_when_symbol_font_installed_then_default_icon_drawn(self, tmp_path):
        # Arrange
        installed = [f for f in find_symbol_fonts() if covers(f, DEFAULT_BACK_ICON)]
        if not installed:
            pytest.skip("no installed font has a glyph for the default back icon")
        deck = parse_deck({"cards": [{"id": "C1"}]})
        layout = layout_deck(deck.cards, LayoutConfig())
        output = tmp_path / "cards.pdf"

        # Act
        render_to_pdf(layout, deck, output)

        # Assert
        with fitz.open(output) as doc:
            assert DEFAULT_BACK_ICON in doc[1].get_text()

    def test_render_when_symbol_font_unreadable_then_raises(self, tmp_path):
        bogus = tmp_path / "bogus.ttf"
        bogus.write_bytes(b"not a font file")
        deck = _deck(1)
        layout = layout_deck(deck.cards, LayoutConfig())

        with pytest.raises(ValueError, match="Cannot load font"):
            render_to_pdf(layout, deck, tmp_path / "cards.pdf", symbol_font=bogus)
