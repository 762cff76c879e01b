"""
Tests for the command line interface.
"""

import pytest

from duplex_cards.cli import build_parser, format_grid, main
from duplex_cards.layout import paginate


class TestBuildCommand:
    """Tests for `duplex-cards build`."""

    def test_build_when_pdf_requested_then_written(self, tmp_path, deck_file, capsys):
        # Arrange
        output = tmp_path / "cards.pdf"

        # Act
        code = main(["build", "-i", str(deck_file(10)), "-o", str(output)])

        # Assert
        assert code == 0
        assert output.exists()
        out = capsys.readouterr().out
        assert f"Wrote PDF: {output}" in out
        assert "10 cards on 2 sheets" in out

    def test_build_when_no_outputs_then_error_exit(self, deck_file, capsys):
        code = main(["build", "-i", str(deck_file(2))])

        assert code == 1
        captured = capsys.readouterr()
        assert "specify at least one output" in captured.err
        assert captured.out == ""

    def test_build_when_deck_missing_then_error_exit(self, tmp_path, capsys):
        code = main(["build", "-i", str(tmp_path / "nope.json"), "-b", str(tmp_path / "x.html")])

        assert code == 1
        assert "Error: Failed to load deck" in capsys.readouterr().err

    def test_build_when_metadata_flag_then_reports_path(self, tmp_path, deck_file, capsys):
        code = main([
            "build", "-i", str(deck_file(3)),
            "-b", str(tmp_path / "cards.html"),
            "--metadata",
        ])

        assert code == 0
        assert "Wrote metadata:" in capsys.readouterr().out

    def test_build_when_input_missing_then_argparse_exits(self):
        with pytest.raises(SystemExit):
            main(["build", "-o", "cards.pdf"])


class TestPreviewCommand:
    """Tests for `duplex-cards preview`."""

    def test_preview_when_short_edge_then_backs_mirrored_per_row(self, deck_file, capsys):
        # Act
        code = main(["preview", "-i", str(deck_file(8))])

        # Assert
        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "8 cards, 1 sheets, flip on short-edge"
        back_index = lines.index("  Back:")
        assert lines[back_index + 1].split() == ["C4", "C3", "C2", "C1"]
        assert lines[back_index + 2].split() == ["C8", "C7", "C6", "C5"]

    def test_preview_when_long_edge_then_rows_swapped(self, deck_file, capsys):
        code = main(["preview", "-i", str(deck_file(8)), "--flip", "long-edge"])

        assert code == 0
        lines = capsys.readouterr().out.splitlines()
        back_index = lines.index("  Back:")
        assert lines[back_index + 1].split() == ["C5", "C6", "C7", "C8"]
        assert lines[back_index + 2].split() == ["C1", "C2", "C3", "C4"]

    def test_preview_when_unknown_flip_then_short_edge_and_warning(self, deck_file, capsys, caplog):
        code = main(["preview", "-i", str(deck_file(4)), "--flip", "sideways"])

        assert code == 0
        assert "flip on short-edge" in capsys.readouterr().out
        assert "Unknown flip mode" in caplog.text

    def test_preview_when_zero_capacity_then_error_exit(self, deck_file, capsys):
        code = main(["preview", "-i", str(deck_file(4)), "--cards-per-page", "0"])

        assert code == 1
        assert "must be positive" in capsys.readouterr().err


class TestFormatGrid:
    """Tests for text grid rendering."""

    def test_format_when_partial_sheet_then_placeholders_shown(self, make_cards):
        page = paginate(make_cards(2), page_capacity=4, row_width=2)[0]

        assert format_grid(page.backs, 2) == ["C2  C1", "P   P"]

    def test_parser_when_defaults_then_eight_by_four(self):
        args = build_parser().parse_args(["preview", "-i", "deck.json"])

        assert args.cards_per_page == 8
        assert args.cards_per_row == 4
        assert args.flip == "short-edge"
