import json
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import duplex_cards
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from duplex_cards.layout import Card  # noqa: E402


# Common test fixtures
@pytest.fixture
def make_cards():
    """Factory for cards C1..Cn."""
    def _create(count: int):
        return [
            Card(card_id=f"C{i}", fields={"title": f"Card {i}", "class": "kpi"})
            for i in range(1, count + 1)
        ]
    return _create


@pytest.fixture
def labels():
    """Map a slot sequence to ids, "P" for placeholders."""
    def _labels(slots):
        return [slot.label for slot in slots]
    return _labels


@pytest.fixture
def deck_file(tmp_path: Path):
    """Write a deck JSON with n cards and return its path."""
    def _write(count: int = 10, **extra):
        data = {
            "title": "KPI Workshop",
            "subtitle": "Round 1",
            "cards": [
                {
                    "id": f"C{i}",
                    "title": f"Card {i}",
                    "type": "Metric",
                    "text": f"Body text for card {i}",
                    "flavor": "Measure what matters",
                    "class": "kpi",
                }
                for i in range(1, count + 1)
            ],
        }
        data.update(extra)
        path = tmp_path / "deck.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
