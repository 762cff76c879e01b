"""
Module: duplex_cards.templating.templates

Purpose:
    Turn layout slots into HTML fragments.
    Card fields are substituted into front/back template blocks by name;
    placeholders become a fixed empty-slot marker.

Key Functions:
    - load_templates(): Read front/back template blocks from a file
    - substitute(): Replace {{name}} tokens from a value map
    - render_front() / render_back(): Fragment for one slot

Key Classes:
    - CardTemplates: Front and back template strings
    - TemplateError: Missing or malformed template markers

Dependencies:
    - re, html (std)
    - duplex_cards.layout.models: Slot types
    - duplex_cards.loading.loader: Italian field aliases

Used By:
    - duplex_cards.output.document: HTML assembly
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from duplex_cards.layout.models import Slot
from duplex_cards.loading.loader import CARD_FIELD_ALIASES

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
DEFAULT_CARD_TEMPLATE = ASSETS_DIR / "card-template.html"

PLACEHOLDER_MARKUP = '<div class="playing-card placeholder"></div>'

_TOKEN_RE = re.compile(r"\{\{\s*([A-Za-z_][\w\-]*)\s*\}\}")
_BLOCK_RE = r'<template\s+id="{name}"\s*>(.*?)</template>'

FRONT_BLOCK = "card-front"
BACK_BLOCK = "card-back"


class TemplateError(Exception):
    """Template file is missing, unreadable or lacks a required block."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class CardTemplates:
    """
    Front and back card templates (immutable).

    Attributes:
        front: Markup for one card front, with {{field}} tokens
        back: Markup for one card back, with {{field}} tokens
        source: File the templates were read from
    """

    front: str
    back: str
    source: Optional[Path] = None


def load_templates(path: Optional[Path | str] = None) -> CardTemplates:
    """
    Load card templates from an HTML file.

    The file must contain ``<template id="card-front">`` and
    ``<template id="card-back">`` blocks.

    Args:
        path: Template file, or None for the packaged default

    Returns:
        CardTemplates with both blocks

    Raises:
        TemplateError: If the file is missing or a block is absent
    """
    path = Path(path) if path is not None else DEFAULT_CARD_TEMPLATE
    text = read_template_file(path)

    front = _extract_block(text, FRONT_BLOCK)
    back = _extract_block(text, BACK_BLOCK)
    if front is None or back is None:
        missing = [n for n, b in ((FRONT_BLOCK, front), (BACK_BLOCK, back)) if b is None]
        raise TemplateError(f"Invalid templates in {path}: missing {', '.join(missing)}", path=path)

    logger.debug(f"Loaded card templates from {path}")
    return CardTemplates(front=front, back=back, source=path)


def read_template_file(path: Path) -> str:
    """Read a template file, converting I/O failures to TemplateError."""
    if not path.exists():
        raise TemplateError(f"Template not found: {path}", path=path)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Could not read template {path}: {e}", path=path) from e


def _extract_block(text: str, name: str) -> Optional[str]:
    match = re.search(_BLOCK_RE.format(name=re.escape(name)), text, re.DOTALL)
    return match.group(1) if match else None


def substitute(
    template: str,
    values: Mapping[str, Any],
    *,
    markup: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Replace every {{name}} token in template.

    Args:
        template: Template text
        values: Plain-text values, HTML-escaped on insertion
        markup: Values inserted verbatim (already rendered HTML)

    Returns:
        Substituted text. Tokens with no value become empty.

    Example:
        >>> substitute("<b>{{title}}</b>{{missing}}", {"title": "A & B"})
        '<b>A &amp; B</b>'
    """
    markup = markup or {}

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name in markup:
            return markup[name]
        value = values.get(name)
        if value is None:
            return ""
        return html.escape(str(value))

    return _TOKEN_RE.sub(_replace, template)


def front_values(card: Any) -> Dict[str, str]:
    """
    Substitution map for a card front.

    Fields are also exposed under their Italian deck-file names
    ({{titolo}}, {{classe}}, ...) so older templates keep working.
    """
    fields = getattr(card, "fields", None)
    if fields is None and isinstance(card, Mapping):
        fields = card
    values = dict(fields or {})
    card_id = getattr(card, "card_id", None)
    if card_id is not None:
        values.setdefault("id", card_id)
    for alias, name in CARD_FIELD_ALIASES.items():
        if name in values:
            values.setdefault(alias, values[name])
    return values


def back_values(card: Any, back_icon: str) -> Dict[str, str]:
    """Substitution map for a card back; adds the deck-wide back icon."""
    values = front_values(card)
    values["back_icon"] = back_icon
    # Deck-level icon name used by Italian templates
    values.setdefault("icona_esercizio", back_icon)
    return values


def render_front(slot: Slot, templates: CardTemplates) -> str:
    """Render the front fragment for one slot."""
    if slot.is_placeholder:
        return PLACEHOLDER_MARKUP
    return substitute(templates.front, front_values(slot.card))


def render_back(slot: Slot, templates: CardTemplates, back_icon: str) -> str:
    """Render the back fragment for one slot."""
    if slot.is_placeholder:
        return PLACEHOLDER_MARKUP
    return substitute(templates.back, back_values(slot.card, back_icon))
