"""
Templating Package

Slot-to-fragment rendering with named field substitution.
"""

from .templates import (
    CardTemplates,
    TemplateError,
    PLACEHOLDER_MARKUP,
    load_templates,
    read_template_file,
    substitute,
    front_values,
    back_values,
    render_front,
    render_back,
)

__all__ = [
    "CardTemplates",
    "TemplateError",
    "PLACEHOLDER_MARKUP",
    "load_templates",
    "read_template_file",
    "substitute",
    "front_values",
    "back_values",
    "render_front",
    "render_back",
]
