"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import validate_deck, ValidationError

__all__ = [
    "validate_deck",
    "ValidationError",
]
