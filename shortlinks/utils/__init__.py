"""Utils package for the Short Links Service."""

from .shortener import (
    ALPHABET,
    generate_alias,
    validate_alias,
    create_short_url,
)

__all__ = [
    "ALPHABET",
    "generate_alias",
    "validate_alias",
    "create_short_url",
]
