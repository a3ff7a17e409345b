"""Alias utilities module.

This module handles the generation and validation of aliases.
"""

import random
import string
import re
from typing import Optional

from ..core.config import settings


# Characters allowed in aliases
ALPHABET = string.ascii_letters + string.digits

ALIAS_PATTERN = re.compile(r"\A[a-zA-Z0-9]+\Z")


def generate_alias(length: Optional[int] = None) -> str:
    """Generate a random alias.

    Each character is drawn independently and uniformly from ``ALPHABET``.
    Collisions are possible and are left to the store to detect.

    Args:
        length: Length of the generated alias. Defaults to settings value.

    Returns:
        Random alias string.
    """
    length = settings.alias_length if length is None else length
    if length <= 0:
        raise ValueError(f"Alias length must be positive, got {length}")
    return "".join(random.choices(ALPHABET, k=length))


def validate_alias(
    alias: str,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> bool:
    """Validate alias format.

    Args:
        alias: Alias to validate.
        min_length: Shortest allowed alias. Defaults to settings value.
        max_length: Longest allowed alias. Defaults to settings value.

    Returns:
        True if valid, False otherwise.
    """
    if not alias:
        return False
    min_length = settings.min_alias_length if min_length is None else min_length
    max_length = settings.max_alias_length if max_length is None else max_length
    if len(alias) < min_length or len(alias) > max_length:
        return False
    if not ALIAS_PATTERN.fullmatch(alias):
        return False
    return True


def create_short_url(base_url: str, alias: str) -> str:
    """Create full short URL from base URL and alias.

    Args:
        base_url: Base URL of the service.
        alias: Alias.

    Returns:
        Full short URL string.
    """
    return f"{base_url.rstrip('/')}/{alias}"
