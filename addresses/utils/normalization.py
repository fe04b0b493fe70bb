"""Normalization helpers for address input.

Form input arrives as loosely typed strings. These helpers collapse
whitespace, upper-case reference codes and read checkbox-style booleans so
validation and storage always see the same shape.
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

TRUE_VALUES = {'1', 'true', 'yes', 'on', 'y', 't'}
FALSE_VALUES = {'0', 'false', 'no', 'off', 'n', 'f', ''}


def clean_field(value: Any) -> Optional[str]:
    """Collapse internal whitespace and strip the ends of a text value.

    Returns None for missing or blank values.

    Examples:
        >>> clean_field("  12   Main St ")
        '12 Main St'
        >>> clean_field(90210)
        '90210'
        >>> clean_field("   ") is None
        True
    """
    if value is None:
        return None
    # Convert to string first to handle numeric postal codes
    cleaned = " ".join(str(value).strip().split())
    return cleaned or None


def normalize_code(value: Any) -> Optional[str]:
    """Normalize a country or state code to upper case.

    Examples:
        >>> normalize_code(" us ")
        'US'
        >>> normalize_code(None) is None
        True
    """
    cleaned = clean_field(value)
    if cleaned is None:
        return None
    return cleaned.upper()


def coerce_bool(value: Any) -> bool:
    """Read a boolean from form-style input.

    Raises:
        ValueError: If the value is not a recognizable boolean
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0

    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    logger.debug(f"Unrecognized boolean value: {value!r}")
    raise ValueError(f"Not a boolean value: {value!r}")
