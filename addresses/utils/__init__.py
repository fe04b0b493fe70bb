"""Utility functions and helpers."""

from .normalization import clean_field, normalize_code, coerce_bool

__all__ = [
    'clean_field',
    'normalize_code',
    'coerce_bool'
]
