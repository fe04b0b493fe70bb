"""SQLAlchemy models for database tables."""

from .base import Base
from .address import Address
from .country import Country
from .state import State

__all__ = [
    'Base',
    'Address',
    'Country',
    'State'
]
