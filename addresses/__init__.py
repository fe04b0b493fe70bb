"""Address book: user-owned postal addresses with primary/billing/shipping flags."""

from .cache import ReferenceCache, default_cache
from .exceptions import (
    AddressBookError,
    InvalidArgumentError,
    NotFoundError,
    OwnerRequiredError,
    PermissionDeniedError,
    PersistenceError,
    ValidationError
)
from .flags import FLAG_ORDER, FlagCoordinator, FlagKind
from .reference import CountryEntry, ReferenceData, StateEntry
from .repository import AddressRepository
from .validation import AddressValidator

__all__ = [
    'AddressRepository',
    'AddressValidator',
    'FlagCoordinator',
    'FlagKind',
    'FLAG_ORDER',
    'ReferenceData',
    'ReferenceCache',
    'default_cache',
    'CountryEntry',
    'StateEntry',
    'AddressBookError',
    'InvalidArgumentError',
    'NotFoundError',
    'OwnerRequiredError',
    'PermissionDeniedError',
    'PersistenceError',
    'ValidationError'
]
