"""Exceptions raised by the address book."""
from typing import Dict, List, Optional


class AddressBookError(Exception):
    """Base class for all address book errors."""


class ValidationError(AddressBookError):
    """Address fields failed validation."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Invalid address fields ({details})")


class NotFoundError(AddressBookError):
    """A lookup by id or reference code matched nothing."""


class InvalidArgumentError(AddressBookError, ValueError):
    """A reference code was malformed."""


class OwnerRequiredError(AddressBookError):
    """An address has no owning user to scope a flag change to."""

    def __init__(self, address_id: Optional[int] = None):
        self.address_id = address_id
        super().__init__(f"Address {address_id} has no owning user")


class PersistenceError(AddressBookError):
    """The database rejected a write."""


class PermissionDeniedError(AddressBookError):
    """The caller does not own the address."""

    def __init__(self, caller_id: int, address_id: Optional[int]):
        self.caller_id = caller_id
        self.address_id = address_id
        super().__init__(f"User {caller_id} does not own address {address_id}")
