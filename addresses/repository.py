"""CRUD over user-owned addresses."""
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from .db.models import Address
from .db.session import commit_or_raise, flush_or_raise
from .flags import FLAG_COLUMNS, FlagCoordinator, FlagKind
from .exceptions import NotFoundError, OwnerRequiredError, PermissionDeniedError
from .validation import AddressValidator

AddressRef = Union[Address, int]


class AddressRepository:
    """Creates, updates, deletes and lists addresses for their owners.

    The caller's user id is passed to every operation. After each create or
    update the flag coordinator re-applies the one-address-per-flag rule.
    """

    def __init__(
        self,
        session: Session,
        flags: Optional[FlagCoordinator] = None,
        validator: Optional[AddressValidator] = None,
        strict_ownership: bool = True,
        default_country: str = 'US'
    ):
        """Initialize repository.

        Args:
            session: Database session
            flags: Flag coordinator sharing the same session
            validator: Field validator, defaults to the standard rules
            strict_ownership: Raise PermissionDeniedError when deleting an
                address the caller does not own. When False the delete is
                skipped silently.
            default_country: Country code used when input has none
        """
        self.session = session
        self.flags = flags if flags is not None else FlagCoordinator(session)
        self.validator = validator if validator is not None else AddressValidator()
        self.strict_ownership = strict_ownership
        self.default_country = default_country.upper()
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_config(cls, session: Session, config) -> 'AddressRepository':
        """Build a repository from a cli Config."""
        flags = FlagCoordinator(
            session,
            flags=config.flags,
            transactional=config.transactional_flags
        )
        return cls(
            session,
            flags=flags,
            strict_ownership=config.strict_ownership,
            default_country=config.default_country
        )

    def create(self, owner_id: int, fields: Mapping[str, Any]) -> Address:
        """Create an address owned by ``owner_id``.

        Raises:
            OwnerRequiredError: If no owner is given
            ValidationError: If the fields fail validation
            PersistenceError: If the database rejects the insert
        """
        if owner_id is None:
            raise OwnerRequiredError()

        data = self.validator.normalize(fields)
        if not data.get('country'):
            data['country'] = self.default_country
        for flag in FLAG_COLUMNS.values():
            data.setdefault(flag.key, False)
        self.validator.validate(data)

        address = Address(user_id=owner_id, **data)
        self.session.add(address)
        self._save()
        self.logger.debug(f"Created address {address.id} for user {owner_id}")

        self.flags.check_flags(address)
        return address

    def update(self, caller_id: int, address: AddressRef, fields: Mapping[str, Any]) -> Address:
        """Apply field changes to an address.

        An Address instance is updated as given, without an ownership check.
        An id is only found among the caller's own addresses.

        Raises:
            NotFoundError: If an id matches none of the caller's addresses
            ValidationError: If the resulting address fails validation
            PersistenceError: If the database rejects the update
        """
        address = self._resolve(caller_id, address)
        changes = self.validator.normalize(fields)

        merged = address.to_dict()
        merged.update(changes)
        self.validator.validate(merged)

        for name, value in changes.items():
            setattr(address, name, value)
        self._save()
        self.logger.debug(f"Updated address {address.id}: {sorted(changes)}")

        self.flags.check_flags(address)
        return address

    def delete(self, caller_id: int, address: AddressRef) -> bool:
        """Delete an address the caller owns.

        With strict ownership off, a foreign address is skipped whether it
        is passed as an instance or as an id.

        Returns:
            True if the address was deleted, False if it was skipped

        Raises:
            NotFoundError: If an id matches none of the caller's addresses,
                or with strict ownership off, no address at all
            PermissionDeniedError: If the caller does not own the address
                and strict ownership is on
        """
        if self.strict_ownership or isinstance(address, Address):
            address = self._resolve(caller_id, address)
        else:
            found = self.session.get(Address, address)
            if found is None:
                raise NotFoundError(f"No address with id {address}")
            address = found

        if address.user_id != caller_id:
            if self.strict_ownership:
                raise PermissionDeniedError(caller_id, address.id)
            self.logger.warning(
                f"User {caller_id} tried to delete address {address.id} owned by {address.user_id}; skipped"
            )
            return False

        self.session.delete(address)
        commit_or_raise(self.session)
        self.logger.debug(f"Deleted address {address.id} for user {caller_id}")
        return True

    def find(self, caller_id: int, address_id: int) -> Optional[Address]:
        """Return one of the caller's addresses by id, or None."""
        return (
            self.session.query(Address)
            .filter(Address.user_id == caller_id, Address.id == address_id)
            .first()
        )

    def list_for_user(self, owner_id: int) -> List[Address]:
        """Return a user's addresses, primary first, then shipping, then billing."""
        return (
            self.session.query(Address)
            .filter(Address.user_id == owner_id)
            .order_by(
                Address.is_primary.desc(),
                Address.is_shipping.desc(),
                Address.is_billing.desc(),
                Address.id.asc()
            )
            .all()
        )

    def get_primary(self, owner_id: int) -> Optional[Address]:
        return self._first_flagged(owner_id, FlagKind.PRIMARY)

    def get_billing(self, owner_id: int) -> Optional[Address]:
        return self._first_flagged(owner_id, FlagKind.BILLING)

    def get_shipping(self, owner_id: int) -> Optional[Address]:
        return self._first_flagged(owner_id, FlagKind.SHIPPING)

    def set_primary(self, address: AddressRef) -> Address:
        return self.flags.set_primary(address)

    def set_billing(self, address: AddressRef) -> Address:
        return self.flags.set_billing(address)

    def set_shipping(self, address: AddressRef) -> Address:
        return self.flags.set_shipping(address)

    def get_validator(self) -> AddressValidator:
        return self.validator

    def validate(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Normalize and validate input without saving anything.

        Raises:
            ValidationError: If the fields fail validation
        """
        data = self.validator.normalize(fields)
        if not data.get('country'):
            data['country'] = self.default_country
        return self.validator.validate(data)

    def _first_flagged(self, owner_id: int, kind: FlagKind) -> Optional[Address]:
        return (
            self.session.query(Address)
            .filter(Address.user_id == owner_id, FLAG_COLUMNS[kind].is_(True))
            .order_by(Address.id.asc())
            .first()
        )

    def _save(self) -> None:
        # Transactional flags commit after coordination, together with this write
        if self.flags.transactional:
            flush_or_raise(self.session)
        else:
            commit_or_raise(self.session)

    def _resolve(self, caller_id: int, address: AddressRef) -> Address:
        if isinstance(address, Address):
            return address
        found = self.find(caller_id, address)
        if found is None:
            raise NotFoundError(f"User {caller_id} has no address with id {address}")
        return found
