"""Primary/billing/shipping flag coordination.

A user may have at most one address per flag. Setting a flag clears it on
every address the user owns and then sets it on the target address.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from sqlalchemy.orm import Session

from .db.models import Address
from .db.session import commit_or_raise, flush_or_raise
from .exceptions import NotFoundError, OwnerRequiredError


class FlagKind(str, Enum):
    PRIMARY = 'primary'
    BILLING = 'billing'
    SHIPPING = 'shipping'


# Order flags are applied in when an address carries several
FLAG_ORDER: Tuple[FlagKind, ...] = (FlagKind.PRIMARY, FlagKind.BILLING, FlagKind.SHIPPING)

FLAG_COLUMNS = {
    FlagKind.PRIMARY: Address.is_primary,
    FlagKind.BILLING: Address.is_billing,
    FlagKind.SHIPPING: Address.is_shipping,
}


def parse_flags(names: Iterable[Union[str, FlagKind]]) -> Tuple[FlagKind, ...]:
    """Turn flag names into kinds, ordered by FLAG_ORDER.

    Raises:
        ValueError: If a name is not a known flag
    """
    kinds = set()
    for name in names:
        if isinstance(name, str):
            name = name.strip().lower()
        kinds.add(FlagKind(name))
    return tuple(kind for kind in FLAG_ORDER if kind in kinds)


def is_flagged(address: Address, kind: FlagKind) -> bool:
    return bool(getattr(address, FLAG_COLUMNS[kind].key))


class FlagCoordinator:
    """Keeps each flag on at most one address per user."""

    def __init__(
        self,
        session: Session,
        flags: Iterable[Union[str, FlagKind]] = FLAG_ORDER,
        transactional: bool = True
    ):
        """Initialize coordinator.

        Args:
            session: Database session used for all reads and writes
            flags: Flags that check_flags enforces
            transactional: Clear and set a flag in a single commit with the
                user's rows locked. When False the clear is committed before
                the set, so a failure in between leaves the user with no
                address carrying that flag.
        """
        self.session = session
        self.flags = parse_flags(flags)
        self.transactional = transactional
        self.logger = logging.getLogger(self.__class__.__name__)
        self._handlers: Dict[FlagKind, Callable[..., Address]] = {
            FlagKind.PRIMARY: self.set_primary,
            FlagKind.BILLING: self.set_billing,
            FlagKind.SHIPPING: self.set_shipping,
        }

    def set_primary(self, address: Union[Address, int], commit: bool = True) -> Address:
        """Make this the user's primary address."""
        return self.set_flag(FlagKind.PRIMARY, address, commit=commit)

    def set_billing(self, address: Union[Address, int], commit: bool = True) -> Address:
        """Make this the user's billing address."""
        return self.set_flag(FlagKind.BILLING, address, commit=commit)

    def set_shipping(self, address: Union[Address, int], commit: bool = True) -> Address:
        """Make this the user's shipping address."""
        return self.set_flag(FlagKind.SHIPPING, address, commit=commit)

    def handler_for(self, kind: Union[str, FlagKind]) -> Callable[..., Address]:
        return self._handlers[FlagKind(kind)]

    def set_flag(
        self,
        kind: Union[str, FlagKind],
        address: Union[Address, int],
        commit: bool = True
    ) -> Address:
        """Set ``kind`` on the address and clear it on the owner's other addresses.

        Args:
            kind: Flag to set
            address: Address instance or id. Ids are looked up without an
                ownership check.
            commit: Commit once the flag is set. When False the change is
                only flushed and the caller owns the transaction.

        Raises:
            NotFoundError: If an id matches no address
            OwnerRequiredError: If the address has no owner
            PersistenceError: If the database rejects the change
        """
        kind = FlagKind(kind)
        address = self._resolve(address)
        owner_id = address.user_id
        if owner_id is None:
            raise OwnerRequiredError(address.id)

        column = FLAG_COLUMNS[kind]
        siblings = self.session.query(Address).filter(Address.user_id == owner_id)

        if self.transactional:
            # Lock the user's rows until the commit below (no-op on SQLite)
            siblings.with_entities(Address.id).with_for_update().all()

        cleared = siblings.update({column: False}, synchronize_session='evaluate')
        self.logger.debug(f"Cleared {kind.value} on {cleared} addresses for user {owner_id}")

        if not self.transactional:
            commit_or_raise(self.session)

        setattr(address, column.key, True)
        self.session.add(address)
        flush_or_raise(self.session)
        if commit:
            commit_or_raise(self.session)

        self.logger.debug(f"Set {kind.value} on address {address.id} for user {owner_id}")
        return address

    def check_flags(self, address: Address) -> Tuple[FlagKind, ...]:
        """Re-apply every enabled flag the address carries.

        In transactional mode the flags are applied without intermediate
        commits and the session is committed once at the end, so a failure
        rolls back everything pending in the session, including an
        uncommitted insert or update of the address itself.

        Returns:
            The flags that were applied, in FLAG_ORDER
        """
        applied = []
        for kind in self.flags:
            if is_flagged(address, kind):
                self._handlers[kind](address, commit=not self.transactional)
                applied.append(kind)
        if self.transactional:
            commit_or_raise(self.session)
        return tuple(applied)

    def _resolve(self, address: Union[Address, int]) -> Address:
        if isinstance(address, Address):
            return address
        found: Optional[Address] = self.session.query(Address).filter_by(id=address).first()
        if found is None:
            raise NotFoundError(f"No address with id {address}")
        return found
