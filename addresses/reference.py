"""Country and state/province lookups.

All lookups go through a :class:`~addresses.cache.ReferenceCache` and are kept
for the lifetime of the process. Cached values are frozen snapshots rather
than ORM rows so they stay usable after the session that loaded them closes.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from .cache import ReferenceCache, default_cache
from .db.models import Country, State
from .exceptions import InvalidArgumentError, NotFoundError

CACHE_PREFIX = 'addresses.'
COUNTRIES_KEY = 'addresses.countries'


@dataclass(frozen=True)
class CountryEntry:
    a2: str
    name: str
    a3: Optional[str] = None


@dataclass(frozen=True)
class StateEntry:
    a2: str
    country_a2: str
    name: str


def _require_code(code, label: str) -> str:
    if not isinstance(code, str) or len(code) != 2:
        raise InvalidArgumentError(f"{label} must be a 2 letter code, got {code!r}")
    return code.upper()


def states_key(country_code: str) -> str:
    return f"addresses.{country_code}.states"


def country_name_key(country_code: str) -> str:
    return f"addresses.{country_code}.country_name"


def state_name_key(state_code: str, country_code: str) -> str:
    return f"addresses.{country_code}.{state_code}.state_name"


class ReferenceData:
    """Read-only access to the country and state tables."""

    def __init__(self, session: Session, cache: Optional[ReferenceCache] = None):
        self.session = session
        self.cache = cache if cache is not None else default_cache
        self.logger = logging.getLogger(self.__class__.__name__)

    def countries(self) -> List[CountryEntry]:
        """Return all countries ordered by name."""
        return self.cache.remember_forever(COUNTRIES_KEY, self._load_countries)

    def states(self, country_code: str = 'US') -> List[StateEntry]:
        """Return the states/provinces of a country ordered by name.

        Raises:
            InvalidArgumentError: If ``country_code`` is not 2 characters
        """
        country_code = _require_code(country_code, 'Country code')
        return self.cache.remember_forever(
            states_key(country_code),
            lambda: self._load_states(country_code)
        )

    def country_name(self, country_code: str) -> str:
        """Return the display name of a country.

        Raises:
            InvalidArgumentError: If ``country_code`` is not 2 characters
            NotFoundError: If no country has that code
        """
        country_code = _require_code(country_code, 'Country code')
        return self.cache.remember_forever(
            country_name_key(country_code),
            lambda: self._load_country_name(country_code)
        )

    def state_name(self, state_code: str, country_code: str = 'US') -> str:
        """Return the display name of a state within a country.

        Raises:
            InvalidArgumentError: If either code is not 2 characters
            NotFoundError: If the country has no such state
        """
        state_code = _require_code(state_code, 'State code')
        country_code = _require_code(country_code, 'Country code')
        return self.cache.remember_forever(
            state_name_key(state_code, country_code),
            lambda: self._load_state_name(state_code, country_code)
        )

    def invalidate(self, key: Optional[str] = None) -> int:
        """Drop cached reference data.

        With a key only that entry goes; without one every reference entry
        goes. Returns the number of entries removed.
        """
        if key is not None:
            return int(self.cache.invalidate(key))
        return self.cache.invalidate_prefix(CACHE_PREFIX)

    def _load_countries(self) -> List[CountryEntry]:
        rows = self.session.query(Country).order_by(Country.name.asc()).all()
        self.logger.debug(f"Loaded {len(rows)} countries")
        return [CountryEntry(a2=row.a2, name=row.name, a3=row.a3) for row in rows]

    def _load_states(self, country_code: str) -> List[StateEntry]:
        rows = (
            State.by_country(self.session, country_code)
            .order_by(State.name.asc())
            .all()
        )
        self.logger.debug(f"Loaded {len(rows)} states for {country_code}")
        return [
            StateEntry(a2=row.a2, country_a2=row.country_a2, name=row.name)
            for row in rows
        ]

    def _load_country_name(self, country_code: str) -> str:
        country = Country.by_code(self.session, country_code).first()
        if country is None:
            raise NotFoundError(f"No country with code {country_code}")
        return country.name

    def _load_state_name(self, state_code: str, country_code: str) -> str:
        state = (
            State.by_country(self.session, country_code)
            .filter(State.a2 == state_code)
            .first()
        )
        if state is None:
            raise NotFoundError(f"No state {state_code} in country {country_code}")
        return state.name
