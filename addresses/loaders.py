"""Seed the country and state tables from CSV files."""
import logging
from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd
from sqlalchemy.orm import Session

from .cache import ReferenceCache, default_cache
from .db.models import Country, State
from .db.session import commit_or_raise
from .reference import CACHE_PREFIX
from .utils.normalization import clean_field, normalize_code

COUNTRY_COLUMNS = ['a2', 'a3', 'name']
STATE_COLUMNS = ['country_a2', 'a2', 'name']

PathLike = Union[str, Path]


def _read_csv(path: Optional[PathLike], bundled: str, columns: List[str]) -> pd.DataFrame:
    if path is None:
        data_file = resources.files('addresses.data').joinpath(bundled)
        with data_file.open('r', encoding='utf-8') as f:
            # "NA" is Namibia, not a missing value
            df = pd.read_csv(f, dtype=str, keep_default_na=False)
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding='utf-8')

    missing = [column for column in columns if column not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {', '.join(missing)}")
    return df[columns]


class ReferenceLoader:
    """Inserts new reference rows and renames changed ones."""

    def __init__(self, session: Session, cache: Optional[ReferenceCache] = None):
        self.session = session
        self.cache = cache if cache is not None else default_cache
        self.logger = logging.getLogger(self.__class__.__name__)
        self.stats = {
            'countries_created': 0,
            'countries_updated': 0,
            'states_created': 0,
            'states_updated': 0,
            'rows_skipped': 0
        }

    def load(
        self,
        countries: Optional[PathLike] = None,
        states: Optional[PathLike] = None
    ) -> Dict[str, int]:
        """Load both tables and clear cached reference data.

        Args:
            countries: Countries CSV (a2, a3, name). Bundled file if None.
            states: States CSV (country_a2, a2, name). Bundled file if None.

        Returns:
            Counts of created, updated and skipped rows
        """
        self.load_countries(countries)
        self.load_states(states)
        commit_or_raise(self.session)
        removed = self.cache.invalidate_prefix(CACHE_PREFIX)
        self.logger.info(f"Reference data loaded, {removed} cache entries cleared")
        return dict(self.stats)

    def load_countries(self, path: Optional[PathLike] = None) -> None:
        df = _read_csv(path, 'countries.csv', COUNTRY_COLUMNS)
        existing = {country.a2: country for country in self.session.query(Country).all()}

        for _, row in df.iterrows():
            a2, a3, name = self._clean_row(row['a2'], row['a3'], row['name'])
            if a2 is None:
                continue

            country = existing.get(a2)
            if country is None:
                country = Country(a2=a2, a3=a3, name=name)
                self.session.add(country)
                existing[a2] = country
                self.stats['countries_created'] += 1
            elif country.name != name or country.a3 != a3:
                country.name = name
                country.a3 = a3
                self.stats['countries_updated'] += 1

        self.session.flush()
        self.logger.debug(
            f"Countries: {self.stats['countries_created']} created, "
            f"{self.stats['countries_updated']} updated"
        )

    def load_states(self, path: Optional[PathLike] = None) -> None:
        df = _read_csv(path, 'states.csv', STATE_COLUMNS)
        existing = {
            (state.country_a2, state.a2): state
            for state in self.session.query(State).all()
        }

        for _, row in df.iterrows():
            country_a2, a2, name = self._clean_row(
                row['country_a2'], row['a2'], row['name'], second_required=True
            )
            if country_a2 is None or a2 is None:
                continue

            state = existing.get((country_a2, a2))
            if state is None:
                state = State(country_a2=country_a2, a2=a2, name=name)
                self.session.add(state)
                existing[(country_a2, a2)] = state
                self.stats['states_created'] += 1
            elif state.name != name:
                state.name = name
                self.stats['states_updated'] += 1

        self.session.flush()
        self.logger.debug(
            f"States: {self.stats['states_created']} created, "
            f"{self.stats['states_updated']} updated"
        )

    def _clean_row(
        self,
        first,
        second,
        name,
        second_required: bool = False
    ) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """Normalize two codes and a name, skipping incomplete rows."""
        name = clean_field(name)
        first = normalize_code(first)
        second = normalize_code(second)

        complete = bool(name) and first is not None and len(first) == 2
        if second_required:
            complete = complete and second is not None and len(second) == 2
        if not complete:
            self.logger.warning(f"Skipping incomplete reference row: {first}, {second}, {name}")
            self.stats['rows_skipped'] += 1
            return None, None, None
        return first, second, name
