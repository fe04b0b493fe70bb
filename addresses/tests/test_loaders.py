"""Tests for seeding reference tables."""

import pytest

from ..db.models import Country, State
from ..loaders import ReferenceLoader
from ..reference import COUNTRIES_KEY, ReferenceData

def test_load_bundled_data(session, cache):
    """Test the bundled CSVs load completely."""
    stats = ReferenceLoader(session, cache=cache).load()

    assert stats['countries_created'] == 249
    assert stats['states_created'] == 72
    assert stats['rows_skipped'] == 0
    assert session.query(Country).count() == 249
    assert session.get(Country, 'NA').name == 'Namibia'
    assert session.query(State).filter_by(country_a2='CA').count() == 13

def test_load_is_idempotent(session, cache):
    ReferenceLoader(session, cache=cache).load()
    stats = ReferenceLoader(session, cache=cache).load()

    assert stats['countries_created'] == 0
    assert stats['countries_updated'] == 0
    assert stats['states_created'] == 0
    assert session.query(Country).count() == 249

def test_load_custom_files(session, cache, tmp_path):
    """Test custom files insert new rows, rename changed ones and skip bad rows."""
    countries = tmp_path / 'countries.csv'
    countries.write_text("a2,a3,name\nus,USA,United States of America\nXK,,Kosovo\nABC,,Too Long\n,,\n")
    states = tmp_path / 'states.csv'
    states.write_text("country_a2,a2,name\nXK,PR,Pristina\nXK,,Missing Code\n")
    session.add(Country(a2='US', a3='USA', name='United States'))
    session.commit()

    stats = ReferenceLoader(session, cache=cache).load(countries, states)

    assert stats['countries_created'] == 1
    assert stats['countries_updated'] == 1
    assert stats['states_created'] == 1
    assert stats['rows_skipped'] == 3
    assert session.get(Country, 'US').name == 'United States of America'
    assert session.get(Country, 'XK').a3 is None

def test_load_clears_cache(session, cache):
    reference = ReferenceData(session, cache=cache)
    assert reference.countries() == []

    ReferenceLoader(session, cache=cache).load()

    assert COUNTRIES_KEY not in cache
    assert len(reference.countries()) == 249

def test_load_rejects_missing_columns(session, cache, tmp_path):
    countries = tmp_path / 'countries.csv'
    countries.write_text("code,name\nUS,United States\n")

    with pytest.raises(ValueError):
        ReferenceLoader(session, cache=cache).load_countries(countries)
