"""Tests for country and state lookups."""

import pytest

from ..db.models import Country
from ..exceptions import InvalidArgumentError, NotFoundError
from ..reference import (
    COUNTRIES_KEY,
    CountryEntry,
    ReferenceData,
    country_name_key,
    state_name_key,
    states_key
)

def test_countries_sorted_by_name(reference):
    names = [country.name for country in reference.countries()]

    assert names == ['Afghanistan', 'Canada', 'Germany', 'United States']
    assert reference.countries()[0] == CountryEntry(a2='AF', name='Afghanistan', a3='AFG')

def test_countries_query_runs_once(reference, cache, populated_session):
    """Test repeated calls are served from the cache, even after the table changes."""
    first = reference.countries()
    populated_session.add(Country(a2='FR', a3='FRA', name='France'))
    populated_session.commit()
    second = reference.countries()

    assert first == second
    assert cache.misses == 1
    assert cache.hits == 1

def test_invalidate_picks_up_changes(reference, populated_session):
    reference.countries()
    populated_session.add(Country(a2='FR', a3='FRA', name='France'))
    populated_session.commit()

    assert reference.invalidate(COUNTRIES_KEY) == 1
    assert 'France' in [country.name for country in reference.countries()]

def test_invalidate_everything(reference, cache):
    reference.countries()
    reference.states('US')
    reference.country_name('CA')

    assert reference.invalidate() == 3
    assert len(cache) == 0

def test_states_for_country(reference, cache):
    states = reference.states('US')

    assert [state.a2 for state in states] == ['CA', 'NY', 'WA']
    assert all(state.country_a2 == 'US' for state in states)
    assert states_key('US') in cache

def test_states_defaults_to_us(reference):
    assert [state.name for state in reference.states()] == ['California', 'New York', 'Washington']

def test_states_lowercase_code(reference):
    assert [state.a2 for state in reference.states('ca')] == ['BC', 'ON']

@pytest.mark.parametrize('code', ['USA', 'U', '', None])
def test_states_rejects_bad_codes(reference, code):
    with pytest.raises(InvalidArgumentError):
        reference.states(code)

def test_states_unknown_country_is_empty(reference):
    assert reference.states('ZZ') == []

def test_country_name(reference, cache):
    assert reference.country_name('DE') == 'Germany'
    assert reference.country_name('de') == 'Germany'
    assert cache.get(country_name_key('DE')) == 'Germany'

@pytest.mark.parametrize('code', ['USA', 'U'])
def test_country_name_rejects_bad_codes(reference, code):
    with pytest.raises(InvalidArgumentError):
        reference.country_name(code)

def test_country_name_not_found_is_not_cached(reference, cache):
    with pytest.raises(NotFoundError):
        reference.country_name('ZZ')
    assert not cache.has(country_name_key('ZZ'))

def test_state_name(reference, cache):
    assert reference.state_name('NY') == 'New York'
    assert reference.state_name('on', 'ca') == 'Ontario'
    assert cache.has(state_name_key('ON', 'CA'))

def test_state_name_is_scoped_to_country(reference):
    """Test CA means California in the US but is not a Canadian province."""
    assert reference.state_name('CA', 'US') == 'California'
    with pytest.raises(NotFoundError):
        reference.state_name('CA', 'CA')

@pytest.mark.parametrize('state, country', [('NYC', 'US'), ('NY', 'USA'), ('N', 'US')])
def test_state_name_rejects_bad_codes(reference, state, country):
    with pytest.raises(InvalidArgumentError):
        reference.state_name(state, country)

def test_invalid_argument_is_value_error(reference):
    with pytest.raises(ValueError):
        reference.country_name('USA')

def test_shared_default_cache(populated_session):
    """Test instances without an explicit cache share the process-wide one."""
    ReferenceData(populated_session).countries()
    populated_session.add(Country(a2='FR', a3='FRA', name='France'))
    populated_session.commit()

    other = ReferenceData(populated_session)
    assert other.cache.has(COUNTRIES_KEY)
    assert [country.a2 for country in other.countries()] == ['AF', 'CA', 'DE', 'US']
