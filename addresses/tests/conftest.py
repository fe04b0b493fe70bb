"""Shared test fixtures and utilities."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from ..cache import ReferenceCache, default_cache
from ..db.models import Base, Country, State
from ..flags import FlagCoordinator
from ..reference import ReferenceData
from ..repository import AddressRepository

@pytest.fixture
def engine():
    """Create a test database engine."""
    engine = create_engine('sqlite:///:memory:')
    Base.metadata.create_all(engine)
    return engine

@pytest.fixture
def session(engine):
    """Create a test database session."""
    with Session(engine) as session:
        yield session

@pytest.fixture(autouse=True)
def clean_default_cache():
    """Keep the process-wide cache from leaking between tests."""
    default_cache.flush()
    yield
    default_cache.flush()

@pytest.fixture
def cache():
    return ReferenceCache()

@pytest.fixture
def repository(session):
    """Repository with the default rules and transactional flags."""
    return AddressRepository(session)

@pytest.fixture
def legacy_repository(session):
    """Repository with the old behaviour: sequential flag commits, silent foreign deletes."""
    flags = FlagCoordinator(session, transactional=False)
    return AddressRepository(session, flags=flags, strict_ownership=False)

@pytest.fixture
def populated_session(session):
    """Create a session with a few countries and states."""
    session.add_all([
        Country(a2='US', a3='USA', name='United States'),
        Country(a2='CA', a3='CAN', name='Canada'),
        Country(a2='DE', a3='DEU', name='Germany'),
        Country(a2='AF', a3='AFG', name='Afghanistan'),
        State(country_a2='US', a2='WA', name='Washington'),
        State(country_a2='US', a2='CA', name='California'),
        State(country_a2='US', a2='NY', name='New York'),
        State(country_a2='CA', a2='ON', name='Ontario'),
        State(country_a2='CA', a2='BC', name='British Columbia'),
    ])
    session.commit()
    yield session

@pytest.fixture
def reference(populated_session, cache):
    return ReferenceData(populated_session, cache=cache)

def address_fields(**overrides):
    """Valid address input, with overrides."""
    fields = {
        'addressee': 'Jordan Lee',
        'line1': '100 Main St',
        'city': 'Seattle',
        'state': 'WA',
        'postal_code': '98101',
        'country': 'US',
    }
    fields.update(overrides)
    return fields
