"""Tests for the command line interface."""

import logging

import pytest
from click.testing import CliRunner

from ..cli.main import cli

@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner against a fresh SQLite file with tables created."""
    monkeypatch.setenv('DATABASE_URL', f"sqlite:///{tmp_path / 'addresses.db'}")
    runner = CliRunner()
    result = runner.invoke(cli, ['init-db'])
    assert result.exit_code == 0, result.output
    yield runner
    # setup_logging points the root handler at the runner's captured stream
    logging.getLogger().handlers.clear()

def invoke(runner, *args):
    return runner.invoke(cli, list(args))

def test_test_connection(runner):
    result = invoke(runner, 'test-connection')

    assert result.exit_code == 0
    assert 'Successfully connected' in result.output

def test_missing_database_url(monkeypatch):
    monkeypatch.delenv('DATABASE_URL', raising=False)

    result = CliRunner().invoke(cli, ['test-connection'])

    assert result.exit_code == 1
    assert 'DATABASE_URL' in result.output

def test_reference_commands(runner):
    """Test seeding and querying reference data."""
    result = invoke(runner, 'reference', 'load')
    assert result.exit_code == 0, result.output
    assert 'Countries Created: 249' in result.output

    result = invoke(runner, 'reference', 'country-name', 'de')
    assert result.output.strip() == 'Germany'

    result = invoke(runner, 'reference', 'state-name', 'ON', '--country', 'CA')
    assert result.output.strip() == 'Ontario'

    result = invoke(runner, 'reference', 'states', 'CA')
    assert 'ON  Ontario' in result.output

    result = invoke(runner, 'reference', 'countries')
    assert result.output.splitlines()[0] == 'AF  Afghanistan'

def test_reference_bad_code(runner):
    result = invoke(runner, 'reference', 'states', 'USA')

    assert result.exit_code == 1
    assert '2 letter code' in result.output

def test_reference_unknown_country(runner):
    result = invoke(runner, 'reference', 'country-name', 'ZZ')

    assert result.exit_code == 1
    assert 'No country with code ZZ' in result.output

def test_address_lifecycle(runner):
    """Test adding, flagging, updating and deleting addresses."""
    result = invoke(runner, 'address', 'add', '1', '--line1', '1 Main St', '--city', 'Seattle',
                    '--state', 'wa', '--primary')
    assert result.exit_code == 0, result.output
    assert 'Created #1 [primary] 1 Main St, Seattle, WA, US' in result.output

    result = invoke(runner, 'address', 'add', '1', '--line1', '2 Pine St', '--city', 'Tacoma')
    assert result.exit_code == 0, result.output

    result = invoke(runner, 'address', 'set-flag', 'primary', '2')
    assert result.exit_code == 0, result.output

    result = invoke(runner, 'address', 'flags', '1')
    assert 'Primary: #2 [primary] 2 Pine St' in result.output
    assert 'Billing: (none)' in result.output

    result = invoke(runner, 'address', 'update', '1', '1', '--city', 'Spokane', '--shipping')
    assert result.exit_code == 0, result.output

    result = invoke(runner, 'address', 'list', '1')
    lines = result.output.splitlines()
    assert lines[0].startswith('#2 [primary]')
    assert lines[1].startswith('#1 [shipping] 1 Main St, Spokane')

    result = invoke(runner, 'address', 'show', '1', '1')
    assert 'Spokane, WA' in result.output

    result = invoke(runner, 'address', 'delete', '1', '1')
    assert result.exit_code == 0, result.output
    assert 'Deleted address #1' in result.output

    result = invoke(runner, 'address', 'list', '1')
    assert len(result.output.splitlines()) == 1

def test_address_add_invalid(runner):
    result = invoke(runner, 'address', 'add', '1', '--city', 'Seattle', '--country', 'USA')

    assert result.exit_code == 1
    assert 'line1: is required' in result.output
    assert 'country: must be exactly 2 characters' in result.output

def test_address_delete_other_users(runner):
    """Test a user cannot delete someone else's address."""
    invoke(runner, 'address', 'add', '1', '--line1', '1 Main St', '--city', 'Seattle')

    result = invoke(runner, 'address', 'delete', '2', '1')
    assert result.exit_code == 1

    result = invoke(runner, 'address', 'list', '1')
    assert '1 Main St' in result.output

def test_address_list_empty(runner):
    result = invoke(runner, 'address', 'list', '5')

    assert result.exit_code == 0
    assert 'No addresses found for user 5' in result.output
