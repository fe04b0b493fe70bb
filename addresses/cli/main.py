"""
Core CLI implementation for the address book package.
"""

import click
from pathlib import Path
from typing import Any, Dict, Optional

from .config import Config
from .logging import setup_logging, get_logger
from ..commands.utils import TestConnectionCommand, InitDbCommand
from ..commands.reference import (
    LoadReferenceCommand,
    ListCountriesCommand,
    ListStatesCommand,
    CountryNameCommand,
    StateNameCommand
)
from ..commands.address import (
    ListAddressesCommand,
    ShowAddressCommand,
    ShowFlaggedCommand,
    AddAddressCommand,
    UpdateAddressCommand,
    DeleteAddressCommand,
    SetFlagCommand
)
from ..flags import FLAG_ORDER

FIELD_OPTIONS = [
    click.option('--addressee', help='Recipient name'),
    click.option('--organization', help='Company or organization'),
    click.option('--line1', help='Street address'),
    click.option('--line2', help='Apartment, suite, unit'),
    click.option('--city', help='City'),
    click.option('--state', help='2 letter state/province code'),
    click.option('--postal-code', 'postal_code', help='ZIP or postal code'),
    click.option('--country', help='2 letter country code'),
    click.option('--phone', help='Phone number'),
]

def field_options(f):
    """Attach the address field options to a command."""
    for option in reversed(FIELD_OPTIONS):
        f = option(f)
    return f

def collect_fields(**values: Any) -> Dict[str, Any]:
    """Keep only the options that were given."""
    return {name: value for name, value in values.items() if value is not None}

def get_config(ctx: click.Context) -> Config:
    return ctx.obj['config']

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.pass_context
def cli(ctx, debug: bool):
    """Address book CLI tool"""
    # Store debug flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    try:
        config = Config.from_env()
    except ValueError as e:
        click.echo(f"Error initializing configuration: {str(e)}", err=True)
        ctx.exit(1)
    ctx.obj['config'] = config

    setup_logging(debug=debug, level=config.log_level)
    logger = get_logger('cli')
    if debug:
        logger.debug("Debug mode enabled")
        logger.debug(f"Using database: {config.database_url}")

@cli.command('test-connection')
@click.pass_context
def test_connection(ctx):
    """Test database connectivity"""
    TestConnectionCommand(get_config(ctx)).execute()

@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the address and reference tables"""
    InitDbCommand(get_config(ctx)).execute()

# Reference Data Commands Group
@cli.group()
def reference():
    """Country and state reference data commands"""
    pass

@reference.command('load')
@click.option('--countries', type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
              help='Countries CSV (a2,a3,name); bundled list if omitted')
@click.option('--states', type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
              help='States CSV (country_a2,a2,name); bundled list if omitted')
@click.pass_context
def load_reference(ctx, countries: Optional[Path], states: Optional[Path]):
    """Seed the country and state tables."""
    LoadReferenceCommand(get_config(ctx), countries, states).execute()

@reference.command('countries')
@click.pass_context
def list_countries(ctx):
    """List all countries."""
    ListCountriesCommand(get_config(ctx)).execute()

@reference.command('states')
@click.argument('country', default='US')
@click.pass_context
def list_states(ctx, country: str):
    """List the states/provinces of COUNTRY."""
    ListStatesCommand(get_config(ctx), country).execute()

@reference.command('country-name')
@click.argument('code')
@click.pass_context
def country_name(ctx, code: str):
    """Print the name of the country with CODE."""
    CountryNameCommand(get_config(ctx), code).execute()

@reference.command('state-name')
@click.argument('code')
@click.option('--country', default='US', show_default=True, help='Country the state belongs to')
@click.pass_context
def state_name(ctx, code: str, country: str):
    """Print the name of the state with CODE."""
    StateNameCommand(get_config(ctx), code, country).execute()

# Address Commands Group
@cli.group()
def address():
    """Address management commands"""
    pass

@address.command('list')
@click.argument('user_id', type=int)
@click.pass_context
def list_addresses(ctx, user_id: int):
    """List the addresses of USER_ID, primary first."""
    ListAddressesCommand(get_config(ctx), user_id).execute()

@address.command('show')
@click.argument('user_id', type=int)
@click.argument('address_id', type=int)
@click.pass_context
def show_address(ctx, user_id: int, address_id: int):
    """Print one of USER_ID's addresses."""
    ShowAddressCommand(get_config(ctx), user_id, address_id).execute()

@address.command('flags')
@click.argument('user_id', type=int)
@click.pass_context
def show_flags(ctx, user_id: int):
    """Show the primary, billing and shipping addresses of USER_ID."""
    ShowFlaggedCommand(get_config(ctx), user_id).execute()

@address.command('add')
@click.argument('user_id', type=int)
@field_options
@click.option('--primary', 'is_primary', is_flag=True, help='Make this the primary address')
@click.option('--billing', 'is_billing', is_flag=True, help='Make this the billing address')
@click.option('--shipping', 'is_shipping', is_flag=True, help='Make this the shipping address')
@click.pass_context
def add_address(ctx, user_id: int, **values):
    """Create an address for USER_ID."""
    AddAddressCommand(get_config(ctx), user_id, collect_fields(**values)).execute()

@address.command('update')
@click.argument('user_id', type=int)
@click.argument('address_id', type=int)
@field_options
@click.option('--primary/--no-primary', 'is_primary', default=None, help='Set or clear the primary flag')
@click.option('--billing/--no-billing', 'is_billing', default=None, help='Set or clear the billing flag')
@click.option('--shipping/--no-shipping', 'is_shipping', default=None, help='Set or clear the shipping flag')
@click.pass_context
def update_address(ctx, user_id: int, address_id: int, **values):
    """Change fields on one of USER_ID's addresses."""
    UpdateAddressCommand(get_config(ctx), user_id, address_id, collect_fields(**values)).execute()

@address.command('delete')
@click.argument('user_id', type=int)
@click.argument('address_id', type=int)
@click.pass_context
def delete_address(ctx, user_id: int, address_id: int):
    """Delete one of USER_ID's addresses."""
    DeleteAddressCommand(get_config(ctx), user_id, address_id).execute()

@address.command('set-flag')
@click.argument('kind', type=click.Choice([kind.value for kind in FLAG_ORDER]))
@click.argument('address_id', type=int)
@click.pass_context
def set_flag(ctx, kind: str, address_id: int):
    """Make ADDRESS_ID the user's KIND address."""
    SetFlagCommand(get_config(ctx), kind, address_id).execute()
