"""
Address commands for the address book CLI.
Create, change, remove and list a user's addresses.
"""

import click
from typing import Any, Dict

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...db.models import Address
from ...exceptions import NotFoundError
from ...flags import FLAG_ORDER, FlagKind, is_flagged
from ...helpers import format_address
from ...reference import ReferenceData
from ...repository import AddressRepository

def describe(address: Address) -> str:
    """One line summary with the address's flags."""
    flags = [kind.value for kind in FLAG_ORDER if is_flagged(address, kind)]
    marker = f" [{', '.join(flags)}]" if flags else ""
    locality = ", ".join(part for part in (address.city, address.state, address.country) if part)
    return f"#{address.id}{marker} {address.line1}, {locality}"

class ListAddressesCommand(BaseCommand):
    """Command to list a user's addresses."""

    def __init__(self, config: Config, user_id: int):
        super().__init__(config)
        self.user_id = user_id

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            addresses = AddressRepository.from_config(session, self.config).list_for_user(self.user_id)
            if not addresses:
                click.echo(f"No addresses found for user {self.user_id}")
                return
            for address in addresses:
                click.echo(describe(address))

class ShowAddressCommand(BaseCommand):
    """Command to print one address in postal form."""

    def __init__(self, config: Config, user_id: int, address_id: int):
        super().__init__(config)
        self.user_id = user_id
        self.address_id = address_id

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            repository = AddressRepository.from_config(session, self.config)
            address = repository.find(self.user_id, self.address_id)
            if address is None:
                raise NotFoundError(f"User {self.user_id} has no address with id {self.address_id}")
            click.echo(describe(address))
            click.echo(format_address(address, ReferenceData(session, cache=self.cache)))

class ShowFlaggedCommand(BaseCommand):
    """Command to show which addresses carry each flag."""

    def __init__(self, config: Config, user_id: int):
        super().__init__(config)
        self.user_id = user_id

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            repository = AddressRepository.from_config(session, self.config)
            lookups = {
                FlagKind.PRIMARY: repository.get_primary,
                FlagKind.BILLING: repository.get_billing,
                FlagKind.SHIPPING: repository.get_shipping,
            }
            for kind in FLAG_ORDER:
                address = lookups[kind](self.user_id)
                click.echo(f"{kind.value.title()}: {describe(address) if address else '(none)'}")

class AddAddressCommand(BaseCommand):
    """Command to create an address for a user."""

    def __init__(self, config: Config, user_id: int, fields: Dict[str, Any]):
        super().__init__(config)
        self.user_id = user_id
        self.fields = fields

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            address = AddressRepository.from_config(session, self.config).create(self.user_id, self.fields)
            click.secho(f"Created {describe(address)}", fg='green')

class UpdateAddressCommand(BaseCommand):
    """Command to change fields on one of a user's addresses."""

    def __init__(self, config: Config, user_id: int, address_id: int, fields: Dict[str, Any]):
        super().__init__(config)
        self.user_id = user_id
        self.address_id = address_id
        self.fields = fields

    @command_error_handler
    def execute(self) -> None:
        if not self.fields:
            click.echo("Nothing to update")
            return
        with self.session_manager as session:
            repository = AddressRepository.from_config(session, self.config)
            address = repository.update(self.user_id, self.address_id, self.fields)
            click.secho(f"Updated {describe(address)}", fg='green')

class DeleteAddressCommand(BaseCommand):
    """Command to delete one of a user's addresses."""

    def __init__(self, config: Config, user_id: int, address_id: int):
        super().__init__(config)
        self.user_id = user_id
        self.address_id = address_id

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            deleted = AddressRepository.from_config(session, self.config).delete(self.user_id, self.address_id)
        if deleted:
            click.secho(f"Deleted address #{self.address_id}", fg='green')
        else:
            click.secho(f"Address #{self.address_id} was not deleted", fg='yellow')

class SetFlagCommand(BaseCommand):
    """Command to make an address the primary, billing or shipping one."""

    def __init__(self, config: Config, kind: FlagKind, address_id: int):
        super().__init__(config)
        self.kind = FlagKind(kind)
        self.address_id = address_id

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            repository = AddressRepository.from_config(session, self.config)
            address = repository.flags.handler_for(self.kind)(self.address_id)
            click.secho(f"Set {self.kind.value} on {describe(address)}", fg='green')

__all__ = [
    'ListAddressesCommand',
    'ShowAddressCommand',
    'ShowFlaggedCommand',
    'AddAddressCommand',
    'UpdateAddressCommand',
    'DeleteAddressCommand',
    'SetFlagCommand'
]
