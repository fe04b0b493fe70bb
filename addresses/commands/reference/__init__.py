"""
Reference data commands for the address book CLI.
Seeds and queries the country and state tables.
"""

import click
from pathlib import Path
from typing import Optional

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...loaders import ReferenceLoader
from ...reference import ReferenceData

class LoadReferenceCommand(BaseCommand):
    """Command to seed countries and states from CSV files."""

    def __init__(self, config: Config, countries: Optional[Path] = None, states: Optional[Path] = None):
        super().__init__(config)
        self.countries = countries
        self.states = states

    @command_error_handler
    def execute(self) -> None:
        """Load the CSV files, falling back to the bundled data."""
        self.session_manager.create_all()
        with self.session_manager as session:
            loader = ReferenceLoader(session, cache=self.cache)
            try:
                stats = loader.load(self.countries, self.states)
            except ValueError as e:
                raise click.BadParameter(str(e))

        click.echo("\nReference Data Summary:")
        click.echo(f"Countries Created: {stats['countries_created']}")
        click.echo(f"Countries Updated: {stats['countries_updated']}")
        click.echo(f"States Created: {stats['states_created']}")
        click.echo(f"States Updated: {stats['states_updated']}")
        if stats['rows_skipped']:
            click.secho(f"Rows Skipped: {stats['rows_skipped']}", fg='yellow')

class ListCountriesCommand(BaseCommand):
    """Command to list every country."""

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            countries = ReferenceData(session, cache=self.cache).countries()

        if not countries:
            click.echo("No countries found in database")
            return
        for country in countries:
            click.echo(f"{country.a2}  {country.name}")

class ListStatesCommand(BaseCommand):
    """Command to list the states/provinces of a country."""

    def __init__(self, config: Config, country: str):
        super().__init__(config)
        self.country = country

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            states = ReferenceData(session, cache=self.cache).states(self.country)

        if not states:
            click.echo(f"No states found for {self.country.upper()}")
            return
        for state in states:
            click.echo(f"{state.a2}  {state.name}")

class CountryNameCommand(BaseCommand):
    """Command to print a country's name."""

    def __init__(self, config: Config, code: str):
        super().__init__(config)
        self.code = code

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            click.echo(ReferenceData(session, cache=self.cache).country_name(self.code))

class StateNameCommand(BaseCommand):
    """Command to print a state's name."""

    def __init__(self, config: Config, code: str, country: str):
        super().__init__(config)
        self.code = code
        self.country = country

    @command_error_handler
    def execute(self) -> None:
        with self.session_manager as session:
            reference = ReferenceData(session, cache=self.cache)
            click.echo(reference.state_name(self.code, self.country))

__all__ = [
    'LoadReferenceCommand',
    'ListCountriesCommand',
    'ListStatesCommand',
    'CountryNameCommand',
    'StateNameCommand'
]
