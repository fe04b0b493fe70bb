"""
Utility commands for the address book CLI.
Provides helper commands for system operations and diagnostics.
"""

import click
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...cli.base import BaseCommand, command_error_handler
from ...cli.config import Config
from ...exceptions import PersistenceError

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    def __init__(self, config: Config):
        super().__init__(config)

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")

        try:
            with self.session_manager as session:
                session.execute(text("SELECT 1")).scalar()
        except SQLAlchemyError as e:
            self.logger.error(f"Connection failed: {e}")
            raise PersistenceError(f"Connection failed: {e}") from e

        click.secho(
            "Successfully connected to the database!",
            fg='green'
        )

class InitDbCommand(BaseCommand):
    """Command to create the address and reference tables."""

    @command_error_handler
    def execute(self) -> None:
        """Create any missing tables."""
        try:
            self.session_manager.create_all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to create tables: {e}") from e
        click.secho("Database tables are ready", fg='green')

__all__ = ['TestConnectionCommand', 'InitDbCommand']
