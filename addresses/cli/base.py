"""
Base command infrastructure for the address book CLI.
Provides common functionality and utilities for all commands.
"""

import click
import functools
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError

from .config import Config
from ..cache import ReferenceCache, default_cache
from ..db.session import SessionManager
from ..exceptions import AddressBookError, ValidationError

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: Config, cache: Optional[ReferenceCache] = None):
        self.config = config
        self.cache = cache if cache is not None else default_cache
        self.logger = logging.getLogger(self.__class__.__name__)
        self._session_manager = None

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def session_manager(self) -> SessionManager:
        """Get or create the session manager."""
        if self._session_manager is None:
            if self.debug:
                self.logger.debug(f"Creating new engine for {self.config.database_url}")
            self._session_manager = SessionManager(self.config.database_url)
        return self._session_manager

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

def command_error_handler(f):
    """Decorator to handle command execution errors consistently."""
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if self.debug:
            self.logger.debug(f"Starting command execution: {f.__name__}")
        try:
            result = f(self, *args, **kwargs)
        except ValidationError as e:
            click.secho("Error: invalid address", fg='red', err=True)
            for field, messages in e.errors.items():
                click.secho(f"  {field}: {', '.join(messages)}", fg='red', err=True)
            raise click.Abort()
        except AddressBookError as e:
            click.secho(f"Error: {e}", fg='red', err=True)
            if self.debug:
                self.logger.debug(f"Command failed with error: {e}", exc_info=True)
            raise click.Abort()
        except SQLAlchemyError as e:
            click.secho(f"Database error: {e}", fg='red', err=True)
            self.logger.debug("Database error details:", exc_info=True)
            raise click.Abort()

        if self.debug:
            self.logger.debug(f"Command completed in {time.time() - start:.3f}s")
        return result
    return wrapper
