"""
Configuration management for the address book.
Handles loading and validating configuration from environment variables and files.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple
from pathlib import Path
from dotenv import load_dotenv

from ..flags import FLAG_ORDER, FlagKind, parse_flags

@dataclass
class Config:
    """Configuration settings for the address book."""

    # Database settings
    database_url: str

    # Logging settings
    log_level: str = 'INFO'

    # Flag settings
    flags: Tuple[FlagKind, ...] = field(default=FLAG_ORDER)
    transactional_flags: bool = True

    # Ownership settings
    strict_ownership: bool = True

    # Input defaults
    default_country: str = 'US'

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Config':
        """Create configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Config: Configuration instance

        Raises:
            ValueError: If required environment variables are missing or a
                flag name is unknown
        """
        if env_file:
            load_dotenv(env_file)
        else:
            load_dotenv()

        database_url = os.getenv('DATABASE_URL')
        if not database_url:
            raise ValueError("DATABASE_URL environment variable is required")

        flag_names = os.getenv('ADDRESS_FLAGS', 'primary,billing,shipping')

        config = cls(
            database_url=database_url,
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            flags=parse_flags(name for name in flag_names.split(',') if name.strip()),
            transactional_flags=os.getenv('TRANSACTIONAL_FLAGS', 'true').lower() == 'true',
            strict_ownership=os.getenv('STRICT_OWNERSHIP', 'true').lower() == 'true',
            default_country=os.getenv('DEFAULT_COUNTRY', 'US').upper()
        )
        config.validate()
        return config

    def validate(self) -> bool:
        """Validate configuration settings.

        Returns:
            bool: True if configuration is valid
        """
        self.flags = parse_flags(self.flags)

        if len(self.default_country) != 2 or not self.default_country.isalpha():
            raise ValueError("default_country must be a 2 letter country code")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")

        return True
