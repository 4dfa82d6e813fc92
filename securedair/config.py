"""
Configuration management for Secured Air.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()


DEFAULT_FREE_COUNTRIES: Tuple[str, ...] = ('Israel',)

DEFAULT_PRO_COUNTRIES: Tuple[str, ...] = (
    'Israel',
    'United States',
    'Canada',
    'United Kingdom',
    'Germany',
    'France',
    'Australia',
    'Japan',
    'Brazil',
    'China',
    'India',
)


def _parse_countries(value: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Parse a comma-separated country list, or return default if empty."""
    if not value:
        return default
    countries = tuple(c.strip() for c in value.split(',') if c.strip())
    return countries or default


@dataclass(frozen=True)
class AuthConfig:
    """Credential signing settings."""
    secret_key: str = os.getenv('TOKEN_SECRET', 'fallback-secret-key')
    token_ttl_seconds: int = int(os.getenv('TOKEN_TTL_SECONDS', '1800'))


@dataclass(frozen=True)
class DataConfig:
    """Location of the reference data CSV files."""
    data_dir: Path = Path(os.getenv('DATA_DIR', 'data'))
    airlines_file: str = 'airlines.csv'
    airports_file: str = 'airports.csv'
    routes_file: str = 'routes.csv'

    @property
    def airlines_path(self) -> Path:
        return self.data_dir / self.airlines_file

    @property
    def airports_path(self) -> Path:
        return self.data_dir / self.airports_file

    @property
    def routes_path(self) -> Path:
        return self.data_dir / self.routes_file


@dataclass(frozen=True)
class PolicyConfig:
    """Per-tier country allow-lists. ELITE is always unrestricted."""
    free_countries: Tuple[str, ...] = field(
        default_factory=lambda: _parse_countries(
            os.getenv('FREE_TIER_COUNTRIES', ''), DEFAULT_FREE_COUNTRIES
        )
    )
    pro_countries: Tuple[str, ...] = field(
        default_factory=lambda: _parse_countries(
            os.getenv('PRO_TIER_COUNTRIES', ''), DEFAULT_PRO_COUNTRIES
        )
    )


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    auth: AuthConfig
    data: DataConfig
    policy: PolicyConfig

    # Flask settings
    secret_key: str
    debug: bool
    port: int
    cors_origins: str


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        auth=AuthConfig(),
        data=DataConfig(),
        policy=PolicyConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '3000')),
        cors_origins=os.getenv('CORS_ORIGINS', '*'),
    )


# Singleton instance
config = load_config()
