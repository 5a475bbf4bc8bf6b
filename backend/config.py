"""
Configuration Module for the Track Catalog API
Handles logging setup, environment settings and Flask app initialization
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv
from psycopg.conninfo import make_conninfo

REQUIRED_VARIABLES = (
    'DB_NAME',
    'DB_USER',
    'DB_PASSWORD',
    'DB_HOST',
    'JWT_SECRET',
    'SPOTIFY_CLIENT_ID',
    'SPOTIFY_CLIENT_SECRET',
)


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, read once at startup"""
    db_name: str
    db_user: str
    db_password: str
    db_host: str
    jwt_secret: str
    spotify_client_id: str
    spotify_client_secret: str
    db_port: int = 5432
    db_sslmode: str = 'prefer'
    port: int = 3000
    bcrypt_rounds: int = 10
    spotify_timeout: float = 10.0
    log_level: str = 'INFO'

    @property
    def connection_string(self) -> str:
        return make_conninfo(
            dbname=self.db_name,
            user=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            sslmode=self.db_sslmode,
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables

    Args:
        environ: Mapping to read from (defaults to os.environ after loading .env)

    Returns:
        Settings instance

    Raises:
        ValueError: If any required variable is missing or a number is malformed
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    try:
        return Settings(
            db_name=environ['DB_NAME'],
            db_user=environ['DB_USER'],
            db_password=environ['DB_PASSWORD'],
            db_host=environ['DB_HOST'],
            jwt_secret=environ['JWT_SECRET'],
            spotify_client_id=environ['SPOTIFY_CLIENT_ID'],
            spotify_client_secret=environ['SPOTIFY_CLIENT_SECRET'],
            db_port=int(environ.get('DB_PORT', 5432)),
            db_sslmode=environ.get('DB_SSLMODE', 'prefer'),
            port=int(environ.get('PORT', 3000)),
            bcrypt_rounds=int(environ.get('BCRYPT_ROUNDS', 10)),
            spotify_timeout=float(environ.get('SPOTIFY_TIMEOUT', 10)),
            log_level=environ.get('LOG_LEVEL', 'INFO').upper(),
        )
    except ValueError as e:
        raise ValueError(f"Invalid numeric setting: {e}") from e


def configure_logging(level='INFO'):
    """
    Configure application logging with standard format

    Returns:
        Logger instance for the config module
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(__name__)


def init_app_config(app, settings):
    """
    Initialize Flask app configuration

    This sets up:
    - Custom JSON provider for date formatting
    - The settings object under app.config['SETTINGS']

    Args:
        app: Flask application instance
        settings: Settings instance
    """
    from utils.json_provider import CustomJSONProvider
    app.json = CustomJSONProvider(app)
    app.config['SETTINGS'] = settings
