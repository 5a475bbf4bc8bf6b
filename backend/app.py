"""
Track Catalog API Backend
A Flask API that stores Spotify track metadata behind JWT authentication
"""

import atexit
import logging
import os

from flask import Flask, request
from flask_cors import CORS

from config import configure_logging, init_app_config, load_settings
from db_utils import CatalogStore
from spotify_client import SpotifyClient
from auth_service import AuthService
from track_service import TrackService
from errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(settings=None, store=None, catalog=None):
    """
    Build the Flask application

    Args:
        settings: Settings instance (defaults to load_settings())
        store: CatalogStore-compatible object; when omitted a pooled
            PostgreSQL store is opened, its schema created, and it is
            closed at interpreter exit
        catalog: SpotifyClient-compatible object

    Returns:
        Configured Flask app
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    if store is None:
        store = CatalogStore(settings.connection_string)
        store.open()
        store.init_schema()
        atexit.register(store.close)

    if catalog is None:
        catalog = SpotifyClient(
            settings.spotify_client_id,
            settings.spotify_client_secret,
            timeout=settings.spotify_timeout,
        )

    app = Flask(__name__)
    CORS(app)
    init_app_config(app, settings)

    app.extensions['catalog_store'] = store
    app.extensions['auth_service'] = AuthService(
        store, settings.jwt_secret, bcrypt_rounds=settings.bcrypt_rounds)
    app.extensions['track_service'] = TrackService(store, catalog)

    register_error_handlers(app)

    from routes import register_blueprints
    register_blueprints(app)

    # Request/response logging
    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.path}")

    @app.after_request
    def log_response(response):
        logger.info(f"{request.method} {request.path} - {response.status_code}")
        return response

    logger.info(f"Flask app initialized in PID {os.getpid()}")
    return app


if __name__ == '__main__':
    # Running directly with 'python app.py' (not gunicorn)
    application = create_app()
    port = application.config['SETTINGS'].port
    logger.info(f"Starting Flask development server on port {port}...")
    application.run(host='0.0.0.0', port=port)
