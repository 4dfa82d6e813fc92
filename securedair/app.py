"""
Secured Air Flask Application.

Main entry point for the web application. Initializes:
- Tier policy table and credential manager
- Reference data (airlines, airports, routes)
- API routes
- Error handlers for the access layer

Usage:
    python -m securedair.app

Or with gunicorn:
    gunicorn 'securedair.app:create_app()'
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from securedair import __version__
from securedair.access import (
    AccessDenied,
    CredentialManager,
    InvalidTier,
    PolicyTable,
    UnknownTier,
)
from securedair.api import airlines_bp, airports_bp, auth_bp, routes_bp
from securedair.api.access import basic_access
from securedair.config import config
from securedair.ingestion import load_catalogue
from securedair.services import AviationCatalogue

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)

SERVICE_NAME = 'secured-air-api'


def create_app(
    catalogue: Optional[AviationCatalogue] = None,
    credentials: Optional[CredentialManager] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        catalogue: Pre-built datasets. Loaded from the configured data
                   directory when omitted. Pass one in for testing.
        credentials: Credential manager. Built from the auth config when
                     omitted.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key
    app.config['STARTED_AT'] = time.time()
    # Keep country groups in the order they were built
    app.json.sort_keys = False

    # Enable CORS for API endpoints
    CORS(app, resources={r'/*': {'origins': config.cors_origins}})

    if catalogue is None:
        policies = PolicyTable.from_config(config.policy)
        logger.info('Loading reference data...')
        catalogue = load_catalogue(config.data, policies)

    if credentials is None:
        credentials = CredentialManager(
            secret_key=config.auth.secret_key,
            ttl_seconds=config.auth.token_ttl_seconds,
        )

    app.config['CATALOGUE'] = catalogue
    app.config['CREDENTIALS'] = credentials
    logger.info(f'Serving datasets: {catalogue.sizes}')

    # Register API blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(airlines_bp)
    app.register_blueprint(airports_bp)
    app.register_blueprint(routes_bp)

    # -------------------------------------------------------------------------
    # Index routes
    # -------------------------------------------------------------------------

    @app.route('/')
    @basic_access
    def index():
        return 'Welcome to Secured Air API'

    @app.route('/health')
    @basic_access
    def health():
        """Service health with uptime."""
        started_at = app.config['STARTED_AT']
        return {
            'name': SERVICE_NAME,
            'version': __version__,
            'status': 'OK',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'startupTime': datetime.fromtimestamp(started_at, timezone.utc).isoformat(),
            'uptime': round(time.time() - started_at, 3),
        }

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(AccessDenied)
    def access_denied(e: AccessDenied):
        return jsonify({
            'success': False,
            'error': e.reason,
            'currentTier': e.tier,
            'requiredTier': e.required_tier,
        }), 403

    @app.errorhandler(InvalidTier)
    def invalid_tier(e: InvalidTier):
        return jsonify({'success': False, 'error': str(e)}), 400

    @app.errorhandler(UnknownTier)
    def unknown_tier(e: UnknownTier):
        logger.error(f'Policy table misconfigured: {e}')
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'success': False, 'error': 'Not found'}), 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()

    logger.info(f'Starting Secured Air API on http://localhost:{config.port}')

    app.run(
        host='0.0.0.0',
        port=config.port,
        debug=config.debug,
    )


if __name__ == '__main__':
    run_development_server()
