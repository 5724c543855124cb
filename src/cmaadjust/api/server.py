"""
Flask Application Factory

Creates and configures the Flask application.
"""

from flask import Flask
from flask_cors import CORS

from cmaadjust.config import get_config
from cmaadjust.api.routes import register_routes
from cmaadjust.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def create_app(test_config=None) -> Flask:
    """Create and configure the Flask application.

    Args:
        test_config: Optional test configuration dict. DATABASE_PATH
            overrides the configured database file.

    Returns:
        Configured Flask application.
    """
    config = get_config()

    setup_logging()

    app = Flask(__name__)

    app.config["DEBUG"] = config.api.debug
    app.config["DATABASE_PATH"] = config.database.path

    if test_config:
        app.config.update(test_config)

    CORS(app)

    register_routes(app)

    logger.info("Flask app created")
    return app


def run_server(host: str = None, port: int = None, debug: bool = None, db_path: str = None):
    """Run the Flask development server.

    Args:
        host: Host to bind to.
        port: Port to bind to.
        debug: Enable debug mode.
        db_path: Adjustments database file. Defaults to the configured path.
    """
    config = get_config()

    host = host or config.api.host
    port = port or config.api.port
    debug = debug if debug is not None else config.api.debug

    app = create_app({"DATABASE_PATH": db_path} if db_path else None)

    logger.info("Starting server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug)
