"""Initialize the Flask app and its extensions."""

import os

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from .constants import (
    CHALLENGERMODE_API_URL,
    CHALLENGERMODE_GRAPHQL_URL,
    DEFAULT_UPSTREAM_TIMEOUT,
    FACEIT_API_URL,
)
from .extensions import cache, csrf, faceit, roster

QUICK_TOURNAMENTS = [
    {
        "id": "0317a85e-e080-4b44-6f9c-08de30f37986",
        "name": "Deildarkeppni RISI",
        "subtitle": "Vor 2026 - Nedri Deildir",
    },
]


def _clean_secret(value):
    """Strip surrounding quotes and whitespace pasted along with a credential."""
    if value is None:
        return None
    return value.strip().strip("'\"").strip() or None


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FACEIT_API_KEY=_clean_secret(os.environ.get("FACEIT_API_KEY")),
        FACEIT_API_URL=os.environ.get("FACEIT_API_URL") or FACEIT_API_URL,
        CHALLENGERMODE_REFRESH_KEY=_clean_secret(
            os.environ.get("CHALLENGERMODE_REFRESH_KEY")
        ),
        CHALLENGERMODE_API_URL=os.environ.get("CHALLENGERMODE_API_URL")
        or CHALLENGERMODE_API_URL,
        CHALLENGERMODE_GRAPHQL_URL=os.environ.get("CHALLENGERMODE_GRAPHQL_URL")
        or CHALLENGERMODE_GRAPHQL_URL,
        CACHE_DIR=os.environ.get("CACHE_DIR")
        or os.path.join(app.instance_path, "cache"),
        UPSTREAM_TIMEOUT=float(
            os.environ.get("UPSTREAM_TIMEOUT") or DEFAULT_UPSTREAM_TIMEOUT
        ),
        QUICK_TOURNAMENTS=QUICK_TOURNAMENTS,
    )

    if test_config:
        app.config.update(test_config)

    if not app.config["FACEIT_API_KEY"]:
        app.logger.warning("FACEIT_API_KEY is not set; stats lookups will fail.")
    if not app.config["CHALLENGERMODE_REFRESH_KEY"]:
        app.logger.warning(
            "CHALLENGERMODE_REFRESH_KEY is not set; tournament lookups will fail."
        )

    # Ensure the instance folder exists
    os.makedirs(app.instance_path, exist_ok=True)

    # Initialize extensions
    csrf.init_app(app)
    cache.init_app(app)
    roster.init_app(app)
    faceit.init_app(app)

    # Register blueprints
    from . import main as main_bp

    app.register_blueprint(main_bp.bp)

    from . import intel as intel_bp

    app.register_blueprint(intel_bp.bp)

    from . import api as api_bp

    csrf.exempt(api_bp.bp)
    app.register_blueprint(api_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
