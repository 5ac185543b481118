"""Flask application factory for the de-escalation audit dashboard."""

import atexit
import logging
import os

from flask import Flask, redirect, url_for

from .config import get_config
from .services.audit_trail import AuditTrailClient
from .services.poller import AuditTrailPoller


def create_app(config=None):
    """Create and configure the Flask application.

    Args:
        config: Optional configuration object or dict

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    # Load configuration
    if config is None:
        config = get_config()

    if isinstance(config, dict):
        app.config.from_object(get_config())
        app.config.update(config)
    else:
        app.config.from_object(config)

    # Audit trail client and poller
    app.audit_trail_client = AuditTrailClient(
        source_url=app.config.get("DEESCALATION_SOURCE_URL"),
        timeout=app.config.get("DEESCALATION_REQUEST_TIMEOUT"),
    )
    app.audit_trail_poller = AuditTrailPoller(
        app.audit_trail_client,
        interval=app.config.get("DEESCALATION_POLL_INTERVAL", 30),
    )
    # atexit runs in reverse order: poller stops before the session closes
    atexit.register(app.audit_trail_client.close)

    if app.config.get("DEESCALATION_POLLER_ENABLED"):
        app.audit_trail_poller.start()
        atexit.register(app.audit_trail_poller.stop, timeout=5)

    # Register blueprints
    from .routes.api import api_bp
    from .routes.deescalation import deescalation_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(deescalation_bp)  # Dashboard at /deescalation

    @app.route("/")
    def index():
        return redirect(url_for("deescalation.dashboard"))

    # Context processor for templates
    @app.context_processor
    def inject_globals():
        return {
            "app_name": "CosmoHealth",
        }

    return app


def run_dev_server():
    """Run development server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = create_app()
    app.run(
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 5000)),
        debug=app.config.get("DEBUG", False),
        use_reloader=False,
    )


if __name__ == "__main__":
    run_dev_server()
