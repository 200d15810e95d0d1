"""
Flask app factory: registers config, logging, the analyze blueprint and error handlers.
"""

from __future__ import annotations

import os
from typing import Type

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from fwlog_web.config import Config, DevelopmentConfig, ProductionConfig
from fwlog_web.utils import init_logging
from fwlog_web.routes import analyze as analyze_bp


def create_app(config_class: Type[Config] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Config selection
    cfg: Type[Config]
    env = os.getenv("FLASK_ENV", "production").lower()
    if config_class is not None:
        cfg = config_class
    elif env.startswith("dev"):
        cfg = DevelopmentConfig
    else:
        cfg = ProductionConfig
    app.config.from_object(cfg)

    logger = init_logging(app)
    app.logger = logger  # align Flask's logger with ours

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(_e):
        return jsonify({"success": False, "error": "Log file too large"}), 413

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return jsonify({"success": False, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_exception(e: Exception):
        app.logger.exception("Unhandled error")
        return jsonify({"success": False, "error": "Internal server error"}), 500

    app.register_blueprint(analyze_bp.bp)

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok"}), 200

    return app
