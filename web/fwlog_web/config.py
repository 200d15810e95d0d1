"""
Configuration objects for the Flask application.

Override via environment variables. Nothing is stored server-side: uploads are
read from the request stream and discarded with it.
"""

from __future__ import annotations
import os

from fwlog_compactor.intake.csv_source import DEFAULT_ENCODING


class Config:
    """Base configuration (safe defaults)."""

    # Largest accepted export
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(64 * 1024 * 1024)))  # 64 MiB

    # Encoding assumed for uploads that do not name one ("encoding" form field)
    LOG_ENCODING = os.getenv("FWLOG_ENCODING", DEFAULT_ENCODING)

    # Logging
    LOG_FILE = os.getenv("APP_LOG_FILE", "logs/app.log")
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO")


class ProductionConfig(Config):
    """Production overrides."""
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development overrides."""
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "DEBUG")
