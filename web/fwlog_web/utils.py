"""
Helpers for the web layer: logging setup and request-to-pipeline translation.
"""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask

from fwlog_compactor import FilterOptions, ValidationError, build_options

_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def init_logging(app: Flask) -> logging.Logger:
    """Console logger + rotating file handler at LOG_FILE."""
    log_level = getattr(logging, app.config["LOG_LEVEL"].upper(), logging.INFO)
    logger = logging.getLogger("fwlog_web")
    logger.setLevel(log_level)
    logger.propagate = False  # avoid duplicate logs if root has handlers

    # create_app may run more than once per process (tests)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    log_file = Path(app.config["LOG_FILE"])
    log_file.parent.mkdir(parents=True, exist_ok=True)

    for handler in (
        logging.StreamHandler(),
        RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5),
    ):
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return logger


def parse_options_field(raw: Optional[str]) -> Mapping[str, Any]:
    """Decode the JSON `options` form field; absent or blank means no filters."""
    if raw is None or not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"options is not valid JSON: {e.msg}") from e
    if not isinstance(body, dict):
        raise ValidationError("options must be a JSON object")
    return body


def options_from_body(body: Mapping[str, Any]) -> FilterOptions:
    """
    Map request option names onto FilterOptions.

    Values are handed to pydantic untouched, so "false" stays false and
    anything that is not a boolean, port list, HH:MM or minute count is
    rejected with ValidationError.
    """
    return build_options(
        remove_infra_port=body.get("remove_infra_port", False),
        destination_ports=body.get("destination_ports"),
        window_start=body.get("date_time"),
        window_length=body.get("interval"),
        window_mode=body.get("window_mode", "exclude"),
    )
