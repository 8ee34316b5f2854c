from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .batch.controller import register as register_batch
from .common.logging import configure_logging
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_BATCH_WORKERS, DEFAULT_GRACE_MINUTES
from .core.exceptions import DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .punches.controller import register as register_punches

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(exc: NotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return jsonify({"error": str(exc)}), 409


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if not app.config["TESTING"]:
        configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "Starting with settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            batch_max_workers=int(getattr(settings, "BATCH_MAX_WORKERS", DEFAULT_BATCH_WORKERS)),
            grace_minutes=int(getattr(settings, "ATTENDANCE_GRACE_MINUTES", DEFAULT_GRACE_MINUTES)),
        )

    _register_error_handlers(app)
    register_punches(app, container)
    register_attendance(app, container)
    register_batch(app, container)

    return app
