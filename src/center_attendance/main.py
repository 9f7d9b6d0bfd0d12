from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .call_sessions.controller import register as register_call_sessions
from .centers.controller import register as register_centers
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_TIMEZONE
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables
from .sessions.controller import register as register_sessions
from .whatsapp.controller import register as register_whatsapp

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.http_status >= 500:
            logger.error("%s: %s", e.error_code, e)
        return jsonify({"success": False, "error": e.error_code, "message": str(e)}), e.http_status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"success": False, "error": e.name.lower().replace(" ", "_"), "message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"success": False, "error": "internal_error", "message": "Internal server error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["APP_TIMEZONE"] = getattr(settings, "APP_TIMEZONE", DEFAULT_TIMEZONE)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s tz=%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            app.config["APP_TIMEZONE"],
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[2] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, timezone=app.config["APP_TIMEZONE"])

    _register_error_handlers(app)

    register_centers(app, container)
    register_sessions(app, container)
    register_call_sessions(app, container)
    register_attendance(app, container)
    register_whatsapp(app, container)

    return app
