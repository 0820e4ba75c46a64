from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .database.bootstrap import apply_schema, list_tables

from .container import build_container
from .adjustments.controller import register as register_adjustments
from .afd.controller import register as register_afd
from .audit.controller import register as register_audit
from .punches.controller import register as register_punches
from .timesheet.controller import register as register_timesheet

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", 16 * 1024 * 1024))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        include_national_holidays=bool(getattr(settings, "INCLUDE_NATIONAL_HOLIDAYS", True)),
        holiday_state=getattr(settings, "HOLIDAY_STATE", None),
    )

    register_error_handlers(app)
    register_afd(app, container)
    register_timesheet(app, container)
    register_punches(app, container)
    register_adjustments(app, container)
    register_audit(app, container)

    return app
