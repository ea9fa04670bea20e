from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_LOG_LEVEL
from .database.bootstrap import apply_schema, list_tables
from .users.controller import register as register_users

LOGGER = logging.getLogger(__name__)


def configure_logging(level: Optional[str]) -> None:
    numeric_level = getattr(logging, (level or DEFAULT_LOG_LEVEL).upper(), None)
    if not isinstance(numeric_level, int):
        logging.basicConfig(level=logging.INFO)
        LOGGER.warning("Invalid log level: %s, using INFO", level)
        return
    logging.basicConfig(level=numeric_level)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    :param container: prebuilt container; when omitted one is wired over MySQL
        from the active settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", None))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        LOGGER.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            LOGGER.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config)

    register_users(app, container)

    return app
