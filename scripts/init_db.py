from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from user_registry.config import get_settings_module
from user_registry.database.bootstrap import apply_schema, list_tables

LOGGER = logging.getLogger("init_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config)
    tables = list_tables(db_config)
    LOGGER.info(
        "OK: Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        len(tables),
    )


if __name__ == "__main__":
    main()
