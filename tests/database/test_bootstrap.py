from __future__ import annotations

from user_registry.database.bootstrap import (
    SCHEMA_PATH,
    _iter_sql_statements,
    _strip_create_db_and_use,
    as_db_config,
)


def test_schema_file_ships_with_package():
    sql = SCHEMA_PATH.read_text(encoding="utf-8")

    assert "CREATE TABLE IF NOT EXISTS users" in sql
    assert "uq_users_username" in sql
    assert "uq_users_token" in sql


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE t (a INT);\n"

    out = _strip_create_db_and_use(sql)

    assert "CREATE DATABASE" not in out
    assert "USE x" not in out
    assert "CREATE TABLE t" in out


def test_iter_sql_statements_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_schema_splits_into_one_table_statement():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 1
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS users")


def test_as_db_config_defaults():
    cfg = as_db_config({"host": "db", "user": "app"})

    assert cfg.host == "db"
    assert cfg.port == 3306
    assert cfg.user == "app"
    assert cfg.password == ""
    assert cfg.database == "user_registry_db"
