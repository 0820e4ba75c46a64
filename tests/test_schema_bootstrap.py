import re
from pathlib import Path

from src.ponto_engine.ponto_engine.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "database" / "schema.sql"


def test_backslash_escaped_quote_does_not_end_the_string():
    sql = "INSERT INTO holidays(description) VALUES('Dia d\\'Ajuda; folga');\nSELECT 1;"

    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO holidays(description) VALUES('Dia d\\'Ajuda; folga')",
        "SELECT 1",
    ]


def test_escaped_backslash_before_closing_quote():
    sql = "SELECT 'C:\\\\';SELECT 2"

    assert list(_iter_sql_statements(sql)) == ["SELECT 'C:\\\\'", "SELECT 2"]


def test_doubled_quote_and_double_quoted_semicolon():
    sql = "SELECT 'it''s; ok'; SELECT \"a;b\";"

    assert list(_iter_sql_statements(sql)) == ["SELECT 'it''s; ok'", 'SELECT "a;b"']


def test_schema_file_splits_into_create_table_statements():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))

    statements = list(_iter_sql_statements(sql))
    tables = [re.match(r"CREATE TABLE IF NOT EXISTS (\w+)", s).group(1) for s in statements]

    assert tables == [
        "company_settings",
        "holidays",
        "role_rules",
        "employees",
        "adjustments",
        "afd_files",
        "punches",
        "audit_logs",
    ]
