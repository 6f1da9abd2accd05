"""Live MySQL / PostgreSQL checks.

Skipped unless a throwaway database is reachable:

    STORE_TEST_MYSQL_DSN="root:secret@tcp(127.0.0.1:3306)/documize_test"
    STORE_TEST_POSTGRES_DSN="host=127.0.0.1 port=5432 dbname=documize_test user=postgres"

The tests create and drop ``dmz_config`` in that database.
"""

from __future__ import annotations

import os
import re

import pytest

from storeprovider.providers import MySQLProvider, PostgreSQLProvider
from storeprovider.runtime import Runtime
from storeprovider.settings import StoreSettings
from storeprovider.startup import check_database, current_schema_version, record_schema_version

MYSQL_DSN = os.environ.get("STORE_TEST_MYSQL_DSN", "")
POSTGRES_DSN = os.environ.get("STORE_TEST_POSTGRES_DSN", "")

_MYSQL_DSN_RE = re.compile(
    r"^(?P<user>[^:@]*)(?::(?P<password>[^@]*))?@tcp\((?P<host>[^:)]+)(?::(?P<port>\d+))?\)/(?P<database>[^?]+)"
)


class CursorConnection:
    """Gives a DB-API connection the ``execute``/``commit`` shape."""

    def __init__(self, conn, **cursor_options):
        self._conn = conn
        self._cursor_options = cursor_options

    def execute(self, sql, params=()):
        cursor = self._conn.cursor(**self._cursor_options)
        cursor.execute(sql, params or None)
        return cursor

    def commit(self):
        self._conn.commit()

    def close(self):
        self._conn.close()


@pytest.fixture
def mysql_conn():
    if not MYSQL_DSN:
        pytest.skip("STORE_TEST_MYSQL_DSN not set")
    connector = pytest.importorskip("mysql.connector")

    match = _MYSQL_DSN_RE.match(MYSQL_DSN)
    assert match, f"unparseable STORE_TEST_MYSQL_DSN: {MYSQL_DSN}"
    conn = CursorConnection(
        connector.connect(
            user=match["user"],
            password=match["password"] or "",
            host=match["host"],
            port=int(match["port"] or 3306),
            database=match["database"],
            charset="utf8mb4",
        ),
        buffered=True,
    )
    conn.execute("DROP TABLE IF EXISTS dmz_config")
    conn.execute(
        "CREATE TABLE dmz_config (c_key VARCHAR(255) NOT NULL PRIMARY KEY, c_config JSON)"
    )
    yield conn
    conn.execute("DROP TABLE IF EXISTS dmz_config")
    conn.close()


@pytest.fixture
def postgres_conn():
    if not POSTGRES_DSN:
        pytest.skip("STORE_TEST_POSTGRES_DSN not set")
    psycopg2 = pytest.importorskip("psycopg2")

    raw = psycopg2.connect(POSTGRES_DSN)
    raw.autocommit = True
    conn = CursorConnection(raw)
    conn.execute("DROP TABLE IF EXISTS dmz_config")
    conn.execute("CREATE TABLE dmz_config (c_key VARCHAR(255) PRIMARY KEY, c_config JSON)")
    yield conn
    conn.execute("DROP TABLE IF EXISTS dmz_config")
    conn.close()


def _runtime(provider) -> Runtime:
    return Runtime(settings=StoreSettings(_env_file=None), provider=provider)


class TestMySQLLive:
    @pytest.fixture
    def provider(self) -> MySQLProvider:
        return MySQLProvider(MYSQL_DSN)

    def test_check_database(self, provider, mysql_conn):
        status = check_database(_runtime(provider), mysql_conn)
        assert "dmz_config" in status.tables
        assert status.schema_version == 0

    def test_schema_version_round_trip(self, provider, mysql_conn):
        record_schema_version(provider, mysql_conn, 27)
        assert current_schema_version(provider, mysql_conn) == 27
        record_schema_version(provider, mysql_conn, 28)
        assert current_schema_version(provider, mysql_conn) == 28

    def test_json_fragments(self, provider, mysql_conn):
        mysql_conn.execute(
            f"INSERT INTO dmz_config (c_key, c_config) VALUES ('EMPTY', {provider.empty_json()})"
        )
        row = mysql_conn.execute(
            f"SELECT {provider.extract_json_field('c_config', 'missing')} "
            "FROM dmz_config WHERE c_key = 'EMPTY'"
        ).fetchone()
        assert row[0] is None


class TestPostgreSQLLive:
    @pytest.fixture
    def provider(self) -> PostgreSQLProvider:
        return PostgreSQLProvider(POSTGRES_DSN)

    def test_check_database(self, provider, postgres_conn):
        status = check_database(_runtime(provider), postgres_conn)
        assert "dmz_config" in status.tables
        assert status.schema_version == 0

    def test_schema_version_round_trip(self, provider, postgres_conn):
        record_schema_version(provider, postgres_conn, 27)
        assert current_schema_version(provider, postgres_conn) == 27
        record_schema_version(provider, postgres_conn, 28)
        assert current_schema_version(provider, postgres_conn) == 28

    def test_json_fragments(self, provider, postgres_conn):
        postgres_conn.execute(
            f"INSERT INTO dmz_config (c_key, c_config) VALUES ('EMPTY', {provider.empty_json()})"
        )
        row = postgres_conn.execute(
            f"SELECT {provider.extract_json_field('c_config', 'missing')} "
            "FROM dmz_config WHERE c_key = 'EMPTY'"
        ).fetchone()
        assert row[0] is None
