"""MySQL family store provider (MySQL, Percona Server, MariaDB).

The three forks share syntax and connection conventions; they differ only
in the oldest release that supports the JSON functions the schema relies
on.  Connection strings use the ``go-sql-driver`` DSN form::

    username:password@tcp(host:3306)/database?charset=utf8mb4

Tags:
    mysql, mariadb, percona, provider, storeprovider
"""

from __future__ import annotations

from dataclasses import dataclass

from storeprovider.connstring import ConnectionString, merge_parameters
from storeprovider.providers.base import json_document
from storeprovider.types import CONFIG_TABLE, LEGACY_CONFIG_TABLE, META_KEY, PASSED, Check, StoreType
from storeprovider.versions import DatabaseVersion, meets_minimum

VARIANTS = ("mysql", "percona", "mariadb")

MINIMUM_VERSIONS: dict[str, DatabaseVersion] = {
    "mysql": DatabaseVersion(5, 7, 10),
    "percona": DatabaseVersion(5, 7, 10),
    "mariadb": DatabaseVersion(10, 3, 0),
}

UTF8_CHARSETS = ("utf8", "utf8mb3", "utf8mb4")


@dataclass(frozen=True)
class MySQLProvider:
    """Supports MySQL 5.7.x / 8.x, Percona Server and MariaDB 10.3+."""

    connection_string: str
    variant: str = "mysql"

    @property
    def store_type(self) -> StoreType:
        return StoreType.MYSQL

    @property
    def driver_name(self) -> str:
        return "mysql"

    def required_parameters(self) -> dict[str, str]:
        return {
            "charset": "utf8mb4",
            "parseTime": "True",
            "maxAllowedPacket": "104857600",  # 100MB
        }

    def example_connection_string(self) -> str:
        return "database connection string format is 'username:password@tcp(host:3306)/database'"

    def database_name(self) -> str:
        _, sep, name = ConnectionString.parse(self.connection_string).base.rpartition("/")
        return name if sep else ""

    def build_connection_string(self) -> str:
        return merge_parameters(self.connection_string, self.required_parameters())

    def meta_query(self) -> str:
        return (
            "SELECT VERSION() AS version, @@version_comment as comment, "
            "@@character_set_database AS charset, @@collation_database AS collation"
        )

    def list_tables(self) -> str:
        return (
            "SELECT TABLE_NAME FROM information_schema.tables "
            f"WHERE TABLE_SCHEMA = '{self.database_name()}' AND TABLE_TYPE='BASE TABLE'"
        )

    # -- Schema version ------------------------------------------------------

    def record_schema_version(self, version: int) -> str:
        doc = json_document(version)
        return (
            f"INSERT INTO {CONFIG_TABLE} (c_key,c_config) VALUES ('{META_KEY}','{doc}') "
            f"ON DUPLICATE KEY UPDATE c_config='{doc}';"
        )

    def record_schema_version_legacy(self, version: int) -> str:
        doc = json_document(version)
        return (
            f"INSERT INTO `{LEGACY_CONFIG_TABLE}` (`key`,`config`) VALUES ('{META_KEY}','{doc}') "
            f"ON DUPLICATE KEY UPDATE `config`='{doc}';"
        )

    def read_schema_version(self) -> str:
        return (
            f"SELECT JSON_EXTRACT(c_config,'$.database') FROM {CONFIG_TABLE} "
            f"WHERE c_key = '{META_KEY}';"
        )

    def read_schema_version_legacy(self) -> str:
        # Layout before the v25 schema migration.
        return (
            f"SELECT JSON_EXTRACT(`config`,'$.database') FROM `{LEGACY_CONFIG_TABLE}` "
            f"WHERE `key` = '{META_KEY}';"
        )

    # -- JSON ----------------------------------------------------------------

    def empty_json(self) -> str:
        return "JSON_UNQUOTE('{}')"

    def extract_json_field(self, column: str, attribute: str) -> str:
        return f"JSON_EXTRACT({column},'$.{attribute}')"

    # -- Verification ----------------------------------------------------------

    def minimum_version(self) -> DatabaseVersion:
        """Release floor for this variant; unknown variants get the MySQL floor."""
        return MINIMUM_VERSIONS.get(self.variant, MINIMUM_VERSIONS["mysql"])

    def verify_minimum_version(self, raw_version: str) -> Check:
        return meets_minimum(raw_version, self.minimum_version())

    def verify_character_encoding(self, charset: str, collation: str) -> Check:
        if charset.lower() not in UTF8_CHARSETS:
            return Check(False, f"MySQL character set needs to be utf8/utf8mb4, found {charset}")
        if not collation.lower().startswith("utf8"):
            return Check(False, f"MySQL collation sequence needs to be utf8, found {collation}")

        return PASSED


__all__ = [
    "MySQLProvider",
    "MINIMUM_VERSIONS",
    "VARIANTS",
]
