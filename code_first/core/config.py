"""Build configuration.

ConnectionConfig is a Pydantic model describing the target dialect. It is
only ever turned into engine properties: no connection is opened here.
MappingSettings tunes how conventions name and match members.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from code_first.core.enums import DatabaseBackend
from code_first.core.exceptions import ConfigurationError

# Engine property keys understood by the consuming engine.
DIALECT = "dialect"
CONNECTION_DRIVER = "connection.driver_class"
CONNECTION_STRING = "connection.connection_string"
CONNECTION_PROVIDER = "connection.provider"
RELEASE_MODE = "connection.release_mode"

# Dialect mapping: backend → (dialect class, driver class)
_DIALECT_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("NHibernate.Dialect.SQLiteDialect", "NHibernate.Driver.SQLite20Driver"),
    DatabaseBackend.POSTGRESQL: (
        "NHibernate.Dialect.PostgreSQL83Dialect",
        "NHibernate.Driver.NpgsqlDriver",
    ),
    DatabaseBackend.MYSQL: ("NHibernate.Dialect.MySQL5Dialect", "NHibernate.Driver.MySqlDataDriver"),
    DatabaseBackend.ORACLE: (
        "NHibernate.Dialect.Oracle10gDialect",
        "NHibernate.Driver.OracleManagedDataClientDriver",
    ),
    DatabaseBackend.MSSQL: ("NHibernate.Dialect.MsSql2008Dialect", "NHibernate.Driver.SqlClientDriver"),
}


class ConnectionConfig(BaseModel):
    """Dialect and connection settings handed to the engine."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    connection_string: str | None = None
    extra: dict[str, Any] = {}

    @property
    def backend(self) -> DatabaseBackend:
        """Resolve the driver name to a DatabaseBackend."""
        try:
            return DatabaseBackend(self.driver.lower())
        except ValueError:
            raise ConfigurationError(f"Unsupported database driver: {self.driver}") from None

    def build_connection_string(self) -> str:
        """Return the explicit connection string, or assemble one from the parts."""
        if self.connection_string:
            return self.connection_string
        if self.backend is DatabaseBackend.SQLITE:
            return f"data source={self.database}"
        parts = [f"Server={self.host or 'localhost'}"]
        if self.port is not None:
            parts.append(f"Port={self.port}")
        parts.append(f"Database={self.database}")
        if self.user is not None:
            parts.append(f"User Id={self.user}")
        if self.password is not None:
            parts.append(f"Password={self.password}")
        return ";".join(parts)

    def to_properties(self) -> dict[str, str]:
        """Engine properties for this dialect."""
        dialect, driver = _DIALECT_MAP[self.backend]
        properties = {
            DIALECT: dialect,
            CONNECTION_DRIVER: driver,
            CONNECTION_STRING: self.build_connection_string(),
        }
        if self.backend is DatabaseBackend.SQLITE and self.database == ":memory:":
            # In-memory databases vanish with their connection.
            properties[RELEASE_MODE] = "on_close"
        else:
            properties[CONNECTION_PROVIDER] = "NHibernate.Connection.DriverConnectionProvider"
        properties.update({key: str(value) for key, value in self.extra.items()})
        return properties


class MappingSettings(BaseModel):
    """Naming and matching rules used by the built-in conventions."""

    column_separator: str = "_"
    id_member: str = "Id"
    version_member: str = "Version"
    case_sensitive_members: bool = False

    def names_match(self, member_name: str, expected: str) -> bool:
        """Compare a member name against a configured name."""
        if self.case_sensitive_members:
            return member_name == expected
        return member_name.lower() == expected.lower()
