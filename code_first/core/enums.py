"""Enumerations shared across the mapping layer."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database dialects."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"
    MSSQL = "mssql"


class Access(Enum):
    """How the consuming engine reaches a mapped member."""

    FIELD = "field"
    PROPERTY = "property"
    READONLY = "readonly"
