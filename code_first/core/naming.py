"""Naming service protocol.

SchemaBuilder asks the naming service for the storage name of every
entity. The default implementation pluralizes the simple type name with
the ``inflect`` library.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import inflect


@runtime_checkable
class NamingService(Protocol):
    """Turns a type name into a storage name."""

    def pluralize(self, name: str) -> str:
        """Return the plural form of ``name``."""
        ...


class InflectNamingService:
    """English pluralization backed by inflect."""

    def __init__(self) -> None:
        self._engine = inflect.engine()

    def pluralize(self, name: str) -> str:
        return self._engine.plural_noun(name)
