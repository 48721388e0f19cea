"""Engine configuration handle.

The finished mapping is handed to the consuming engine through this
object: engine properties, mapping XML documents, and auxiliary database
objects. It mirrors the engine's native configuration entry point and
never executes anything itself.
"""

from __future__ import annotations

from typing import Any


class EngineConfiguration:
    """Collects everything the consuming engine is configured with."""

    def __init__(self) -> None:
        self._properties: dict[str, str] = {}
        self._mappings: list[str] = []
        self._auxiliary_database_objects: list[Any] = []

    def set_property(self, key: str, value: str) -> EngineConfiguration:
        """Set a single engine property."""
        self._properties[key] = value
        return self

    def set_properties(self, properties: dict[str, str]) -> EngineConfiguration:
        """Set several engine properties at once."""
        self._properties.update(properties)
        return self

    def get_property(self, key: str) -> str | None:
        return self._properties.get(key)

    def add_xml(self, xml: str) -> EngineConfiguration:
        """Register a rendered mapping document."""
        self._mappings.append(xml)
        return self

    def add_auxiliary_database_object(self, obj: Any) -> EngineConfiguration:
        """Register an engine-specific database object, verbatim."""
        self._auxiliary_database_objects.append(obj)
        return self

    @property
    def properties(self) -> dict[str, str]:
        return dict(self._properties)

    @property
    def mappings(self) -> list[str]:
        return list(self._mappings)

    @property
    def auxiliary_database_objects(self) -> list[Any]:
        return list(self._auxiliary_database_objects)
