"""Mapping document data classes.

The document is an explicit tree: one ClassMapping per entity type, each
holding its identity, version, properties, components and references.
It is created empty, seeded by SchemaBuilder, and mutated in place by
conventions.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from code_first.core.config import MappingSettings
from code_first.core.enums import Access
from code_first.core.exceptions import ClassMappingNotFoundError, DuplicateMappingError
from code_first.mapping.model import ModelType


@dataclass
class PropertyMapping:
    """Leaf mapping entry: one member to one column."""

    name: str
    column: str
    access: Access = Access.FIELD
    type_name: str | None = None
    not_null: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "column": self.column,
            "access": self.access.value,
            "type": self.type_name,
            "not_null": self.not_null,
        }


@dataclass
class ComponentMapping:
    """Embedded value object, flattened into its owner's table."""

    name: str
    access: Access = Access.FIELD
    properties: list[PropertyMapping] = field(default_factory=list)
    components: list[ComponentMapping] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "access": self.access.value,
            "properties": [p.to_dict() for p in self.properties],
            "components": [c.to_dict() for c in self.components],
        }


@dataclass
class IdMapping:
    """Single-column identity."""

    name: str
    column: str
    type_name: str | None = None
    generator: str = "native"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "column": self.column,
            "type": self.type_name,
            "generator": self.generator,
        }


@dataclass
class VersionMapping:
    """Optimistic concurrency version column."""

    name: str
    column: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "column": self.column}


@dataclass
class ManyToOneMapping:
    """Reference to another entity through a foreign key column."""

    name: str
    column: str
    class_name: str
    access: Access = Access.FIELD

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "column": self.column,
            "class": self.class_name,
            "access": self.access.value,
        }


@dataclass
class BagMapping:
    """One-to-many collection of another entity."""

    name: str
    key_column: str
    class_name: str
    access: Access = Access.FIELD

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "key_column": self.key_column,
            "class": self.class_name,
            "access": self.access.value,
        }


@dataclass(frozen=True)
class AuxiliaryDatabaseObject:
    """Engine-specific DDL forwarded verbatim to the engine."""

    name: str
    create_sql: str
    drop_sql: str


@dataclass
class ClassMapping:
    """Mapping fragment for one entity type."""

    model_type: ModelType
    table: str
    id: IdMapping | None = None
    version: VersionMapping | None = None
    properties: list[PropertyMapping] = field(default_factory=list)
    components: list[ComponentMapping] = field(default_factory=list)
    many_to_ones: list[ManyToOneMapping] = field(default_factory=list)
    bags: list[BagMapping] = field(default_factory=list)

    @property
    def name(self) -> str:
        """Fully qualified name of the mapped class."""
        return self.model_type.qualified_name

    @property
    def claimed_members(self) -> set[str]:
        """Member names already mapped by some entry."""
        names = {p.name for p in self.properties}
        names.update(c.name for c in self.components)
        names.update(m.name for m in self.many_to_ones)
        names.update(b.name for b in self.bags)
        if self.id is not None:
            names.add(self.id.name)
        if self.version is not None:
            names.add(self.version.name)
        return names

    def _claim(self, member_name: str) -> None:
        if member_name in self.claimed_members:
            raise DuplicateMappingError(self.name, member_name)

    def add_property(self, mapping: PropertyMapping) -> PropertyMapping:
        self._claim(mapping.name)
        self.properties.append(mapping)
        return mapping

    def add_component(self, mapping: ComponentMapping) -> ComponentMapping:
        self._claim(mapping.name)
        self.components.append(mapping)
        return mapping

    def add_many_to_one(self, mapping: ManyToOneMapping) -> ManyToOneMapping:
        self._claim(mapping.name)
        self.many_to_ones.append(mapping)
        return mapping

    def add_bag(self, mapping: BagMapping) -> BagMapping:
        self._claim(mapping.name)
        self.bags.append(mapping)
        return mapping

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "table": self.table,
            "id": self.id.to_dict() if self.id else None,
            "version": self.version.to_dict() if self.version else None,
            "properties": [p.to_dict() for p in self.properties],
            "components": [c.to_dict() for c in self.components],
            "many_to_ones": [m.to_dict() for m in self.many_to_ones],
            "bags": [b.to_dict() for b in self.bags],
        }


class MappingDocument:
    """All class mappings of one build, plus auxiliary database objects."""

    def __init__(self, settings: MappingSettings | None = None) -> None:
        self.settings = settings or MappingSettings()
        self._classes: dict[type, ClassMapping] = {}
        self._auxiliary_objects: list[Any] = []

    def add_class(self, mapping: ClassMapping) -> ClassMapping:
        """Register the single class mapping of an entity type."""
        cls = mapping.model_type.cls
        if cls in self._classes:
            raise DuplicateMappingError(mapping.name)
        self._classes[cls] = mapping
        return mapping

    def class_for(self, t: type | ModelType) -> ClassMapping:
        """Look up the class mapping of an entity type.

        Raises:
            ClassMappingNotFoundError: If the type is not mapped.
        """
        cls = t.cls if isinstance(t, ModelType) else t
        try:
            return self._classes[cls]
        except KeyError:
            raise ClassMappingNotFoundError(getattr(cls, "__qualname__", repr(cls))) from None

    def has_class(self, t: type | ModelType) -> bool:
        cls = t.cls if isinstance(t, ModelType) else t
        return cls in self._classes

    @property
    def classes(self) -> list[ClassMapping]:
        """Class mappings in seeding order."""
        return list(self._classes.values())

    def add_auxiliary_object(self, obj: Any) -> None:
        """Attach a document-level object for the engine."""
        self._auxiliary_objects.append(obj)

    @property
    def auxiliary_objects(self) -> list[Any]:
        return list(self._auxiliary_objects)

    def to_dict(self) -> dict[str, Any]:
        return {"classes": [c.to_dict() for c in self._classes.values()]}

    def __iter__(self) -> Iterator[ClassMapping]:
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)
