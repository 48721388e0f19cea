"""Convention base class.

A convention inspects one entity type and mutates its class mapping.
Conventions are instantiated without arguments by the registry and
applied once per (convention, entity type) pair.

Usage:
    class AddAuditColumns(Convention):
        runs_after = (CreateBasicProperties,)

        def apply(self, model_type, class_mapping, entity_types, document):
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:  # pragma: no cover - import for type hints only
    from code_first.mapping.document import ClassMapping, MappingDocument
    from code_first.mapping.graph import EntityTypeSet
    from code_first.mapping.model import ModelType


class Convention(ABC):
    """Base class for all mapping conventions."""

    # Conventions that must have run before this one.
    runs_after: ClassVar[tuple[type[Convention], ...]] = ()

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def apply(
        self,
        model_type: ModelType,
        class_mapping: ClassMapping,
        entity_types: EntityTypeSet,
        document: MappingDocument,
    ) -> None:
        """Mutate ``class_mapping`` for ``model_type``.

        ``entity_types`` and ``document`` cover the whole build and may be
        consulted, but must not be kept after the call returns.
        """

    def aux_db_objects(self) -> list[Any]:
        """Database objects this convention contributes to the engine."""
        return []

    def __repr__(self) -> str:
        return f"<{self.name}>"
