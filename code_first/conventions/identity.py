"""Identity convention."""

from __future__ import annotations

from uuid import UUID

from code_first.conventions.base import Convention
from code_first.mapping.document import ClassMapping, IdMapping, MappingDocument
from code_first.mapping.graph import EntityTypeSet
from code_first.mapping.model import ModelType, type_name_for


def _generator_for(value_type: object) -> str:
    if isinstance(value_type, type) and issubclass(value_type, UUID):
        return "guid.comb"
    if value_type is int:
        return "native"
    return "assigned"


class CreateNonCompositeIdentity(Convention):
    """Maps the configured identity member as a single-column id."""

    def apply(
        self,
        model_type: ModelType,
        class_mapping: ClassMapping,
        entity_types: EntityTypeSet,
        document: MappingDocument,
    ) -> None:
        settings = document.settings
        for member in model_type.members:
            if settings.names_match(member.name, settings.id_member):
                class_mapping.id = IdMapping(
                    name=member.name,
                    column=member.name,
                    type_name=type_name_for(member.value_type),
                    generator=_generator_for(member.value_type),
                )
                return
