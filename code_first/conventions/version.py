"""Version convention."""

from __future__ import annotations

from code_first.conventions.base import Convention
from code_first.conventions.identity import CreateNonCompositeIdentity
from code_first.mapping.document import ClassMapping, MappingDocument, VersionMapping
from code_first.mapping.graph import EntityTypeSet
from code_first.mapping.model import ModelType


class AddVersion(Convention):
    """Maps the configured version member, when the type has one."""

    runs_after = (CreateNonCompositeIdentity,)

    def apply(
        self,
        model_type: ModelType,
        class_mapping: ClassMapping,
        entity_types: EntityTypeSet,
        document: MappingDocument,
    ) -> None:
        settings = document.settings
        for member in model_type.members:
            if settings.names_match(member.name, settings.version_member):
                class_mapping.version = VersionMapping(name=member.name, column=member.name)
                return
