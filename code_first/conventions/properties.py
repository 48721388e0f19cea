"""Basic property convention: one column per scalar member."""

from __future__ import annotations

from code_first.conventions.base import Convention
from code_first.conventions.identity import CreateNonCompositeIdentity
from code_first.conventions.version import AddVersion
from code_first.mapping.document import ClassMapping, MappingDocument, PropertyMapping
from code_first.mapping.graph import EntityTypeSet
from code_first.mapping.model import Member, ModelType, is_scalar, type_name_for


class CreateBasicProperties(Convention):
    """Maps every settable scalar member not claimed by another convention."""

    runs_after = (CreateNonCompositeIdentity, AddVersion)

    @staticmethod
    def get_property(member: Member, column_prefix: str = "") -> PropertyMapping | None:
        """Build a property mapping for a scalar member, or None."""
        if member.read_only or not is_scalar(member.value_type):
            return None
        return PropertyMapping(
            name=member.name,
            column=column_prefix + member.name,
            access=member.access,
            type_name=type_name_for(member.value_type),
            not_null=not member.optional,
        )

    def apply(
        self,
        model_type: ModelType,
        class_mapping: ClassMapping,
        entity_types: EntityTypeSet,
        document: MappingDocument,
    ) -> None:
        claimed = class_mapping.claimed_members
        for member in model_type.members:
            if member.name in claimed:
                continue
            mapping = self.get_property(member)
            if mapping is not None:
                class_mapping.add_property(mapping)
