"""Reference conventions: many-to-one and one-to-many between entities.

Only members pointing at other discovered entity types are mapped here;
everything else is left to the property and component conventions.
"""

from __future__ import annotations

from code_first.conventions.base import Convention
from code_first.conventions.identity import CreateNonCompositeIdentity
from code_first.mapping.document import (
    AuxiliaryDatabaseObject,
    BagMapping,
    ClassMapping,
    ManyToOneMapping,
    MappingDocument,
)
from code_first.mapping.graph import EntityTypeSet
from code_first.mapping.model import ModelType, element_type


class CreateReferences(Convention):
    """Maps entity-typed members as many-to-one and entity collections as bags.

    Each foreign key column also gets an index, attached to the document
    as an auxiliary database object.
    """

    runs_after = (CreateNonCompositeIdentity,)

    def apply(
        self,
        model_type: ModelType,
        class_mapping: ClassMapping,
        entity_types: EntityTypeSet,
        document: MappingDocument,
    ) -> None:
        claimed = class_mapping.claimed_members
        id_suffix = document.settings.id_member

        for member in model_type.members:
            if member.read_only or member.name in claimed:
                continue

            if member.value_type in entity_types:
                target = entity_types.get(member.value_type)
                column = member.name + id_suffix
                class_mapping.add_many_to_one(
                    ManyToOneMapping(
                        name=member.name,
                        column=column,
                        class_name=target.qualified_name,
                        access=member.access,
                    )
                )
                index_name = f"IX_{class_mapping.table}_{column}"
                document.add_auxiliary_object(
                    AuxiliaryDatabaseObject(
                        name=index_name,
                        create_sql=f"CREATE INDEX {index_name} ON {class_mapping.table} ({column})",
                        drop_sql=f"DROP INDEX {index_name}",
                    )
                )
                continue

            element = element_type(member.value_type)
            if element is not member.value_type and element in entity_types:
                target = entity_types.get(element)
                class_mapping.add_bag(
                    BagMapping(
                        name=member.name,
                        key_column=model_type.name + id_suffix,
                        class_name=target.qualified_name,
                        access=member.access,
                    )
                )
