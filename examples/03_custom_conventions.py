"""
Example 03: Custom Conventions

This example demonstrates adding a convention with a runs-after constraint and a finishing transform.
"""

from code_first import (
    AddVersion,
    Convention,
    ConventionRegistry,
    MappingDocument,
    PropertyMapping,
    SchemaBuilder,
)
from dataclasses import dataclass


class AddAuditColumns(Convention):
    """Adds audit columns to every versioned entity"""

    runs_after = (AddVersion,)

    def apply(self, model_type, class_mapping, entity_types, document):
        if class_mapping.version is not None:
            class_mapping.add_property(PropertyMapping(name="CreatedAt", column="created_at", type_name="DateTime"))

    def aux_db_objects(self):
        return ["CREATE VIEW audited AS SELECT 1"]


@dataclass
class Invoice:
    Id: int
    Version: int
    Number: str


def main():
    registry = ConventionRegistry(conventions=[AddAuditColumns])
    builder = SchemaBuilder.for_sqlite(registry=registry)

    print("=== Convention Order ===\n")
    for convention in registry.discover():
        print(f"  {convention.name}")
    print()

    # apply_custom_mappings runs after every convention, before rendering
    def rename_table(document: MappingDocument) -> None:
        document.class_for(Invoice).table = "tbl_invoice"

    configuration = builder.map_entities([Invoice], apply_custom_mappings=rename_table)

    print("=== Mapping XML ===\n")
    print(configuration.mappings[0])
    print(f"Auxiliary objects: {configuration.auxiliary_database_objects}")


if __name__ == "__main__":
    main()
