"""
Example 02: Entity Discovery

This example demonstrates walking the type graph with MatchEntities to map related entities.
"""

from code_first import MatchEntities, SchemaBuilder
from dataclasses import dataclass, field
from pydantic import BaseModel


class Customer(BaseModel):
    """Customer model using Pydantic"""
    Id: int
    Name: str
    Email: str | None = None


@dataclass
class OrderLine:
    """Order line model using dataclass"""
    Id: int
    Product: str
    Quantity: int


@dataclass
class Order:
    """Order referencing a customer and owning its lines"""
    Id: int
    Buyer: Customer
    Lines: list[OrderLine] = field(default_factory=list)


def main():
    builder = SchemaBuilder.for_postgresql("shop", user="app", password="secret")

    print("=== Roots Only ===\n")

    # Without a filter only the roots are mapped
    document = builder.build_document([Order])
    print(f"Classes: {[c.table for c in document]}\n")

    print("=== Walk With Id Filter ===\n")

    # with_id_property: every reachable type with an Id member is an entity
    configuration = builder.map_entities([Order], MatchEntities.with_id_property())
    document = builder.build_document([Order], MatchEntities.with_id_property())
    for class_mapping in document:
        print(f"{class_mapping.table}:")
        for reference in class_mapping.many_to_ones:
            print(f"  many-to-one {reference.name} -> {reference.column}")
        for bag in class_mapping.bags:
            print(f"  bag {bag.name} keyed by {bag.key_column}")
    print()

    print("=== Auxiliary Objects ===\n")
    for obj in configuration.auxiliary_database_objects:
        print(f"  {obj.create_sql}")

    # where: add predicates to narrow the entity set
    match = MatchEntities.with_id_property().where(lambda t: t is not OrderLine)
    document = builder.build_document([Order], match)
    print(f"\nWithout order lines: {[c.table for c in document]}")


if __name__ == "__main__":
    main()
