"""
Example 01: Basic Mapping

This example demonstrates building a mapping document for a root type with an embedded value object.
"""

from code_first import SchemaBuilder, embeddable
from dataclasses import dataclass


@embeddable
@dataclass
class Address:
    """Value object flattened into its owner's table"""
    Street: str
    City: str


@dataclass
class Order:
    """Root entity with identity and version"""
    Id: int
    Version: int
    ShippingAddress: Address


def main():
    builder = SchemaBuilder.for_sqlite()

    print("=== Mapping Document ===\n")

    # build_document: inspect the mapping without configuring the engine
    document = builder.build_document([Order])
    order = document.class_for(Order)
    print(f"Table: {order.table}")
    print(f"Identity: {order.id.column} ({order.id.generator})")
    print(f"Version: {order.version.column}")
    for component in order.components:
        columns = ", ".join(p.column for p in component.properties)
        print(f"Component {component.name}: {columns}")
    print()

    # map_entities: render the document and hand it to the engine configuration
    configuration = builder.map_entities([Order])
    print("=== Engine Properties ===\n")
    for key, value in configuration.properties.items():
        print(f"  {key} = {value}")
    print()

    print("=== Mapping XML ===\n")
    print(configuration.mappings[0])


if __name__ == "__main__":
    main()
