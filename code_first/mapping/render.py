"""Render a MappingDocument to hibernate-mapping XML.

Rendering is a pure function of the document: attributes are written in
a fixed order and classes in document order, so identical documents
give identical text.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from code_first.mapping.document import ClassMapping, ComponentMapping, MappingDocument, PropertyMapping

HBM_NAMESPACE = "urn:nhibernate-mapping-2.2"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


def _property_element(parent: ET.Element, mapping: PropertyMapping) -> None:
    element = ET.SubElement(parent, "property", name=mapping.name, column=mapping.column)
    element.set("access", mapping.access.value)
    if mapping.type_name:
        element.set("type", mapping.type_name)
    if mapping.not_null:
        element.set("not-null", "true")


def _component_element(parent: ET.Element, mapping: ComponentMapping) -> None:
    element = ET.SubElement(parent, "component", name=mapping.name, access=mapping.access.value)
    for prop in mapping.properties:
        _property_element(element, prop)
    for component in mapping.components:
        _component_element(element, component)


def _class_element(parent: ET.Element, mapping: ClassMapping) -> None:
    element = ET.SubElement(parent, "class", name=mapping.name, table=mapping.table)

    if mapping.id is not None:
        id_element = ET.SubElement(element, "id", name=mapping.id.name, column=mapping.id.column)
        if mapping.id.type_name:
            id_element.set("type", mapping.id.type_name)
        ET.SubElement(id_element, "generator", {"class": mapping.id.generator})

    # Element order follows the hbm schema: id, version, property, many-to-one, component, bag
    if mapping.version is not None:
        ET.SubElement(element, "version", name=mapping.version.name, column=mapping.version.column)

    for prop in mapping.properties:
        _property_element(element, prop)

    for reference in mapping.many_to_ones:
        ET.SubElement(
            element,
            "many-to-one",
            {
                "name": reference.name,
                "column": reference.column,
                "class": reference.class_name,
                "access": reference.access.value,
            },
        )

    for component in mapping.components:
        _component_element(element, component)

    for bag in mapping.bags:
        bag_element = ET.SubElement(element, "bag", name=bag.name, access=bag.access.value)
        ET.SubElement(bag_element, "key", column=bag.key_column)
        ET.SubElement(bag_element, "one-to-many", {"class": bag.class_name})


def render_xml(document: MappingDocument) -> str:
    """Render the document as an indented hibernate-mapping XML string."""
    root = ET.Element("hibernate-mapping", xmlns=HBM_NAMESPACE)
    for mapping in document:
        _class_element(root, mapping)
    ET.indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")
