"""Unit tests for MappingDocument and ClassMapping."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from code_first.core.config import MappingSettings
from code_first.core.enums import Access
from code_first.core.exceptions import ClassMappingNotFoundError, DuplicateMappingError
from code_first.mapping.document import (
    ClassMapping,
    ComponentMapping,
    IdMapping,
    MappingDocument,
    PropertyMapping,
    VersionMapping,
)
from code_first.mapping.model import describe


@dataclass
class Invoice:
    Id: int
    Number: str


@dataclass
class Payment:
    Id: int


@pytest.fixture
def invoice_mapping() -> ClassMapping:
    return ClassMapping(model_type=describe(Invoice), table="Invoices")


class TestClassMapping:
    def test_name_is_qualified(self, invoice_mapping: ClassMapping) -> None:
        assert invoice_mapping.name == f"{__name__}.Invoice"

    def test_claimed_members(self, invoice_mapping: ClassMapping) -> None:
        invoice_mapping.id = IdMapping(name="Id", column="Id")
        invoice_mapping.version = VersionMapping(name="Version", column="Version")
        invoice_mapping.add_property(PropertyMapping(name="Number", column="Number"))
        invoice_mapping.add_component(ComponentMapping(name="Address"))
        assert invoice_mapping.claimed_members == {"Id", "Version", "Number", "Address"}

    def test_duplicate_member_rejected(self, invoice_mapping: ClassMapping) -> None:
        invoice_mapping.add_property(PropertyMapping(name="Number", column="Number"))
        with pytest.raises(DuplicateMappingError) as exc_info:
            invoice_mapping.add_component(ComponentMapping(name="Number"))
        assert exc_info.value.member_name == "Number"

    def test_member_claimed_by_id_rejected(self, invoice_mapping: ClassMapping) -> None:
        invoice_mapping.id = IdMapping(name="Id", column="Id")
        with pytest.raises(DuplicateMappingError):
            invoice_mapping.add_property(PropertyMapping(name="Id", column="Id"))

    def test_to_dict(self, invoice_mapping: ClassMapping) -> None:
        invoice_mapping.version = VersionMapping(name="Version", column="Version")
        component = ComponentMapping(name="Address", access=Access.PROPERTY)
        component.properties.append(PropertyMapping(name="City", column="Address_City"))
        invoice_mapping.add_component(component)

        data = invoice_mapping.to_dict()
        assert data["table"] == "Invoices"
        assert data["id"] is None
        assert data["version"] == {"name": "Version", "column": "Version"}
        assert data["components"][0]["access"] == "property"
        assert data["components"][0]["properties"][0]["column"] == "Address_City"


class TestMappingDocument:
    def test_default_settings(self) -> None:
        assert MappingDocument().settings == MappingSettings()

    def test_class_lookup(self, invoice_mapping: ClassMapping) -> None:
        document = MappingDocument()
        document.add_class(invoice_mapping)
        assert document.class_for(Invoice) is invoice_mapping
        assert document.class_for(describe(Invoice)) is invoice_mapping
        assert document.has_class(Invoice) is True
        assert document.has_class(Payment) is False

    def test_missing_class(self) -> None:
        with pytest.raises(ClassMappingNotFoundError, match="Payment"):
            MappingDocument().class_for(Payment)

    def test_one_mapping_per_type(self, invoice_mapping: ClassMapping) -> None:
        document = MappingDocument()
        document.add_class(invoice_mapping)
        with pytest.raises(DuplicateMappingError):
            document.add_class(ClassMapping(model_type=describe(Invoice), table="Other"))

    def test_classes_in_seeding_order(self) -> None:
        document = MappingDocument()
        document.add_class(ClassMapping(model_type=describe(Payment), table="Payments"))
        document.add_class(ClassMapping(model_type=describe(Invoice), table="Invoices"))
        assert [c.table for c in document.classes] == ["Payments", "Invoices"]
        assert len(document) == 2

    def test_auxiliary_objects(self) -> None:
        document = MappingDocument()
        document.add_auxiliary_object("CREATE VIEW v AS SELECT 1")
        assert document.auxiliary_objects == ["CREATE VIEW v AS SELECT 1"]

    def test_to_dict(self, invoice_mapping: ClassMapping) -> None:
        document = MappingDocument()
        document.add_class(invoice_mapping)
        assert [c["table"] for c in document.to_dict()["classes"]] == ["Invoices"]
