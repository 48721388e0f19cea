"""Unit tests for ConventionPipeline."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from code_first.conventions.base import Convention
from code_first.conventions.pipeline import ConventionPipeline
from code_first.conventions.registry import ConventionRegistry
from code_first.core.exceptions import ConventionError
from code_first.mapping.document import PropertyMapping, VersionMapping
from code_first.mapping.graph import TypeGraphWalker


@dataclass
class Alpha:
    id: int


@dataclass
class Beta:
    id: int


class SetsVersion(Convention):
    def apply(self, model_type, class_mapping, entity_types, document) -> None:
        class_mapping.version = VersionMapping(name="Stamp", column="Stamp")


class ReadsVersion(Convention):
    runs_after = (SetsVersion,)

    def apply(self, model_type, class_mapping, entity_types, document) -> None:
        if class_mapping.version is not None:
            class_mapping.add_property(PropertyMapping(name="VersionSeen", column="VersionSeen"))


class Recorder(Convention):
    def __init__(self, label: str, calls: list[tuple[str, str]]) -> None:
        self.label = label
        self.calls = calls

    def apply(self, model_type, class_mapping, entity_types, document) -> None:
        self.calls.append((self.label, model_type.name))


class FailsOnBeta(Convention):
    def apply(self, model_type, class_mapping, entity_types, document) -> None:
        class_mapping.add_property(PropertyMapping(name="Touched", column="Touched"))
        if model_type.cls is Beta:
            raise ValueError("boom")


class AttachesObject(Convention):
    def apply(self, model_type, class_mapping, entity_types, document) -> None:
        document.add_auxiliary_object(f"object for {model_type.name}")


@pytest.fixture
def entity_types():
    return TypeGraphWalker().discover([Alpha, Beta])


class TestConventionPipeline:
    def test_earlier_mutation_visible_to_later_convention(self, entity_types, seed_document) -> None:
        document = seed_document(entity_types)
        conventions = ConventionRegistry(manifest=[], conventions=[ReadsVersion, SetsVersion]).discover()
        ConventionPipeline(conventions).apply(entity_types, document)
        for class_mapping in document:
            assert class_mapping.version is not None
            assert [p.name for p in class_mapping.properties] == ["VersionSeen"]

    def test_order_is_what_the_pipeline_is_given(self, entity_types, seed_document) -> None:
        document = seed_document(entity_types)
        ConventionPipeline([ReadsVersion(), SetsVersion()]).apply(entity_types, document)
        for class_mapping in document:
            assert class_mapping.version is not None
            assert class_mapping.properties == []

    def test_each_convention_runs_over_every_entity(self, entity_types, seed_document) -> None:
        calls: list[tuple[str, str]] = []
        document = seed_document(entity_types)
        ConventionPipeline([Recorder("a", calls), Recorder("b", calls)]).apply(entity_types, document)
        assert calls == [("a", "Alpha"), ("a", "Beta"), ("b", "Alpha"), ("b", "Beta")]

    def test_failure_aborts_and_reports(self, entity_types, seed_document) -> None:
        calls: list[tuple[str, str]] = []
        document = seed_document(entity_types)
        pipeline = ConventionPipeline([FailsOnBeta(), Recorder("after", calls)])

        with pytest.raises(ConventionError) as exc_info:
            pipeline.apply(entity_types, document)

        error = exc_info.value
        assert error.convention == "FailsOnBeta"
        assert error.type_name.endswith(".Beta")
        assert isinstance(error.__cause__, ValueError)
        assert calls == []

    def test_failure_keeps_prior_mutations(self, entity_types, seed_document) -> None:
        document = seed_document(entity_types)
        with pytest.raises(ConventionError):
            ConventionPipeline([FailsOnBeta()]).apply(entity_types, document)
        assert [p.name for p in document.class_for(Alpha).properties] == ["Touched"]

    def test_document_level_objects(self, entity_types, seed_document) -> None:
        document = seed_document(entity_types)
        ConventionPipeline([AttachesObject()]).apply(entity_types, document)
        assert document.auxiliary_objects == ["object for Alpha", "object for Beta"]

    def test_conventions_property_is_a_copy(self) -> None:
        pipeline = ConventionPipeline([SetsVersion()])
        pipeline.conventions.clear()
        assert len(pipeline.conventions) == 1
