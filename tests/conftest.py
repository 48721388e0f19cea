"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from code_first.conventions import components
from code_first.conventions.base import Convention
from code_first.conventions.components import ComponentRules
from code_first.conventions.pipeline import ConventionPipeline
from code_first.conventions.registry import ConventionRegistry
from code_first.core.config import MappingSettings
from code_first.core.naming import InflectNamingService
from code_first.mapping.document import ClassMapping, MappingDocument
from code_first.mapping.graph import EntityTypeSet, MatchEntities, TypeGraphWalker


@pytest.fixture
def settings() -> MappingSettings:
    """Default mapping settings."""
    return MappingSettings()


@pytest.fixture
def seed_document():
    """Helper to create a document with one empty class mapping per entity.

    Usage:
        document = seed_document(entity_types)
    """
    naming = InflectNamingService()

    def _seed(
        entity_types: EntityTypeSet,
        settings: MappingSettings | None = None,
    ) -> MappingDocument:
        document = MappingDocument(settings)
        for model_type in entity_types:
            document.add_class(
                ClassMapping(model_type=model_type, table=naming.pluralize(model_type.name))
            )
        return document

    return _seed


@pytest.fixture
def run_conventions(seed_document):
    """Helper to discover roots and run conventions over a fresh document.

    Usage:
        document = run_conventions([Order], conventions=[...])
    """

    def _run(
        roots: Iterable[type],
        match_entities: MatchEntities | None = None,
        conventions: Iterable[type[Convention]] | None = None,
        settings: MappingSettings | None = None,
    ) -> MappingDocument:
        entity_types = TypeGraphWalker().discover(roots, match_entities)
        document = seed_document(entity_types, settings)
        if conventions is None:
            registry = ConventionRegistry()
        else:
            registry = ConventionRegistry(manifest=[], conventions=conventions)
        ConventionPipeline(registry.discover()).apply(entity_types, document)
        return document

    return _run


@pytest.fixture
def isolated_component_rules(monkeypatch) -> ComponentRules:
    """Replace the process-wide component rules with a fresh default set."""
    rules = ComponentRules()
    monkeypatch.setattr(components, "component_rules", rules)
    return rules
