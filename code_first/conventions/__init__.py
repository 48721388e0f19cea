"""Conventions - pluggable rules that build class mappings."""

from __future__ import annotations

from code_first.conventions.base import Convention
from code_first.conventions.components import (
    ComponentMapper,
    ComponentRules,
    CreateComponentMappedProperties,
    add_rule_for_identifying_components,
    component_rules,
)
from code_first.conventions.identity import CreateNonCompositeIdentity
from code_first.conventions.pipeline import ConventionPipeline
from code_first.conventions.properties import CreateBasicProperties
from code_first.conventions.references import CreateReferences
from code_first.conventions.registry import BUILTIN_CONVENTIONS, ConventionRegistry
from code_first.conventions.version import AddVersion

__all__ = [
    "Convention",
    "ConventionRegistry",
    "ConventionPipeline",
    "BUILTIN_CONVENTIONS",
    # Built-in conventions
    "CreateNonCompositeIdentity",
    "AddVersion",
    "CreateBasicProperties",
    "CreateComponentMappedProperties",
    "CreateReferences",
    # Components
    "ComponentMapper",
    "ComponentRules",
    "component_rules",
    "add_rule_for_identifying_components",
]
