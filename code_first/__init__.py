"""code_first - convention-based mapping documents from Python model classes."""

from __future__ import annotations

from code_first.conventions import (
    AddVersion,
    ComponentMapper,
    Convention,
    ConventionPipeline,
    ConventionRegistry,
    CreateBasicProperties,
    CreateComponentMappedProperties,
    CreateNonCompositeIdentity,
    CreateReferences,
    add_rule_for_identifying_components,
)
from code_first.core.config import ConnectionConfig, MappingSettings
from code_first.core.engine import EngineConfiguration
from code_first.core.enums import Access, DatabaseBackend
from code_first.core.exceptions import (
    ClassMappingNotFoundError,
    CodeFirstError,
    ComponentCycleError,
    ComponentRulesLockedError,
    ConfigurationError,
    ConventionCycleError,
    ConventionError,
    ConventionLoadError,
    DuplicateMappingError,
    MappingError,
    UnresolvableTypeError,
)
from code_first.core.naming import InflectNamingService, NamingService
from code_first.core.schema import SchemaBuilder
from code_first.mapping import (
    ClassMapping,
    ComponentMapping,
    Embedded,
    EntityTypeSet,
    MappingDocument,
    MatchEntities,
    PropertyMapping,
    TypeGraphWalker,
    embeddable,
    render_xml,
)

__all__ = [
    # Builder
    "SchemaBuilder",
    "EngineConfiguration",
    # Configuration
    "ConnectionConfig",
    "MappingSettings",
    # Naming
    "NamingService",
    "InflectNamingService",
    # Discovery
    "TypeGraphWalker",
    "MatchEntities",
    "EntityTypeSet",
    "Embedded",
    "embeddable",
    # Conventions
    "Convention",
    "ConventionRegistry",
    "ConventionPipeline",
    "ComponentMapper",
    "CreateNonCompositeIdentity",
    "AddVersion",
    "CreateBasicProperties",
    "CreateComponentMappedProperties",
    "CreateReferences",
    "add_rule_for_identifying_components",
    # Document
    "MappingDocument",
    "ClassMapping",
    "ComponentMapping",
    "PropertyMapping",
    "render_xml",
    # Enums
    "Access",
    "DatabaseBackend",
    # Exceptions
    "CodeFirstError",
    "ConfigurationError",
    "UnresolvableTypeError",
    "ConventionLoadError",
    "ConventionCycleError",
    "ComponentRulesLockedError",
    "MappingError",
    "ConventionError",
    "ComponentCycleError",
    "DuplicateMappingError",
    "ClassMappingNotFoundError",
]
