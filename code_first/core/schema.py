"""Schema builder.

SchemaBuilder discovers entity types from a set of roots, seeds one class
mapping per entity, runs the ordered conventions, applies an optional
finishing transform, and hands the rendered document to the engine
configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from code_first.conventions import components
from code_first.conventions.pipeline import ConventionPipeline
from code_first.conventions.registry import ConventionRegistry
from code_first.core.config import ConnectionConfig, MappingSettings
from code_first.core.engine import EngineConfiguration
from code_first.core.naming import InflectNamingService, NamingService
from code_first.mapping.document import ClassMapping, MappingDocument
from code_first.mapping.graph import EntityTypeSet, MatchEntities, TypeGraphWalker
from code_first.mapping.render import render_xml

logger = logging.getLogger(__name__)


class SchemaBuilder:
    """Builds a mapping document and configures the engine with it.

    Args:
        config: Dialect settings; applied to the engine configuration.
        settings: Naming and matching rules for the conventions.
        naming: Storage name service; defaults to English pluralization.
        registry: Convention source; defaults to the built-in conventions.
    """

    def __init__(
        self,
        config: ConnectionConfig | None = None,
        *,
        settings: MappingSettings | None = None,
        naming: NamingService | None = None,
        registry: ConventionRegistry | None = None,
    ) -> None:
        self._settings = settings or MappingSettings()
        self._naming = naming or InflectNamingService()
        self._registry = registry or ConventionRegistry()
        self._walker = TypeGraphWalker()
        self._configuration = EngineConfiguration()
        if config is not None:
            self._configuration.set_properties(config.to_properties())

    @classmethod
    def from_config(cls, config: ConnectionConfig, **kwargs) -> SchemaBuilder:
        """Create a SchemaBuilder for a ConnectionConfig."""
        return cls(config, **kwargs)

    @classmethod
    def for_sqlite(cls, database: str = ":memory:", **kwargs) -> SchemaBuilder:
        """SQLite dialect; in-memory by default."""
        return cls(ConnectionConfig(driver="sqlite", database=database), **kwargs)

    @classmethod
    def for_mssql(cls, connection_string: str, **kwargs) -> SchemaBuilder:
        """SQL Server 2008 dialect with an explicit connection string."""
        config = ConnectionConfig(driver="mssql", database="", connection_string=connection_string)
        return cls(config, **kwargs)

    @classmethod
    def for_postgresql(
        cls,
        database: str,
        host: str = "localhost",
        port: int = 5432,
        user: str | None = None,
        password: str | None = None,
        **kwargs,
    ) -> SchemaBuilder:
        """PostgreSQL dialect."""
        config = ConnectionConfig(
            driver="postgresql",
            database=database,
            host=host,
            port=port,
            user=user,
            password=password,
        )
        return cls(config, **kwargs)

    @property
    def configuration(self) -> EngineConfiguration:
        return self._configuration

    def configure(self, transform: Callable[[EngineConfiguration], None]) -> SchemaBuilder:
        """Apply a caller transform to the engine configuration."""
        transform(self._configuration)
        return self

    def match_with_id_property(self) -> MatchEntities:
        """Entity filter using this builder's identity member settings."""
        return MatchEntities.with_id_property(settings=self._settings)

    def discover(
        self,
        roots: Iterable[type],
        match_entities: MatchEntities | None = None,
    ) -> EntityTypeSet:
        """Discover the entity types reachable from ``roots``."""
        return self._walker.discover(roots, match_entities)

    def build_document(
        self,
        roots: Iterable[type],
        match_entities: MatchEntities | None = None,
    ) -> MappingDocument:
        """Build the mapping document without touching the engine configuration.

        Raises:
            ConfigurationError: On unresolvable roots, convention load
                failures, or cyclic convention ordering.
            ConventionError: If a convention fails for an entity type.
        """
        # Conventions are resolved first so configuration errors surface
        # before any entity is processed.
        conventions = self._registry.discover()
        entity_types = self.discover(roots, match_entities)

        document = MappingDocument(self._settings)
        for model_type in entity_types:
            document.add_class(
                ClassMapping(model_type=model_type, table=self._naming.pluralize(model_type.name))
            )

        with components.component_rules.in_use():
            ConventionPipeline(conventions).apply(entity_types, document)

        for convention in conventions:
            for obj in convention.aux_db_objects():
                document.add_auxiliary_object(obj)

        logger.info(
            "Built mapping document: %d classes, %d conventions",
            len(document),
            len(conventions),
        )
        return document

    def map_entities(
        self,
        roots: Iterable[type],
        match_entities: MatchEntities | None = None,
        apply_custom_mappings: Callable[[MappingDocument], None] | None = None,
    ) -> EngineConfiguration:
        """Build the document and configure the engine with it.

        ``apply_custom_mappings`` runs over the finished document before it
        is rendered. If anything fails, the engine configuration is left
        untouched and the error propagates.
        """
        document = self.build_document(roots, match_entities)

        if apply_custom_mappings is not None:
            apply_custom_mappings(document)

        xml = render_xml(document)
        self._configuration.add_xml(xml)
        for obj in document.auxiliary_objects:
            self._configuration.add_auxiliary_database_object(obj)
        return self._configuration
