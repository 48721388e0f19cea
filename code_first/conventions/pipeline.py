"""Convention pipeline - applies ordered conventions to every entity."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from code_first.conventions.base import Convention
from code_first.core.exceptions import ConventionError
from code_first.mapping.document import MappingDocument
from code_first.mapping.graph import EntityTypeSet

logger = logging.getLogger(__name__)


class ConventionPipeline:
    """Runs each convention over each entity type, in order.

    Mutations are cumulative: a convention sees everything earlier
    conventions did. The first failure aborts the run; mutations made so
    far are not rolled back.
    """

    def __init__(self, conventions: Sequence[Convention]) -> None:
        self._conventions = list(conventions)

    @property
    def conventions(self) -> list[Convention]:
        return list(self._conventions)

    def apply(self, entity_types: EntityTypeSet, document: MappingDocument) -> None:
        """Apply every convention to every entity's class mapping.

        Raises:
            ConventionError: If a convention raises for an entity type.
        """
        for convention in self._conventions:
            started = time.perf_counter()
            for model_type in entity_types:
                class_mapping = document.class_for(model_type)
                try:
                    convention.apply(model_type, class_mapping, entity_types, document)
                except Exception as e:
                    raise ConventionError(convention.name, model_type.qualified_name, str(e)) from e
            logger.debug(
                "Ran convention %s over %d types in %.2f ms",
                convention.name,
                len(entity_types),
                (time.perf_counter() - started) * 1000,
            )
