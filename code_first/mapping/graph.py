"""Entity type discovery.

Breadth-first walk from a set of root types over member edges, with a
visited set so that mutually-referencing types terminate.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from code_first.core.config import MappingSettings
from code_first.core.exceptions import UnresolvableTypeError
from code_first.mapping.model import ModelType, describe, element_type, is_model_class

logger = logging.getLogger(__name__)

TypePredicate = Callable[[type], bool]


class MatchEntities:
    """Composable entity filter.

    Every ``where`` predicate must pass for a type to be an entity.
    ``traverse_where`` predicates decide which related types the walk
    continues through; by default every related model type is walked.
    """

    def __init__(
        self,
        filters: Iterable[TypePredicate] = (),
        traverse_filters: Iterable[TypePredicate] = (),
    ) -> None:
        self._filters = tuple(filters)
        self._traverse_filters = tuple(traverse_filters)

    @classmethod
    def all(cls) -> MatchEntities:
        """Every reachable model type is an entity."""
        return cls()

    @classmethod
    def with_id_property(
        cls,
        id_member: str | None = None,
        settings: MappingSettings | None = None,
    ) -> MatchEntities:
        """Types exposing an identity member are entities.

        Member names are compared the way the identity convention
        compares them, using ``settings`` (defaults to MappingSettings()).
        ``id_member`` overrides ``settings.id_member``.
        """
        settings = settings or MappingSettings()
        expected = id_member or settings.id_member

        def has_id(t: type) -> bool:
            return any(settings.names_match(m.name, expected) for m in describe(t).members)

        return cls((has_id,))

    def where(self, predicate: TypePredicate) -> MatchEntities:
        """Return a matcher that additionally requires ``predicate``."""
        return MatchEntities(self._filters + (predicate,), self._traverse_filters)

    def traverse_where(self, predicate: TypePredicate) -> MatchEntities:
        """Return a matcher that only walks through types passing ``predicate``."""
        return MatchEntities(self._filters, self._traverse_filters + (predicate,))

    def is_entity(self, t: type) -> bool:
        return all(f(t) for f in self._filters)

    def is_traversable(self, t: type) -> bool:
        return all(f(t) for f in self._traverse_filters)

    def __call__(self, t: type) -> bool:
        return self.is_entity(t)


class EntityTypeSet:
    """Deduplicated, discovery-ordered set of entity types."""

    def __init__(self, model_types: Iterable[ModelType] = ()) -> None:
        self._types: dict[type, ModelType] = {}
        for model_type in model_types:
            self.add(model_type)

    def add(self, model_type: ModelType) -> bool:
        """Add a type; returns False if it was already present."""
        if model_type.cls in self._types:
            return False
        self._types[model_type.cls] = model_type
        return True

    def get(self, t: type) -> ModelType | None:
        return self._types.get(t)

    @property
    def classes(self) -> list[type]:
        return list(self._types)

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, ModelType):
            item = item.cls
        return item in self._types

    def __iter__(self) -> Iterator[ModelType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"EntityTypeSet({[t.name for t in self]})"


def related_types(model_type: ModelType) -> Iterator[type]:
    """Yield the model classes reachable through settable members."""
    for member in model_type.members:
        if member.read_only:
            continue
        related = element_type(member.value_type)
        if related is not None and is_model_class(related):
            yield related


class TypeGraphWalker:
    """Discovers entity types reachable from a set of roots."""

    def discover(
        self,
        roots: Iterable[type],
        match_entities: MatchEntities | None = None,
    ) -> EntityTypeSet:
        """Walk the type graph from ``roots``.

        Without ``match_entities`` the roots themselves are the result and
        nothing else is visited.

        Raises:
            UnresolvableTypeError: If a root is not a model class.
        """
        root_types = [self._resolve_root(root) for root in roots]
        entity_types = EntityTypeSet()

        if match_entities is None:
            for model_type in root_types:
                entity_types.add(model_type)
            logger.debug("Discovered %d entity types from roots only", len(entity_types))
            return entity_types

        queue: deque[ModelType] = deque(root_types)
        visited = {model_type.cls for model_type in root_types}

        while queue:
            current = queue.popleft()
            if match_entities.is_entity(current.cls):
                entity_types.add(current)

            for related in related_types(current):
                if match_entities.is_entity(related):
                    entity_types.add(describe(related))
                if related not in visited and match_entities.is_traversable(related):
                    visited.add(related)
                    queue.append(describe(related))

        logger.debug(
            "Discovered %d entity types after visiting %d types",
            len(entity_types),
            len(visited),
        )
        return entity_types

    @staticmethod
    def _resolve_root(root: Any) -> ModelType:
        if not isinstance(root, type):
            raise UnresolvableTypeError(root, "root types must be classes")
        return describe(root)
