"""Convention registry - loads conventions and orders them.

Candidates come from a manifest of ``"module:ClassName"`` paths plus any
classes registered explicitly. Only concrete Convention subclasses are
kept. The application order is a topological sort of the runs-after
constraints; ties go to the convention discovered first, so the order
is stable across runs.
"""

from __future__ import annotations

import heapq
import importlib
import inspect
import logging
from collections.abc import Iterable

from code_first.conventions.base import Convention
from code_first.core.exceptions import ConventionCycleError, ConventionLoadError

logger = logging.getLogger(__name__)

BUILTIN_CONVENTIONS: tuple[str, ...] = (
    "code_first.conventions.identity:CreateNonCompositeIdentity",
    "code_first.conventions.version:AddVersion",
    "code_first.conventions.properties:CreateBasicProperties",
    "code_first.conventions.components:CreateComponentMappedProperties",
    "code_first.conventions.references:CreateReferences",
)


def _load_convention(path: str) -> object:
    """Import the object named by a ``module:ClassName`` path."""
    module_path, _, attr = path.partition(":")
    if not module_path or not attr:
        raise ConventionLoadError(path, "expected 'module:ClassName'")
    try:
        module = importlib.import_module(module_path)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConventionLoadError(path, str(e)) from e


def _takes_no_arguments(cls: type) -> bool:
    try:
        inspect.signature(cls).bind()
    except TypeError:
        return False
    except ValueError:
        # No signature to inspect.
        return True
    return True


def is_instantiable(candidate: object) -> bool:
    """Concrete Convention subclass that can be created without arguments."""
    return (
        inspect.isclass(candidate)
        and issubclass(candidate, Convention)
        and not inspect.isabstract(candidate)
        and _takes_no_arguments(candidate)
    )


def sort_conventions(convention_types: list[type[Convention]]) -> list[type[Convention]]:
    """Order conventions so each runs after everything it declares.

    Raises:
        ConventionCycleError: If the runs-after constraints form a cycle.
    """
    index = {t: i for i, t in enumerate(convention_types)}
    dependents: dict[type[Convention], list[type[Convention]]] = {t: [] for t in convention_types}
    in_degree = {t: 0 for t in convention_types}

    for convention_type in convention_types:
        for predecessor in convention_type.runs_after:
            if predecessor not in index:
                logger.debug(
                    "Ignoring %s runs after %s: not registered",
                    convention_type.__name__,
                    predecessor.__name__,
                )
                continue
            dependents[predecessor].append(convention_type)
            in_degree[convention_type] += 1

    ready = [index[t] for t in convention_types if in_degree[t] == 0]
    heapq.heapify(ready)
    order: list[type[Convention]] = []

    while ready:
        current = convention_types[heapq.heappop(ready)]
        order.append(current)
        for dependent in dependents[current]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, index[dependent])

    if len(order) != len(convention_types):
        remaining = [t.__name__ for t in convention_types if in_degree[t] > 0]
        raise ConventionCycleError(remaining)

    return order


class ConventionRegistry:
    """Discovers conventions and computes their application order.

    The registry is configured once, before any build; ``discover`` only
    reads it.

    Args:
        manifest: ``"module:ClassName"`` paths to load. Defaults to the
            built-in conventions.
        conventions: Additional convention classes.
    """

    def __init__(
        self,
        manifest: Iterable[str] | None = None,
        conventions: Iterable[type[Convention]] = (),
    ) -> None:
        self._manifest = list(BUILTIN_CONVENTIONS if manifest is None else manifest)
        self._extra: list[type[Convention]] = list(conventions)

    def register(self, convention_type: type[Convention]) -> ConventionRegistry:
        """Add a convention class to the candidate set."""
        self._extra.append(convention_type)
        return self

    def candidates(self) -> list[type[Convention]]:
        """Concrete convention classes in discovery order, without duplicates.

        Raises:
            ConventionLoadError: If a manifest entry cannot be imported.
        """
        found: list[type[Convention]] = []
        loaded = [_load_convention(path) for path in self._manifest]
        for candidate in loaded + self._extra:
            if not is_instantiable(candidate):
                logger.debug("Skipping non-instantiable convention candidate %r", candidate)
                continue
            if candidate not in found:
                found.append(candidate)  # type: ignore[arg-type]
        return found

    def discover(self) -> list[Convention]:
        """Instantiate every convention, in application order.

        Raises:
            ConventionLoadError: If a manifest entry cannot be imported.
            ConventionCycleError: If the runs-after constraints form a cycle.
        """
        ordered = sort_conventions(self.candidates())
        logger.debug("Convention order: %s", ", ".join(t.__name__ for t in ordered))
        return [convention_type() for convention_type in ordered]

    def __len__(self) -> int:
        return len(self.candidates())
