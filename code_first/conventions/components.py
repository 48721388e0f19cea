"""Component mapping - flattens embedded value objects.

A member is a component when any identification rule matches it. The
default rules accept members annotated with ``Embedded`` and members
whose type is decorated with ``@embeddable``. Host code may add rules
with ``add_rule_for_identifying_components`` before building; the rule
list must not change while a build is running.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

from code_first.conventions.base import Convention
from code_first.conventions.identity import CreateNonCompositeIdentity
from code_first.conventions.properties import CreateBasicProperties
from code_first.conventions.version import AddVersion
from code_first.core.exceptions import (
    ComponentCycleError,
    ComponentRulesLockedError,
    MappingError,
)
from code_first.mapping.document import ClassMapping, ComponentMapping, MappingDocument
from code_first.mapping.graph import EntityTypeSet
from code_first.mapping.model import Embedded, Member, ModelType, describe, is_model_class

ComponentRule = Callable[[Member], bool]


def _is_marked_member(member: Member) -> bool:
    return member.has_marker(Embedded)


def _is_embeddable_type(member: Member) -> bool:
    return is_model_class(member.value_type) and describe(member.value_type).is_marked()


DEFAULT_RULES: tuple[ComponentRule, ...] = (_is_marked_member, _is_embeddable_type)


class ComponentRules:
    """Append-only set of component identification rules."""

    def __init__(self, rules: Iterable[ComponentRule] = DEFAULT_RULES) -> None:
        self._rules = list(rules)
        self._lock = threading.Lock()
        self._active_builds = 0

    def add(self, rule: ComponentRule) -> None:
        """Append a rule.

        Raises:
            ComponentRulesLockedError: If a build is running.
        """
        with self._lock:
            if self._active_builds:
                raise ComponentRulesLockedError()
            self._rules.append(rule)

    @contextmanager
    def in_use(self) -> Iterator[ComponentRules]:
        """Hold the rules fixed for the duration of a build."""
        with self._lock:
            self._active_builds += 1
        try:
            yield self
        finally:
            with self._lock:
                self._active_builds -= 1

    def matches(self, member: Member) -> bool:
        return any(rule(member) for rule in self._rules)

    def __len__(self) -> int:
        return len(self._rules)


component_rules = ComponentRules()


def add_rule_for_identifying_components(rule: ComponentRule) -> None:
    """Register an extra rule on the process-wide rule set."""
    component_rules.add(rule)


class ComponentMapper:
    """Builds nested component mappings for embeddable members.

    Args:
        rules: Identification rules; defaults to the process-wide set.
        separator: Appended after each component name in column prefixes.
    """

    def __init__(self, rules: ComponentRules | None = None, separator: str = "_") -> None:
        self._rules = rules if rules is not None else component_rules
        self._separator = separator

    def build_component(
        self,
        member: Member,
        column_prefix: str = "",
        owner: type | None = None,
    ) -> ComponentMapping | None:
        """Build the component for ``member``, or None if it is not one.

        Raises:
            ComponentCycleError: If the value type already encloses this member.
            MappingError: If a component member's type is not a model class.
        """
        path: tuple[type, ...] = (owner,) if owner is not None else ()
        return self._build(member, column_prefix, path)

    def _build(
        self,
        member: Member,
        column_prefix: str,
        path: tuple[type, ...],
    ) -> ComponentMapping | None:
        if not self._rules.matches(member):
            return None

        value_type = member.value_type
        if not is_model_class(value_type):
            raise MappingError(
                f"Component member '{member.name}' has unsupported type {value_type!r}"
            )
        if value_type in path:
            names = [t.__name__ for t in path[path.index(value_type) :]]
            raise ComponentCycleError(names + [value_type.__name__])

        component = ComponentMapping(name=member.name, access=member.access)
        prefix = column_prefix + member.name + self._separator

        for sub_member in describe(value_type).members:
            sub_component = self._build(sub_member, prefix, path + (value_type,))
            if sub_component is not None:
                component.components.append(sub_component)
                continue
            prop = CreateBasicProperties.get_property(sub_member, prefix)
            if prop is not None:
                component.properties.append(prop)

        return component


class CreateComponentMappedProperties(Convention):
    """Maps embeddable members of an entity as components."""

    runs_after = (CreateNonCompositeIdentity, AddVersion)

    def apply(
        self,
        model_type: ModelType,
        class_mapping: ClassMapping,
        entity_types: EntityTypeSet,
        document: MappingDocument,
    ) -> None:
        mapper = ComponentMapper(separator=document.settings.column_separator)
        claimed = class_mapping.claimed_members
        for member in model_type.members:
            if member.name in claimed:
                continue
            component = mapper.build_component(member, owner=model_type.cls)
            if component is not None:
                class_mapping.add_component(component)
