"""Model type descriptors.

A ModelType is an explicit, ordered list of a class's members, computed
once per class. Supports dataclasses, Pydantic models, and plain
annotated classes; ``property`` objects defined on the class are members
too.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
import typing
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin
from uuid import UUID

from pydantic import BaseModel

from code_first.core.enums import Access
from code_first.core.exceptions import UnresolvableTypeError

SCALAR_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    str,
    bytes,
    Decimal,
    datetime,
    date,
    time,
    timedelta,
    UUID,
)

# Engine type names, checked in order: bool before int, datetime before date.
_TYPE_NAMES: tuple[tuple[type, str], ...] = (
    (bool, "Boolean"),
    (int, "Int32"),
    (float, "Double"),
    (Decimal, "Decimal"),
    (str, "String"),
    (bytes, "BinaryBlob"),
    (datetime, "DateTime"),
    (date, "Date"),
    (time, "TimeAsTimeSpan"),
    (timedelta, "TimeSpan"),
    (UUID, "Guid"),
    (Enum, "String"),
)

_SEQUENCE_ORIGINS = {
    list,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Collection,
    collections.abc.Iterable,
    collections.abc.Iterator,
}

_MAPPING_ORIGINS = {dict, collections.abc.Mapping, collections.abc.MutableMapping}

# Descriptors kept by describe(); least recently used classes are evicted.
DESCRIBE_CACHE_SIZE = 1024


class Embedded:
    """Member marker: ``Annotated[Address, Embedded]`` maps the member as a component."""


def embeddable(cls: type) -> type:
    """Class decorator marking a value type as embeddable."""
    cls.__embeddable__ = True  # type: ignore[attr-defined]
    return cls


def split_annotation(tp: Any) -> tuple[Any, tuple[Any, ...], bool]:
    """Strip ``Annotated`` and ``Optional`` wrappers.

    Returns:
        (core type, collected Annotated metadata, whether None is allowed)
    """
    markers: list[Any] = []
    optional = False
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp, *metadata = get_args(tp)
            markers.extend(metadata)
        elif origin is Union or origin is types.UnionType:
            args = [arg for arg in get_args(tp) if arg is not type(None)]
            if len(args) != 1:
                break
            optional = True
            tp = args[0]
        else:
            break
    return tp, tuple(markers), optional


def element_type(tp: Any) -> Any:
    """Unwrap a single level of container abstraction.

    ``list[Order]`` and ``Sequence[Order | None]`` give ``Order``, a
    mapping gives its value type. Anything else is returned unchanged.
    Returns None for heterogeneous tuples.
    """
    tp, _, _ = split_annotation(tp)
    origin = get_origin(tp)
    args = get_args(tp)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return split_annotation(args[0])[0]
        return None
    if origin in _SEQUENCE_ORIGINS and args:
        return split_annotation(args[0])[0]
    if origin in _MAPPING_ORIGINS and len(args) == 2:
        return split_annotation(args[1])[0]
    return tp


def is_scalar(tp: Any) -> bool:
    """Whether ``tp`` maps to a single column."""
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    return issubclass(tp, SCALAR_TYPES) or issubclass(tp, Enum)


def type_name_for(tp: Any) -> str | None:
    """Engine type name for a scalar Python type."""
    if not is_scalar(tp):
        return None
    for python_type, type_name in _TYPE_NAMES:
        if issubclass(tp, python_type):
            return type_name
    return None


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return issubclass(cls, BaseModel)


def is_model_class(tp: Any) -> bool:
    """Whether ``tp`` is a class that can be described as a ModelType."""
    if not isinstance(tp, type) or get_origin(tp) is not None:
        return False
    if is_scalar(tp) or tp.__module__ == "builtins":
        return False
    if dataclasses.is_dataclass(tp) or _is_pydantic_model(tp):
        return True
    return bool(getattr(tp, "__annotations__", None))


@dataclass(frozen=True)
class Member:
    """A named, typed slot on a model type."""

    name: str
    value_type: Any
    access: Access
    read_only: bool = False
    optional: bool = False
    markers: tuple[Any, ...] = ()

    def has_marker(self, marker: Any) -> bool:
        """Check for a marker class or instance in the member's metadata."""
        for item in self.markers:
            if item is marker:
                return True
            if isinstance(marker, type) and isinstance(item, marker):
                return True
        return False


@dataclass(frozen=True)
class ModelType:
    """Descriptor of a model class and its members."""

    cls: type
    members: tuple[Member, ...] = field(default=(), compare=False, repr=False)

    @property
    def name(self) -> str:
        return self.cls.__name__

    @property
    def qualified_name(self) -> str:
        return f"{self.cls.__module__}.{self.cls.__qualname__}"

    def member(self, name: str) -> Member | None:
        for member in self.members:
            if member.name == name:
                return member
        return None

    def is_marked(self, marker: str = "__embeddable__") -> bool:
        """Check a class-level marker set by a decorator such as ``embeddable``."""
        return bool(getattr(self.cls, marker, False))


def _resolve_hints(target: Any, owner: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(target, include_extras=True)
    except (NameError, TypeError) as e:
        raise UnresolvableTypeError(owner, f"cannot evaluate annotations: {e}") from e


def _framework_bases(cls: type) -> set[type]:
    """Base classes whose own members never belong to the model."""
    if _is_pydantic_model(cls):
        return set(BaseModel.__mro__)
    return {object}


def _make_member(
    name: str, annotation: Any, access: Access, read_only: bool, extra_markers: tuple[Any, ...] = ()
) -> Member:
    value_type, markers, optional = split_annotation(annotation)
    return Member(
        name=name,
        value_type=value_type,
        access=access,
        read_only=read_only,
        optional=optional,
        markers=markers + extra_markers,
    )


def _field_members(cls: type) -> list[Member]:
    # Pydantic model - annotations are already resolved, Annotated extras live in metadata
    if _is_pydantic_model(cls):
        return [
            _make_member(name, info.annotation, Access.FIELD, False, tuple(info.metadata))
            for name, info in cls.model_fields.items()  # type: ignore[attr-defined]
            if not name.startswith("_")
        ]

    hints = _resolve_hints(cls, cls)

    # Dataclass
    if dataclasses.is_dataclass(cls):
        return [
            _make_member(f.name, hints.get(f.name, f.type), Access.FIELD, not f.init)
            for f in dataclasses.fields(cls)
            if not f.name.startswith("_")
        ]

    # Plain class - use class annotations
    members = []
    for name, annotation in hints.items():
        if name.startswith("_") or get_origin(annotation) is ClassVar or annotation is ClassVar:
            continue
        members.append(_make_member(name, annotation, Access.FIELD, False))
    return members


def _property_members(cls: type, taken: set[str]) -> list[Member]:
    members = []
    seen = set(taken)
    skipped = _framework_bases(cls)
    for klass in reversed(cls.__mro__):
        if klass in skipped:
            continue
        for name, attr in vars(klass).items():
            if not isinstance(attr, property) or name.startswith("_") or name in seen:
                continue
            seen.add(name)
            annotation = Any
            if attr.fget is not None:
                annotation = _resolve_hints(attr.fget, cls).get("return", Any)
            read_only = attr.fset is None
            access = Access.READONLY if read_only else Access.PROPERTY
            members.append(_make_member(name, annotation, access, read_only))
    return members


@lru_cache(maxsize=DESCRIBE_CACHE_SIZE)
def describe(cls: Any) -> ModelType:
    """Build the descriptor for a model class.

    Raises:
        UnresolvableTypeError: If ``cls`` is not a model class or its
            annotations cannot be evaluated.
    """
    if not isinstance(cls, type):
        raise UnresolvableTypeError(cls, "not a class")
    if not is_model_class(cls):
        raise UnresolvableTypeError(cls, "not a dataclass, Pydantic model, or annotated class")

    members = _field_members(cls)
    members.extend(_property_members(cls, {m.name for m in members}))
    return ModelType(cls=cls, members=tuple(members))
