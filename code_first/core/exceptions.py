"""code_first exception hierarchy.

Configuration errors are raised before any entity is processed. Mapping
errors are raised while the document is being built; a build that
raises never hands its document to the engine.
"""

from __future__ import annotations


class CodeFirstError(Exception):
    """Base exception for all code_first errors."""


# --- Configuration ---


class ConfigurationError(CodeFirstError):
    """Base for build configuration errors."""


class UnresolvableTypeError(ConfigurationError):
    """Raised when a type cannot be described as a model type."""

    def __init__(self, type_ref: object, detail: str) -> None:
        self.type_ref = type_ref
        super().__init__(f"Cannot resolve model type {type_ref!r}: {detail}")


class ConventionLoadError(ConfigurationError):
    """Raised when a convention manifest entry cannot be loaded."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Failed to load convention '{path}': {detail}")


class ConventionCycleError(ConfigurationError):
    """Raised when runs-after constraints form a cycle."""

    def __init__(self, conventions: list[str]) -> None:
        self.conventions = conventions
        super().__init__(
            f"Cyclic runs-after constraints between conventions: {', '.join(conventions)}"
        )


class ComponentRulesLockedError(ConfigurationError):
    """Raised when component rules are changed while a build is running."""

    def __init__(self) -> None:
        super().__init__("Component identification rules cannot change during a build")


# --- Mapping ---


class MappingError(CodeFirstError):
    """Base for mapping document errors."""


class ConventionError(MappingError):
    """Raised when a convention fails for an entity type."""

    def __init__(self, convention: str, type_name: str, detail: str) -> None:
        self.convention = convention
        self.type_name = type_name
        super().__init__(f"Convention {convention} failed for {type_name}: {detail}")


class ComponentCycleError(MappingError):
    """Raised when an embeddable type embeds itself, directly or transitively."""

    def __init__(self, path: list[str]) -> None:
        self.path = path
        super().__init__(f"Cyclic component embedding: {' -> '.join(path)}")


class DuplicateMappingError(MappingError):
    """Raised when a class or member is mapped twice."""

    def __init__(self, class_name: str, member_name: str | None = None) -> None:
        self.class_name = class_name
        self.member_name = member_name
        if member_name is None:
            super().__init__(f"Class {class_name} is already mapped")
        else:
            super().__init__(f"Member '{member_name}' of {class_name} is already mapped")


class ClassMappingNotFoundError(MappingError):
    """Raised when the document holds no class mapping for a type."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"No class mapping for {type_name}")
