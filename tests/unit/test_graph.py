"""Unit tests for TypeGraphWalker, MatchEntities and EntityTypeSet."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from code_first.core.config import MappingSettings
from code_first.core.exceptions import UnresolvableTypeError
from code_first.mapping.graph import EntityTypeSet, MatchEntities, TypeGraphWalker, related_types
from code_first.mapping.model import describe


@dataclass
class Tag:
    id: int
    label: str


@dataclass
class Author:
    id: int
    name: str
    books: list[Book] = field(default_factory=list)


@dataclass
class Book:
    id: int
    title: str
    author: Author
    tags: list[Tag]
    editor: Author | None = None


@dataclass
class Shelf:
    books: list[Book]


@dataclass
class Library:
    id: int
    shelves: list[Shelf]


@dataclass
class Report:
    id: int

    @property
    def featured(self) -> Book:
        raise NotImplementedError


@dataclass
class Ledger:
    Key: int
    entries: list[Entry]


@dataclass
class Entry:
    key: int
    amount: int


def names(entity_types: EntityTypeSet) -> list[str]:
    return [t.name for t in entity_types]


@pytest.fixture
def walker() -> TypeGraphWalker:
    return TypeGraphWalker()


class TestDiscoverWithoutFilter:
    def test_returns_roots_only(self, walker: TypeGraphWalker) -> None:
        result = walker.discover([Book, Author])
        assert names(result) == ["Book", "Author"]

    def test_no_traversal(self, walker: TypeGraphWalker) -> None:
        result = walker.discover([Library])
        assert names(result) == ["Library"]

    def test_duplicate_roots_collapse(self, walker: TypeGraphWalker) -> None:
        result = walker.discover([Book, Book])
        assert len(result) == 1

    def test_empty_roots(self, walker: TypeGraphWalker) -> None:
        assert len(walker.discover([])) == 0


class TestDiscoverWithFilter:
    def test_mutual_reference_terminates(self, walker: TypeGraphWalker) -> None:
        result = walker.discover([Author], MatchEntities.all())
        assert names(result) == ["Author", "Book", "Tag"]

    def test_type_reached_twice_appears_once(self, walker: TypeGraphWalker) -> None:
        # Book reaches Author through both 'author' and 'editor'.
        result = walker.discover([Book], MatchEntities.all())
        assert names(result).count("Author") == 1
        assert names(result) == ["Book", "Author", "Tag"]

    def test_conduit_type_is_walked_but_excluded(self, walker: TypeGraphWalker) -> None:
        result = walker.discover([Library], MatchEntities.with_id_property())
        assert names(result) == ["Library", "Book", "Author", "Tag"]
        assert Shelf not in result

    def test_read_only_members_not_traversed(self, walker: TypeGraphWalker) -> None:
        result = walker.discover([Report], MatchEntities.all())
        assert names(result) == ["Report"]

    def test_where_composes_by_conjunction(self, walker: TypeGraphWalker) -> None:
        match = MatchEntities.all().where(lambda t: t is not Tag).where(lambda t: t is not Author)
        result = walker.discover([Book], match)
        assert names(result) == ["Book"]

    def test_where_returns_new_matcher(self) -> None:
        base = MatchEntities.all()
        narrowed = base.where(lambda t: False)
        assert base.is_entity(Book) is True
        assert narrowed.is_entity(Book) is False

    def test_traverse_where_limits_walk(self, walker: TypeGraphWalker) -> None:
        match = MatchEntities.with_id_property().traverse_where(lambda t: t is not Shelf)
        result = walker.discover([Library], match)
        assert names(result) == ["Library"]

    def test_root_failing_filter_still_walked(self, walker: TypeGraphWalker) -> None:
        result = walker.discover([Shelf], MatchEntities.with_id_property())
        assert Shelf not in result
        assert names(result) == ["Book", "Author", "Tag"]

    def test_discovery_is_deterministic(self, walker: TypeGraphWalker) -> None:
        first = walker.discover([Library], MatchEntities.all())
        second = TypeGraphWalker().discover([Library], MatchEntities.all())
        assert names(first) == names(second)


class TestRootValidation:
    @pytest.mark.parametrize("root", [42, "Book", int])
    def test_unresolvable_root(self, walker: TypeGraphWalker, root: object) -> None:
        with pytest.raises(UnresolvableTypeError):
            walker.discover([Book, root], MatchEntities.all())


class TestRelatedTypes:
    def test_unwraps_collections_and_skips_scalars(self) -> None:
        assert list(related_types(describe(Book))) == [Author, Tag, Author]


class TestEntityTypeSet:
    def test_membership_by_class_and_descriptor(self) -> None:
        entity_types = EntityTypeSet([describe(Book)])
        assert Book in entity_types
        assert describe(Book) in entity_types
        assert Author not in entity_types

    def test_add_reports_duplicates(self) -> None:
        entity_types = EntityTypeSet()
        assert entity_types.add(describe(Tag)) is True
        assert entity_types.add(describe(Tag)) is False
        assert len(entity_types) == 1

    def test_get_and_classes(self) -> None:
        entity_types = EntityTypeSet([describe(Tag), describe(Book)])
        assert entity_types.get(Tag) == describe(Tag)
        assert entity_types.get(Author) is None
        assert entity_types.classes == [Tag, Book]


class TestWithIdProperty:
    def test_default_is_case_insensitive_id(self) -> None:
        assert MatchEntities.with_id_property().is_entity(Tag) is True
        assert MatchEntities.with_id_property().is_entity(Shelf) is False

    def test_follows_configured_id_member(self, walker: TypeGraphWalker) -> None:
        match = MatchEntities.with_id_property(settings=MappingSettings(id_member="Key"))
        result = walker.discover([Ledger], match)
        assert names(result) == ["Ledger", "Entry"]
        assert match.is_entity(Tag) is False

    def test_follows_case_sensitivity(self, walker: TypeGraphWalker) -> None:
        settings = MappingSettings(id_member="Key", case_sensitive_members=True)
        result = walker.discover([Ledger], MatchEntities.with_id_property(settings=settings))
        assert names(result) == ["Ledger"]

    def test_explicit_member_overrides_settings(self) -> None:
        match = MatchEntities.with_id_property("amount", MappingSettings(id_member="Key"))
        assert match.is_entity(Entry) is True
        assert match.is_entity(Ledger) is False
