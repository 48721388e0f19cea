"""Mapping layer - model descriptors, type discovery, and the mapping document."""

from __future__ import annotations

from code_first.mapping.document import (
    AuxiliaryDatabaseObject,
    BagMapping,
    ClassMapping,
    ComponentMapping,
    IdMapping,
    ManyToOneMapping,
    MappingDocument,
    PropertyMapping,
    VersionMapping,
)
from code_first.mapping.graph import EntityTypeSet, MatchEntities, TypeGraphWalker
from code_first.mapping.model import Embedded, Member, ModelType, describe, embeddable
from code_first.mapping.render import render_xml

__all__ = [
    # Model
    "ModelType",
    "Member",
    "Embedded",
    "embeddable",
    "describe",
    # Discovery
    "TypeGraphWalker",
    "MatchEntities",
    "EntityTypeSet",
    # Document
    "MappingDocument",
    "ClassMapping",
    "IdMapping",
    "VersionMapping",
    "PropertyMapping",
    "ComponentMapping",
    "ManyToOneMapping",
    "BagMapping",
    "AuxiliaryDatabaseObject",
    # Rendering
    "render_xml",
]
