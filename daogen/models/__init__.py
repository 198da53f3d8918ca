# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Model exports
# PURPOSE: Central export point for the schema declaration model
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Declaration flow:
    Schema -> Entity -> PropertyBuilder -> Property -> ResolvedProperty
"""

from daogen.models.annotation import Annotation
from daogen.models.descriptors import EnumProperty, SerializedProperty
from daogen.models.index import Index, IndexColumn
from daogen.models.property import (
    PropertyConfig,
    PropertyBuilder,
    Property,
    ResolvedProperty,
    build_constraints,
)
from daogen.models.relation import ToOne, ToMany
from daogen.models.entity import Entity
from daogen.models.schema import Schema

__all__ = [
    # Descriptors
    "Annotation",
    "EnumProperty",
    "SerializedProperty",
    # Index
    "Index",
    "IndexColumn",
    # Property
    "PropertyConfig",
    "PropertyBuilder",
    "Property",
    "ResolvedProperty",
    "build_constraints",
    # Relations
    "ToOne",
    "ToMany",
    # Entity / Schema
    "Entity",
    "Schema",
]
