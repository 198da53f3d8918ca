# ============================================================================
# DAOGEN PACKAGE
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Package initialization
# PURPOSE: Export the schema model, resolver and snapshot
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================

from daogen.__version__ import __version__
from daogen.contracts import (
    PropertyType,
    IndexOrder,
    ResolutionState,
    SchemaContractError,
    TypeMappingError,
)
from daogen.models import (
    Annotation,
    EnumProperty,
    SerializedProperty,
    Index,
    PropertyBuilder,
    Property,
    ResolvedProperty,
    ToOne,
    ToMany,
    Entity,
    Schema,
)
from daogen.schema import TypeMapping, db_name
from daogen.schema.snapshot import SchemaSnapshot

__all__ = [
    "__version__",
    # Enums / errors
    "PropertyType",
    "IndexOrder",
    "ResolutionState",
    "SchemaContractError",
    "TypeMappingError",
    # Models
    "Annotation",
    "EnumProperty",
    "SerializedProperty",
    "Index",
    "PropertyBuilder",
    "Property",
    "ResolvedProperty",
    "ToOne",
    "ToMany",
    "Entity",
    "Schema",
    # Schema utilities
    "TypeMapping",
    "db_name",
    "SchemaSnapshot",
]
