# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Foundation - Core enums and error types
# PURPOSE: Define the property type catalog, resolution states and errors
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: PropertyType, IndexOrder, ResolutionState, SchemaContractError, TypeMappingError
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the schema model.

These are shared by every layer of the resolver:
- Declaration (PropertyBuilder, Entity)
- Resolution (pass 2 / pass 3)
- Export (SchemaSnapshot handed to emission engines)
"""

from enum import Enum


# ============================================================================
# PROPERTY TYPE CATALOG
# ============================================================================

class PropertyType(str, Enum):
    """
    Logical property types.

    The input domain for type mapping. Physical column types and
    generated-language types are derived from these by the Schema.
    """
    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"                # 64-bit integer, the only autoincrement-capable type
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BYTE_ARRAY = "byte_array"    # May be materialized through a backing entity
    DATE = "date"
    ENUM = "enum"                # Stored through a nested scalar type
    SERIALIZED = "serialized"    # Stored as an opaque blob

    def is_scalar(self) -> bool:
        """Check if this type can be the storage type of an enumerated property."""
        return self not in (PropertyType.ENUM, PropertyType.SERIALIZED)


class IndexOrder(str, Enum):
    """Explicit sort direction of an indexed column."""
    ASC = "ASC"
    DESC = "DESC"


# ============================================================================
# RESOLUTION STATES
# ============================================================================

class ResolutionState(str, Enum):
    """
    Resolution lifecycle of properties, entities and the schema.

    State transitions:
        DECLARED -> COLUMN_RESOLVED -> FINALIZED
    """
    DECLARED = "declared"                # Builder output, nothing derived yet
    COLUMN_RESOLVED = "column_resolved"  # Pass 2 done
    FINALIZED = "finalized"              # Pass 3 done

    def can_transition_to(self, new_state: "ResolutionState") -> bool:
        """Validate that passes run in order and only once."""
        allowed = {
            ResolutionState.DECLARED: {ResolutionState.COLUMN_RESOLVED},
            ResolutionState.COLUMN_RESOLVED: {ResolutionState.FINALIZED},
            ResolutionState.FINALIZED: set(),
        }
        return new_state in allowed[self]


# ============================================================================
# ERRORS
# ============================================================================

class SchemaContractError(ValueError):
    """
    A declaration contract was violated.

    Raised synchronously at the call site. The schema is unusable
    afterwards; generation must be aborted.
    """


class TypeMappingError(LookupError):
    """The schema has no mapping for a logical property type."""

    def __init__(self, property_type: PropertyType, table: str):
        self.property_type = property_type
        self.table = table
        super().__init__(f"No {table} mapping for property type '{property_type.value}'")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PropertyType",
    "IndexOrder",
    "ResolutionState",
    "SchemaContractError",
    "TypeMappingError",
]
