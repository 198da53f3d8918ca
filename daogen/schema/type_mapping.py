# ============================================================================
# TYPE MAPPING TABLES
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core - Logical -> physical / generated-language type tables
# PURPOSE: Map PropertyType to SQLite column types and Java types
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: DB_TYPE_MAP, JAVA_TYPE_NOT_NULL_MAP, JAVA_TYPE_NULLABLE_MAP, TypeMapping
# DEPENDENCIES: pydantic
# ============================================================================
"""
Type Mapping Tables

Three tables keyed by PropertyType:
- DB_TYPE_MAP: physical column type used in CREATE TABLE statements
- JAVA_TYPE_NOT_NULL_MAP: primitive types for NOT NULL columns
- JAVA_TYPE_NULLABLE_MAP: boxed types for nullable columns

Usage:
    mapping = TypeMapping.default()
    mapping.db_type(PropertyType.STRING)          # "TEXT"
    mapping.java_type(PropertyType.INT, True)     # "int"
    mapping.java_type(PropertyType.INT, False)    # "Integer"
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from daogen.contracts import PropertyType, TypeMappingError


# ============================================================================
# DEFAULT TABLES
# ============================================================================

DB_TYPE_MAP: Dict[PropertyType, str] = {
    PropertyType.BOOLEAN: "INTEGER",
    PropertyType.BYTE: "INTEGER",
    PropertyType.SHORT: "INTEGER",
    PropertyType.INT: "INTEGER",
    PropertyType.LONG: "INTEGER",
    PropertyType.FLOAT: "REAL",
    PropertyType.DOUBLE: "REAL",
    PropertyType.STRING: "TEXT",
    PropertyType.BYTE_ARRAY: "BLOB",
    PropertyType.DATE: "INTEGER",      # epoch millis
    PropertyType.ENUM: "INTEGER",      # ordinal
    PropertyType.SERIALIZED: "BLOB",
}

JAVA_TYPE_NOT_NULL_MAP: Dict[PropertyType, str] = {
    PropertyType.BOOLEAN: "boolean",
    PropertyType.BYTE: "byte",
    PropertyType.SHORT: "short",
    PropertyType.INT: "int",
    PropertyType.LONG: "long",
    PropertyType.FLOAT: "float",
    PropertyType.DOUBLE: "double",
    PropertyType.STRING: "String",
    PropertyType.BYTE_ARRAY: "byte[]",
    PropertyType.DATE: "java.util.Date",
    PropertyType.ENUM: "int",
    PropertyType.SERIALIZED: "byte[]",
}

JAVA_TYPE_NULLABLE_MAP: Dict[PropertyType, str] = {
    PropertyType.BOOLEAN: "Boolean",
    PropertyType.BYTE: "Byte",
    PropertyType.SHORT: "Short",
    PropertyType.INT: "Integer",
    PropertyType.LONG: "Long",
    PropertyType.FLOAT: "Float",
    PropertyType.DOUBLE: "Double",
    PropertyType.STRING: "String",
    PropertyType.BYTE_ARRAY: "byte[]",
    PropertyType.DATE: "java.util.Date",
    PropertyType.ENUM: "Integer",
    PropertyType.SERIALIZED: "byte[]",
}


# ============================================================================
# MAPPING MODEL
# ============================================================================

class TypeMapping(BaseModel):
    """
    Immutable bundle of the three mapping tables a Schema resolves against.

    Lookups raise TypeMappingError for unmapped types. A gap is a
    configuration defect of whoever built the mapping.
    """
    model_config = ConfigDict(frozen=True)

    db_types: Dict[PropertyType, str] = Field(default_factory=lambda: dict(DB_TYPE_MAP))
    java_types_not_null: Dict[PropertyType, str] = Field(
        default_factory=lambda: dict(JAVA_TYPE_NOT_NULL_MAP)
    )
    java_types_nullable: Dict[PropertyType, str] = Field(
        default_factory=lambda: dict(JAVA_TYPE_NULLABLE_MAP)
    )

    @classmethod
    def default(cls) -> "TypeMapping":
        """SQLite / Java mapping covering the whole catalog."""
        return cls()

    def db_type(self, property_type: PropertyType) -> str:
        try:
            return self.db_types[property_type]
        except KeyError:
            raise TypeMappingError(property_type, "column type") from None

    def java_type(self, property_type: PropertyType, not_null: bool) -> str:
        table = self.java_types_not_null if not_null else self.java_types_nullable
        try:
            return table[property_type]
        except KeyError:
            kind = "non-nullable java type" if not_null else "nullable java type"
            raise TypeMappingError(property_type, kind) from None

    def with_overrides(
        self,
        db_types: Optional[Dict[PropertyType, str]] = None,
        java_types_not_null: Optional[Dict[PropertyType, str]] = None,
        java_types_nullable: Optional[Dict[PropertyType, str]] = None,
    ) -> "TypeMapping":
        """Return a copy with some entries replaced (e.g. DATE stored as TEXT)."""
        return TypeMapping(
            db_types={**self.db_types, **(db_types or {})},
            java_types_not_null={**self.java_types_not_null, **(java_types_not_null or {})},
            java_types_nullable={**self.java_types_nullable, **(java_types_nullable or {})},
        )

    def missing_types(self) -> List[PropertyType]:
        """Property types not covered by all three tables."""
        return [
            property_type
            for property_type in PropertyType
            if property_type not in self.db_types
            or property_type not in self.java_types_not_null
            or property_type not in self.java_types_nullable
        ]


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DB_TYPE_MAP",
    "JAVA_TYPE_NOT_NULL_MAP",
    "JAVA_TYPE_NULLABLE_MAP",
    "TypeMapping",
]
