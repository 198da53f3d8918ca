# ============================================================================
# PROPERTY DESCRIPTORS
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core model - Enumerated and serialized property details
# PURPOSE: Describe how ENUM and SERIALIZED properties are stored
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: EnumProperty, SerializedProperty
# DEPENDENCIES: pydantic
# ============================================================================
"""
Property Descriptors

Extra facts the emission engine needs for non-scalar properties.

- EnumProperty: the generated enum class and the scalar it is stored as
- SerializedProperty: the generated class and the converter producing bytes
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from daogen.contracts import PropertyType
from daogen.schema.naming import class_name_from_fully_qualified


class EnumProperty(BaseModel):
    """Enumerated property stored through a nested scalar column."""
    model_config = ConfigDict(frozen=True)

    enum_class: str = Field(..., min_length=1, description="Fully qualified enum class")
    storage_type: PropertyType = Field(default=PropertyType.INT)

    @field_validator("storage_type")
    @classmethod
    def storage_must_be_scalar(cls, v: PropertyType) -> PropertyType:
        if not v.is_scalar():
            raise ValueError(f"Enum storage type must be scalar, got '{v.value}'")
        return v

    @property
    def simple_name(self) -> str:
        return class_name_from_fully_qualified(self.enum_class)


class SerializedProperty(BaseModel):
    """Property persisted as a blob produced by a converter."""
    model_config = ConfigDict(frozen=True)

    java_class: str = Field(..., min_length=1, description="Fully qualified value class")
    converter_class: Optional[str] = Field(
        default=None,
        description="Converter turning the value into bytes; engine default if None",
    )

    @property
    def simple_name(self) -> str:
        return class_name_from_fully_qualified(self.java_class)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["EnumProperty", "SerializedProperty"]
