# ============================================================================
# ANNOTATION DESCRIPTOR
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core model - Opaque annotation tag
# PURPOSE: Tag attached to generated fields, getters and setters
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Annotation
# DEPENDENCIES: pydantic
# ============================================================================
"""
Annotation Descriptor

The resolver only stores annotations in order; rendering them is up to
the emission engine.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Annotation(BaseModel):
    """An annotation to emit on a generated member, e.g. @SerializedName("x")."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Annotation type, e.g. 'SerializedName'")
    parameters: Dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["Annotation"]
