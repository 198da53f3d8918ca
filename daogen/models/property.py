# ============================================================================
# PROPERTY MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core model - Column declaration, builder and resolution
# PURPOSE: Turn a builder-populated column declaration into resolved column facts
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: PropertyConfig, PropertyBuilder, Property, ResolvedProperty, build_constraints
# DEPENDENCIES: pydantic
# ============================================================================
"""
Property Model

A property is one generated field mapped to one database column.

Key concept:
- PropertyBuilder accumulates an immutable PropertyConfig
- Property = DECLARED (builder output, still settable by relation wiring)
- ResolvedProperty = COLUMN_RESOLVED / FINALIZED (derived column facts)

Lifecycle:
    1. Entity.add_property() hands out a PropertyBuilder
    2. build() creates the declared Property exactly once
    3. Property.init_2nd_pass(schema) -> ResolvedProperty (COLUMN_RESOLVED)
    4. ResolvedProperty.init_3rd_pass(schema) -> ResolvedProperty (FINALIZED)

Pass 2 of every property in the schema completes before pass 3 of any
property starts; Schema.resolve() enforces this.
"""

import weakref
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from daogen.contracts import PropertyType, ResolutionState, SchemaContractError
from daogen.logging import ComponentType, get_logger
from daogen.models.annotation import Annotation
from daogen.models.descriptors import EnumProperty, SerializedProperty
from daogen.models.index import Index
from daogen.schema.naming import db_name

if TYPE_CHECKING:
    from daogen.models.entity import Entity
    from daogen.models.schema import Schema

logger = get_logger(__name__, ComponentType.BUILDER)


# ============================================================================
# DECLARATION CONFIG
# ============================================================================

class PropertyConfig(BaseModel):
    """
    Declarative facts about one column, as written by the builder.

    column_name / column_type are explicit overrides; None means
    "derive in pass 2".
    """
    model_config = ConfigDict(frozen=True)

    property_type: PropertyType
    property_name: str = Field(..., min_length=1)

    column_name: Optional[str] = None
    column_type: Optional[str] = None

    primary_key: bool = False
    pk_asc: bool = False
    pk_desc: bool = False
    pk_autoincrement: bool = False

    unique: bool = False
    not_null: bool = False
    # Value never changes after insert; allows leaner update statements
    constant: bool = False

    serialized: Optional[SerializedProperty] = None
    enumerated: Optional[EnumProperty] = None

    field_annotations: Tuple[Annotation, ...] = ()
    setter_annotations: Tuple[Annotation, ...] = ()
    getter_annotations: Tuple[Annotation, ...] = ()


def build_constraints(config: PropertyConfig) -> Optional[str]:
    """
    Build the column constraint clause emitted verbatim into CREATE TABLE.

    Returns None when no constraint applies.
    """
    clause = ""
    if config.primary_key:
        clause += "PRIMARY KEY"
        if config.pk_asc:
            clause += " ASC"
        if config.pk_desc:
            clause += " DESC"
        if config.pk_autoincrement:
            clause += " AUTOINCREMENT"
    # SQLite accepts several NULL values in a TEXT primary key column
    if config.not_null or (config.primary_key and config.property_type == PropertyType.STRING):
        clause += " NOT NULL"
    if config.unique:
        clause += " UNIQUE"
    clause = clause.strip()
    return clause or None


# ============================================================================
# BUILDER
# ============================================================================

class PropertyBuilder:
    """
    Fluent builder for one property.

    Every mutator returns the builder. build() (alias get_property())
    freezes the declaration; mutating afterwards is a contract violation.

    Example:
        entity.add_long_property("id").primary_key_asc().autoincrement()
        entity.add_string_property("email").not_null().index_asc(None, True)

    Args:
        schema: Owning schema. Not retained; the resolution passes
            receive it as a parameter.
        entity: Entity the property is declared on
        property_type: Logical type
        property_name: Generated field name, non-empty
    """

    def __init__(
        self,
        schema: "Schema",
        entity: "Entity",
        property_type: PropertyType,
        property_name: str,
    ):
        if not property_name:
            raise ValueError("Property name is required")
        self._entity = entity
        self._config = PropertyConfig(property_type=property_type, property_name=property_name)
        self._property: Optional[Property] = None

    @property
    def config(self) -> PropertyConfig:
        return self._config

    @property
    def is_built(self) -> bool:
        return self._property is not None

    def _ensure_open(self) -> None:
        if self._property is not None:
            raise SchemaContractError(
                f"Property '{self._config.property_name}' of {self._entity.class_name} "
                f"is already built and can no longer be changed"
            )

    def _update(self, **changes) -> "PropertyBuilder":
        self._ensure_open()
        self._config = self._config.model_copy(update=changes)
        return self

    # -------------------------------------------------------------------------
    # Column overrides
    # -------------------------------------------------------------------------

    def column_name(self, column_name: str) -> "PropertyBuilder":
        return self._update(column_name=column_name)

    def column_type(self, column_type: str) -> "PropertyBuilder":
        return self._update(column_type=column_type)

    # -------------------------------------------------------------------------
    # Primary key
    # -------------------------------------------------------------------------

    def primary_key(self) -> "PropertyBuilder":
        return self._update(primary_key=True)

    def primary_key_asc(self) -> "PropertyBuilder":
        return self._update(primary_key=True, pk_asc=True)

    def primary_key_desc(self) -> "PropertyBuilder":
        return self._update(primary_key=True, pk_desc=True)

    def autoincrement(self) -> "PropertyBuilder":
        """
        Mark the primary key as AUTOINCREMENT.

        Raises:
            SchemaContractError: Unless already a primary key of type LONG
        """
        self._ensure_open()
        if not self._config.primary_key or self._config.property_type != PropertyType.LONG:
            logger.error(
                f"Rejected AUTOINCREMENT on {self._entity.class_name}.{self._config.property_name} "
                f"(type={self._config.property_type.value}, primary_key={self._config.primary_key})"
            )
            raise SchemaContractError(
                "AUTOINCREMENT is only available to primary key properties of type long"
            )
        return self._update(pk_autoincrement=True)

    # -------------------------------------------------------------------------
    # Flags
    # -------------------------------------------------------------------------

    def unique(self) -> "PropertyBuilder":
        return self._update(unique=True)

    def not_null(self) -> "PropertyBuilder":
        return self._update(not_null=True)

    def constant(self) -> "PropertyBuilder":
        return self._update(constant=True)

    def enumerated(self, enumerated: EnumProperty) -> "PropertyBuilder":
        return self._update(enumerated=enumerated)

    def serialized(self, serialized: SerializedProperty) -> "PropertyBuilder":
        return self._update(serialized=serialized)

    # -------------------------------------------------------------------------
    # Annotations
    # -------------------------------------------------------------------------

    def add_field_annotation(self, annotation: Annotation) -> "PropertyBuilder":
        return self._update(field_annotations=self._config.field_annotations + (annotation,))

    def add_setter_annotation(self, annotation: Annotation) -> "PropertyBuilder":
        return self._update(setter_annotations=self._config.setter_annotations + (annotation,))

    def add_getter_annotation(self, annotation: Annotation) -> "PropertyBuilder":
        return self._update(getter_annotations=self._config.getter_annotations + (annotation,))

    def add_setter_getter_annotation(self, annotation: Annotation) -> "PropertyBuilder":
        return self._update(
            setter_annotations=self._config.setter_annotations + (annotation,),
            getter_annotations=self._config.getter_annotations + (annotation,),
        )

    # -------------------------------------------------------------------------
    # Single-property index shortcuts (registered on the entity immediately)
    # -------------------------------------------------------------------------

    def index(self) -> "PropertyBuilder":
        self._ensure_open()
        self._entity.add_index(Index().add_property(self._config.property_name))
        return self

    def index_asc(self, index_name: Optional[str] = None, unique: bool = False) -> "PropertyBuilder":
        self._ensure_open()
        index = Index(name=index_name, unique=unique).add_property_asc(self._config.property_name)
        self._entity.add_index(index)
        return self

    def index_desc(self, index_name: Optional[str] = None, unique: bool = False) -> "PropertyBuilder":
        self._ensure_open()
        index = Index(name=index_name, unique=unique).add_property_desc(self._config.property_name)
        self._entity.add_index(index)
        return self

    # -------------------------------------------------------------------------
    # Terminal
    # -------------------------------------------------------------------------

    def build(self) -> "Property":
        """Create the declared Property (once; later calls return the same object)."""
        if self._property is None:
            self._property = Property(self._entity, self._config)
            logger.debug(f"Built {self._property}")
        return self._property

    get_property = build


# ============================================================================
# DECLARED PROPERTY
# ============================================================================

class Property:
    """
    A declared, not yet resolved property.

    Holds only a weak reference to its entity: the entity owns the
    property, never the other way round. Schema is passed into the
    resolution passes instead of being stored.
    """

    def __init__(self, entity: "Entity", config: PropertyConfig):
        self._entity_ref = weakref.ref(entity)
        self._config = config
        self._ordinal = 0
        self._backing_entity: Optional["Entity"] = None
        self._backing_property_name: Optional[str] = None

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def config(self) -> PropertyConfig:
        return self._config

    @property
    def entity(self) -> "Entity":
        entity = self._entity_ref()
        if entity is None:
            raise ReferenceError(f"Entity of property '{self.property_name}' was discarded")
        return entity

    @property
    def property_name(self) -> str:
        return self._config.property_name

    @property
    def property_type(self) -> PropertyType:
        return self._config.property_type

    @property
    def is_primary_key(self) -> bool:
        return self._config.primary_key

    @property
    def is_autoincrement(self) -> bool:
        return self._config.pk_autoincrement

    @property
    def is_not_null(self) -> bool:
        return self._config.not_null

    @property
    def ordinal(self) -> int:
        return self._ordinal

    @property
    def serialized(self) -> Optional[SerializedProperty]:
        return self._config.serialized

    @property
    def enumerated(self) -> Optional[EnumProperty]:
        return self._config.enumerated

    @property
    def storage_type(self) -> PropertyType:
        """Type the column is stored as (an enum's storage type, else property_type)."""
        if self._config.property_type == PropertyType.ENUM and self._config.enumerated is not None:
            return self._config.enumerated.storage_type
        return self._config.property_type

    @property
    def backing_entity(self) -> Optional["Entity"]:
        return self._backing_entity

    @property
    def backing_property_name(self) -> Optional[str]:
        return self._backing_property_name

    @property
    def state(self) -> ResolutionState:
        return ResolutionState.DECLARED

    # -------------------------------------------------------------------------
    # Setters used by entities and relation wiring before pass 2
    # -------------------------------------------------------------------------

    def set_ordinal(self, ordinal: int) -> None:
        self._ordinal = ordinal

    def set_serialized(self, serialized: Optional[SerializedProperty]) -> None:
        self._config = self._config.model_copy(update={"serialized": serialized})

    def set_enumerated(self, enumerated: Optional[EnumProperty]) -> None:
        self._config = self._config.model_copy(update={"enumerated": enumerated})

    def set_property_type(self, property_type: PropertyType) -> None:
        """
        Raises:
            SchemaContractError: If a backing entity requires byte_array, or
                AUTOINCREMENT requires long
        """
        if self._backing_entity is not None and property_type != PropertyType.BYTE_ARRAY:
            raise SchemaContractError(
                f"{self} has a backing entity and must stay of type byte_array"
            )
        if self._config.pk_autoincrement and property_type != PropertyType.LONG:
            logger.error(f"Rejected type {property_type.value} for autoincrement key {self}")
            raise SchemaContractError(
                "AUTOINCREMENT is only available to primary key properties of type long"
            )
        self._config = self._config.model_copy(update={"property_type": property_type})

    def set_backing_entity(self, backing_entity: "Entity", property_name: Optional[str] = None) -> None:
        """
        Materialize this byte array through its own entity.

        The backing entity is switched to implement serialization.

        Raises:
            SchemaContractError: If this property is not a byte array
        """
        if self.property_type != PropertyType.BYTE_ARRAY:
            logger.error(f"Rejected backing entity {backing_entity.class_name} for {self}")
            raise SchemaContractError("Can only serialize byte array properties")
        backing_entity.implements_serializable()
        self._backing_entity = backing_entity
        self._backing_property_name = property_name

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def init_2nd_pass(self, schema: "Schema") -> "ResolvedProperty":
        """
        Derive the column facts of this property.

        Pure function of the declared state: calling it again without
        changes yields an equal ResolvedProperty.
        """
        config = self._config
        constraints = build_constraints(config)
        storage_type = self.storage_type

        if config.column_type is not None:
            column_type = config.column_type
        else:
            column_type = schema.map_to_db_type(storage_type)

        if config.column_name is not None:
            column_name = config.column_name
        else:
            column_name = db_name(config.property_name)

        # NOT NULL columns can use primitive types
        if config.not_null:
            java_type = schema.map_to_java_type_not_null(storage_type)
        else:
            java_type = schema.map_to_java_type_nullable(storage_type)

        logger.debug(
            f"Resolved {self}: column={column_name} {column_type} "
            f"constraints={constraints!r} java_type={java_type}"
        )

        return ResolvedProperty(
            declaration=self,
            config=config,
            ordinal=self._ordinal,
            serialized=config.serialized,
            enumerated=config.enumerated,
            backing_entity=self._backing_entity,
            column_name=column_name,
            column_type=column_type,
            java_type=java_type,
            constraints=constraints,
        )

    def __str__(self) -> str:
        entity = self._entity_ref()
        owner = entity.class_name if entity is not None else "<discarded entity>"
        return f"Property {self.property_name} of {owner}"

    __repr__ = __str__


# ============================================================================
# RESOLVED PROPERTY
# ============================================================================

@dataclass(frozen=True)
class ResolvedProperty:
    """
    Column facts of a property after pass 2.

    A snapshot: later calls to the declaration's setters do not change it.
    """
    declaration: Property
    config: PropertyConfig
    ordinal: int
    serialized: Optional[SerializedProperty]
    enumerated: Optional[EnumProperty]
    backing_entity: Optional["Entity"]

    column_name: str
    column_type: str
    java_type: str
    constraints: Optional[str]

    state: ResolutionState = ResolutionState.COLUMN_RESOLVED

    @property
    def entity(self) -> "Entity":
        return self.declaration.entity

    @property
    def property_name(self) -> str:
        return self.config.property_name

    @property
    def property_type(self) -> PropertyType:
        return self.config.property_type

    @property
    def is_primary_key(self) -> bool:
        return self.config.primary_key

    @property
    def is_autoincrement(self) -> bool:
        return self.config.pk_autoincrement

    @property
    def is_unique(self) -> bool:
        return self.config.unique

    @property
    def is_not_null(self) -> bool:
        return self.config.not_null

    @property
    def is_constant(self) -> bool:
        return self.config.constant

    @property
    def field_annotations(self) -> List[Annotation]:
        return list(self.config.field_annotations)

    @property
    def setter_annotations(self) -> List[Annotation]:
        return list(self.config.setter_annotations)

    @property
    def getter_annotations(self) -> List[Annotation]:
        return list(self.config.getter_annotations)

    def init_3rd_pass(self, schema: "Schema") -> "ResolvedProperty":
        """
        Finalize the property.

        Nothing is derived here yet. The pass exists so cross-entity logic
        can rely on every property of the schema having completed pass 2.
        """
        if not self.state.can_transition_to(ResolutionState.FINALIZED):
            raise SchemaContractError(f"{self.declaration} is already finalized")
        return replace(self, state=ResolutionState.FINALIZED)

    def __str__(self) -> str:
        return str(self.declaration)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PropertyConfig",
    "PropertyBuilder",
    "Property",
    "ResolvedProperty",
    "build_constraints",
]
