# ============================================================================
# RESOLVED SCHEMA SNAPSHOT
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core - Read-only export of a resolved schema
# PURPOSE: Hand resolved facts to emission engines as plain, dumpable data
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: SchemaSnapshot, EntitySnapshot, PropertySnapshot, IndexSnapshot, RelationSnapshot
# DEPENDENCIES: pydantic
# ============================================================================
"""
Resolved Schema Snapshot

Emission engines (templates for entities, DAOs, DDL) consume this instead
of the live object graph, so nothing they do can mutate the schema.

Usage:
    schema.resolve()
    snapshot = SchemaSnapshot.from_schema(schema)
    payload = snapshot.model_dump_json(indent=2)
"""

from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from daogen.contracts import IndexOrder, PropertyType, ResolutionState, SchemaContractError
from daogen.logging import ComponentType, get_logger
from daogen.models.annotation import Annotation
from daogen.models.descriptors import EnumProperty, SerializedProperty

if TYPE_CHECKING:
    from daogen.models.entity import Entity
    from daogen.models.index import Index
    from daogen.models.property import ResolvedProperty
    from daogen.models.schema import Schema

logger = get_logger(__name__, ComponentType.SNAPSHOT)

_FROZEN = ConfigDict(frozen=True)


class PropertySnapshot(BaseModel):
    model_config = _FROZEN

    property_name: str
    property_type: PropertyType
    ordinal: int
    column_name: str
    column_type: str
    java_type: str
    constraints: Optional[str] = None

    primary_key: bool = False
    autoincrement: bool = False
    unique: bool = False
    not_null: bool = False
    constant: bool = False

    enumerated: Optional[EnumProperty] = None
    serialized: Optional[SerializedProperty] = None
    backing_entity: Optional[str] = Field(default=None, description="Class name of the backing entity")

    field_annotations: List[Annotation] = Field(default_factory=list)
    setter_annotations: List[Annotation] = Field(default_factory=list)
    getter_annotations: List[Annotation] = Field(default_factory=list)

    @classmethod
    def from_resolved(cls, prop: "ResolvedProperty") -> "PropertySnapshot":
        return cls(
            property_name=prop.property_name,
            property_type=prop.property_type,
            ordinal=prop.ordinal,
            column_name=prop.column_name,
            column_type=prop.column_type,
            java_type=prop.java_type,
            constraints=prop.constraints,
            primary_key=prop.is_primary_key,
            autoincrement=prop.is_autoincrement,
            unique=prop.is_unique,
            not_null=prop.is_not_null,
            constant=prop.is_constant,
            enumerated=prop.enumerated,
            serialized=prop.serialized,
            backing_entity=prop.backing_entity.class_name if prop.backing_entity else None,
            field_annotations=prop.field_annotations,
            setter_annotations=prop.setter_annotations,
            getter_annotations=prop.getter_annotations,
        )


class IndexColumnSnapshot(BaseModel):
    model_config = _FROZEN

    column_name: str
    order: Optional[IndexOrder] = None


class IndexSnapshot(BaseModel):
    model_config = _FROZEN

    name: str
    unique: bool
    columns: List[IndexColumnSnapshot]

    @classmethod
    def from_index(cls, index: "Index", entity: "Entity") -> "IndexSnapshot":
        return cls(
            name=index.effective_name,
            unique=index.unique,
            columns=[
                IndexColumnSnapshot(
                    column_name=entity.get_resolved(column.property_name).column_name,
                    order=column.order,
                )
                for column in index.columns
            ],
        )


class RelationSnapshot(BaseModel):
    """To-one: columns are on the source. To-many: columns are on the target."""
    model_config = _FROZEN

    name: str
    kind: str = Field(..., pattern="^(to_one|to_many)$")
    target_entity: str
    source_columns: List[str]
    target_columns: List[str]


class EntitySnapshot(BaseModel):
    model_config = _FROZEN

    class_name: str
    table_name: str
    class_name_dao: str
    java_package: str
    java_package_dao: str
    interfaces: List[str] = Field(default_factory=list)
    pk_property: Optional[str] = None
    properties: List[PropertySnapshot]
    indexes: List[IndexSnapshot] = Field(default_factory=list)
    relations: List[RelationSnapshot] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, entity: "Entity") -> "EntitySnapshot":
        relations = [
            RelationSnapshot(
                name=r.name,
                kind="to_one",
                target_entity=r.target.class_name,
                source_columns=[c.column_name for c in r.fk_columns],
                target_columns=[r.target_key.column_name],
            )
            for r in entity.to_one_relations
        ]
        relations.extend(
            RelationSnapshot(
                name=r.name,
                kind="to_many",
                target_entity=r.target.class_name,
                source_columns=[c.column_name for c in r.source_columns],
                target_columns=[c.column_name for c in r.target_columns],
            )
            for r in entity.to_many_relations
        )
        return cls(
            class_name=entity.class_name,
            table_name=entity.table_name,
            class_name_dao=entity.class_name_dao,
            java_package=entity.java_package,
            java_package_dao=entity.java_package_dao,
            interfaces=list(entity.interfaces_to_implement),
            pk_property=entity.pk_property.property_name if entity.pk_property else None,
            properties=[PropertySnapshot.from_resolved(p) for p in entity.resolved_properties],
            indexes=[IndexSnapshot.from_index(i, entity) for i in entity.indexes],
            relations=relations,
        )


class SchemaSnapshot(BaseModel):
    model_config = _FROZEN

    version: int
    default_java_package: str
    entities: List[EntitySnapshot]

    @classmethod
    def from_schema(cls, schema: "Schema") -> "SchemaSnapshot":
        """
        Export a fully resolved schema.

        Raises:
            SchemaContractError: If schema.resolve() has not completed
        """
        if schema.state != ResolutionState.FINALIZED:
            raise SchemaContractError(
                f"Snapshot requires a finalized schema (state={schema.state.value})"
            )
        snapshot = cls(
            version=schema.version,
            default_java_package=schema.default_java_package,
            entities=[EntitySnapshot.from_entity(e) for e in schema.entities],
        )
        logger.debug(f"Exported snapshot of {schema} ({len(snapshot.entities)} entities)")
        return snapshot

    def get_entity(self, class_name: str) -> Optional[EntitySnapshot]:
        for entity in self.entities:
            if entity.class_name == class_name:
                return entity
        return None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SchemaSnapshot",
    "EntitySnapshot",
    "PropertySnapshot",
    "IndexSnapshot",
    "IndexColumnSnapshot",
    "RelationSnapshot",
]
