# ============================================================================
# ENTITY MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core model - Table / generated class declaration
# PURPOSE: Own properties, indexes and relations; run per-entity passes
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Entity
# DEPENDENCIES: none
# ============================================================================
"""
Entity Model

An Entity maps to one table and one generated class. It owns its
properties (through their builders), indexes and relations.

Lifecycle:
    1. Created with state=DECLARED by Schema.add_entity()
    2. Properties, indexes and relations are declared
    3. init_2nd_pass(): properties built and resolved, indexes named
    4. init_3rd_pass(): properties finalized, relations resolved against
       the other entities (all of which have completed pass 2)
"""

import weakref
from typing import TYPE_CHECKING, Dict, List, Optional

from daogen.contracts import PropertyType, ResolutionState, SchemaContractError
from daogen.logging import ComponentType, get_logger, log_context
from daogen.models.descriptors import EnumProperty, SerializedProperty
from daogen.models.index import Index
from daogen.models.property import Property, PropertyBuilder, ResolvedProperty
from daogen.models.relation import ToMany, ToOne
from daogen.schema.naming import db_name

if TYPE_CHECKING:
    from daogen.models.schema import Schema

logger = get_logger(__name__, ComponentType.ENTITY)

SERIALIZABLE_INTERFACE = "java.io.Serializable"


class Entity:
    """
    Declaration of one table / generated class.

    Maps to: CREATE TABLE <table_name> (<resolved property columns>)
    """

    def __init__(self, schema: "Schema", class_name: str):
        if not class_name:
            raise ValueError("Entity class name is required")
        self._schema_ref = weakref.ref(schema)
        self.class_name = class_name

        # Derived in pass 2 when left None
        self.table_name: Optional[str] = None
        self.class_name_dao: Optional[str] = None
        self.java_package: Optional[str] = None
        self.java_package_dao: Optional[str] = None

        self.interfaces_to_implement: List[str] = []
        self.indexes: List[Index] = []
        self.to_one_relations: List[ToOne] = []
        self.to_many_relations: List[ToMany] = []

        self._builders: List[PropertyBuilder] = []
        self.properties: List[Property] = []
        self._resolved: Dict[str, ResolvedProperty] = {}
        self.pk_property: Optional[ResolvedProperty] = None

        self.state = ResolutionState.DECLARED

    @property
    def schema(self) -> "Schema":
        schema = self._schema_ref()
        if schema is None:
            raise ReferenceError(f"Schema of entity {self.class_name} was discarded")
        return schema

    # =========================================================================
    # PROPERTY DECLARATION
    # =========================================================================

    def add_property(self, property_type: PropertyType, property_name: str) -> PropertyBuilder:
        """
        Start declaring a property.

        Raises:
            SchemaContractError: After pass 2, or on a duplicate property name
        """
        if self.state != ResolutionState.DECLARED:
            raise SchemaContractError(f"Cannot add properties to {self} after resolution")
        if any(b.config.property_name == property_name for b in self._builders):
            raise SchemaContractError(f"Property '{property_name}' already exists in {self}")
        builder = PropertyBuilder(self.schema, self, property_type, property_name)
        self._builders.append(builder)
        return builder

    def add_boolean_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.BOOLEAN, property_name)

    def add_byte_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.BYTE, property_name)

    def add_short_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.SHORT, property_name)

    def add_int_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.INT, property_name)

    def add_long_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.LONG, property_name)

    def add_float_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.FLOAT, property_name)

    def add_double_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.DOUBLE, property_name)

    def add_string_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.STRING, property_name)

    def add_byte_array_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.BYTE_ARRAY, property_name)

    def add_date_property(self, property_name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.DATE, property_name)

    def add_enum_property(
        self,
        property_name: str,
        enum_class: str,
        storage_type: PropertyType = PropertyType.INT,
    ) -> PropertyBuilder:
        enumerated = EnumProperty(enum_class=enum_class, storage_type=storage_type)
        return self.add_property(PropertyType.ENUM, property_name).enumerated(enumerated)

    def add_serialized_property(
        self,
        property_name: str,
        java_class: str,
        converter_class: Optional[str] = None,
    ) -> PropertyBuilder:
        serialized = SerializedProperty(java_class=java_class, converter_class=converter_class)
        return self.add_property(PropertyType.SERIALIZED, property_name).serialized(serialized)

    def add_id_property(self, autoincrement: bool = False) -> PropertyBuilder:
        """Conventional LONG primary key ("id" mapped to column "_id" by default)."""
        naming = self.schema.naming
        builder = (
            self.add_long_property(naming.id_property_name)
            .column_name(naming.id_column_name)
            .primary_key()
        )
        if autoincrement:
            builder.autoincrement()
        return builder

    # =========================================================================
    # INDEXES, RELATIONS, INTERFACES
    # =========================================================================

    def add_index(self, index: Index) -> Index:
        """Register an index. Indexes are not deduplicated."""
        self.indexes.append(index)
        return index

    def add_to_one(
        self,
        target: "Entity",
        fk_property: Property,
        name: Optional[str] = None,
    ) -> ToOne:
        if fk_property.entity is not self:
            raise SchemaContractError(f"{fk_property} is not a property of {self}")
        relation = ToOne(self, target, [fk_property], name=name)
        self.to_one_relations.append(relation)
        return relation

    def add_to_many(
        self,
        target: "Entity",
        target_property: Property,
        name: Optional[str] = None,
        source_property: Optional[Property] = None,
    ) -> ToMany:
        if target_property.entity is not target:
            raise SchemaContractError(f"{target_property} is not a property of {target}")
        if source_property is not None and source_property.entity is not self:
            raise SchemaContractError(f"{source_property} is not a property of {self}")
        relation = ToMany(
            self,
            target,
            [target_property],
            source_properties=[source_property] if source_property is not None else None,
            name=name,
        )
        self.to_many_relations.append(relation)
        return relation

    def implements_interface(self, *interfaces: str) -> None:
        for interface in interfaces:
            if interface not in self.interfaces_to_implement:
                self.interfaces_to_implement.append(interface)

    def implements_serializable(self) -> None:
        """Generated class must support identity/equality serialization."""
        self.implements_interface(SERIALIZABLE_INTERFACE)

    @property
    def is_serializable(self) -> bool:
        return SERIALIZABLE_INTERFACE in self.interfaces_to_implement

    # =========================================================================
    # RESOLVED VIEW
    # =========================================================================

    @property
    def resolved_properties(self) -> List[ResolvedProperty]:
        """Resolved properties in ordinal order (empty before pass 2)."""
        return list(self._resolved.values())

    @property
    def properties_pk(self) -> List[ResolvedProperty]:
        return [p for p in self._resolved.values() if p.is_primary_key]

    @property
    def properties_non_pk(self) -> List[ResolvedProperty]:
        return [p for p in self._resolved.values() if not p.is_primary_key]

    def get_resolved(self, property_name: str) -> ResolvedProperty:
        if self.state == ResolutionState.DECLARED:
            raise SchemaContractError(f"{self} has not been resolved yet")
        return self._lookup_resolved(property_name)

    def _lookup_resolved(self, property_name: str) -> ResolvedProperty:
        try:
            return self._resolved[property_name]
        except KeyError:
            raise SchemaContractError(f"{self} has no property '{property_name}'") from None

    # =========================================================================
    # RESOLUTION PASSES
    # =========================================================================

    def init_2nd_pass(self, schema: "Schema") -> None:
        """Build and resolve all properties; name indexes and relations."""
        if not self.state.can_transition_to(ResolutionState.COLUMN_RESOLVED):
            raise SchemaContractError(f"Cannot run pass 2 on {self} in state {self.state.value}")

        with log_context(entity=self.class_name, resolution_pass=2):
            naming = schema.naming

            self.properties = [builder.build() for builder in self._builders]
            for ordinal, prop in enumerate(self.properties):
                prop.set_ordinal(ordinal)

            if self.table_name is None:
                self.table_name = db_name(self.class_name)
            if self.class_name_dao is None:
                self.class_name_dao = self.class_name + naming.dao_suffix
            if self.java_package is None:
                self.java_package = schema.default_java_package
            if self.java_package_dao is None:
                self.java_package_dao = schema.default_java_package_dao

            self._resolved = {}
            for prop in self.properties:
                with log_context(property=prop.property_name):
                    self._resolved[prop.property_name] = prop.init_2nd_pass(schema)

            pks = self.properties_pk
            self.pk_property = pks[0] if len(pks) == 1 else None

            self._init_indexes_2nd_pass(schema)

            for relation in self.to_one_relations:
                relation.init_2nd_pass(naming)
            for relation in self.to_many_relations:
                relation.init_2nd_pass(naming)

            self.state = ResolutionState.COLUMN_RESOLVED
            logger.debug(
                f"Resolved {self} -> {self.table_name} "
                f"({len(self._resolved)} properties, {len(self.indexes)} indexes)"
            )

    def _init_indexes_2nd_pass(self, schema: "Schema") -> None:
        for index in self.indexes:
            if not index.columns:
                raise SchemaContractError(f"{self} declares an index without properties")
            column_names = [self._lookup_resolved(name).column_name for name in index.property_names]
            if index.name is None:
                index.default_name = index.build_default_name(
                    self.table_name, column_names, schema.naming
                )

    def init_3rd_pass(self, schema: "Schema") -> None:
        """
        Finalize properties and resolve relations.

        Must only run once every entity of the schema completed pass 2.
        """
        if not self.state.can_transition_to(ResolutionState.FINALIZED):
            raise SchemaContractError(f"Cannot run pass 3 on {self} in state {self.state.value}")

        with log_context(entity=self.class_name, resolution_pass=3):
            self._resolved = {
                name: resolved.init_3rd_pass(schema) for name, resolved in self._resolved.items()
            }
            if self.pk_property is not None:
                self.pk_property = self._resolved[self.pk_property.property_name]

            for relation in self.to_one_relations:
                relation.init_3rd_pass()
            for relation in self.to_many_relations:
                relation.init_3rd_pass()

            self.state = ResolutionState.FINALIZED

    def __str__(self) -> str:
        return f"Entity {self.class_name}"

    __repr__ = __str__


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["Entity"]
