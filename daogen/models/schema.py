# ============================================================================
# SCHEMA MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core - Entity registry, type mapping and pass driver
# PURPOSE: Own all entities and run the resolution passes in global order
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Schema
# DEPENDENCIES: pydantic (TypeMapping)
# ============================================================================
"""
Schema Model

The Schema is the resolution context shared by every entity and property
of one generator run.

Pass ordering:
    pass 2 for EVERY entity completes before pass 3 starts for ANY entity.
    Pass 3 logic (relations) reads other entities' resolved columns.

Usage:
    schema = Schema(version=3, default_java_package="com.example.shop")
    customer = schema.add_entity("Customer")
    customer.add_id_property(autoincrement=True)
    customer.add_string_property("name").not_null()
    schema.resolve()
"""

from typing import List, Optional

from daogen.config import NamingDefaults, get_defaults
from daogen.contracts import PropertyType, ResolutionState, SchemaContractError
from daogen.logging import ComponentType, get_logger, log_checkpoint, log_context
from daogen.models.entity import Entity
from daogen.schema.type_mapping import TypeMapping

logger = get_logger(__name__, ComponentType.SCHEMA)


class Schema:
    """
    Entities plus the logical -> physical / generated type mappings.

    Map lookups raise TypeMappingError for a type missing from the
    configured TypeMapping.
    """

    def __init__(
        self,
        version: Optional[int] = None,
        default_java_package: Optional[str] = None,
        type_mapping: Optional[TypeMapping] = None,
        naming: Optional[NamingDefaults] = None,
    ):
        defaults = get_defaults()
        self.version = version if version is not None else defaults.schema.version
        self.default_java_package = default_java_package or defaults.schema.java_package
        self.default_java_package_dao: str = self.default_java_package
        self.type_mapping = type_mapping or TypeMapping.default()
        self.naming = naming or defaults.naming

        self.entities: List[Entity] = []
        self.state = ResolutionState.DECLARED

    # =========================================================================
    # ENTITIES
    # =========================================================================

    def add_entity(self, class_name: str) -> Entity:
        if self.state != ResolutionState.DECLARED:
            raise SchemaContractError("Cannot add entities after resolution")
        if self.get_entity(class_name) is not None:
            raise SchemaContractError(f"Entity {class_name} already exists")
        entity = Entity(self, class_name)
        self.entities.append(entity)
        return entity

    def get_entity(self, class_name: str) -> Optional[Entity]:
        for entity in self.entities:
            if entity.class_name == class_name:
                return entity
        return None

    # =========================================================================
    # TYPE MAPPING
    # =========================================================================

    def map_to_db_type(self, property_type: PropertyType) -> str:
        return self.type_mapping.db_type(property_type)

    def map_to_java_type_not_null(self, property_type: PropertyType) -> str:
        return self.type_mapping.java_type(property_type, not_null=True)

    def map_to_java_type_nullable(self, property_type: PropertyType) -> str:
        return self.type_mapping.java_type(property_type, not_null=False)

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    def init_2nd_pass(self) -> None:
        if not self.state.can_transition_to(ResolutionState.COLUMN_RESOLVED):
            raise SchemaContractError(f"Cannot run pass 2 in state {self.state.value}")
        for entity in self.entities:
            entity.init_2nd_pass(self)
        self.state = ResolutionState.COLUMN_RESOLVED
        log_checkpoint("pass2_complete", {"entities": len(self.entities)})

    def init_3rd_pass(self) -> None:
        # Barrier: no entity may start pass 3 before all finished pass 2
        if not self.state.can_transition_to(ResolutionState.FINALIZED):
            raise SchemaContractError(f"Cannot run pass 3 in state {self.state.value}")
        for entity in self.entities:
            entity.init_3rd_pass(self)
        self.state = ResolutionState.FINALIZED
        log_checkpoint("pass3_complete", {"entities": len(self.entities)})

    def resolve(self) -> "Schema":
        """
        Run pass 2 and pass 3 over the whole schema.

        Intended to run exactly once per generator run.

        Raises:
            SchemaContractError: On invalid declarations or a repeated run
            TypeMappingError: If the type mapping has a gap
        """
        with log_context(schema=self.default_java_package):
            logger.info(
                f"Resolving schema {self.default_java_package} v{self.version} "
                f"({len(self.entities)} entities)"
            )
            self.init_2nd_pass()
            self.init_3rd_pass()
            property_count = sum(len(e.properties) for e in self.entities)
            index_count = sum(len(e.indexes) for e in self.entities)
            logger.info(
                f"Resolved {len(self.entities)} entities, {property_count} properties, "
                f"{index_count} indexes"
            )
        return self

    def __str__(self) -> str:
        return f"Schema {self.default_java_package} v{self.version}"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["Schema"]
