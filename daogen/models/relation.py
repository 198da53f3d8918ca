# ============================================================================
# RELATION MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core model - To-one / to-many relations between entities
# PURPOSE: Wire foreign-key properties to the entities they reference
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: ToOne, ToMany
# DEPENDENCIES: none
# ============================================================================
"""
Relation Models

Relations are declared on the source entity with already built
properties, then resolved in two steps:

- pass 2 (per entity): default relation names
- pass 3 (after every entity finished pass 2): look up resolved columns
  on both sides, which is only safe once the whole schema has columns

Example:
    customer_id = order.add_long_property("customerId").not_null().get_property()
    order.add_to_one(customer, customer_id)            # order.customer
    customer.add_to_many(order, customer_id)           # customer.orderList
"""

from typing import TYPE_CHECKING, List, Optional

from daogen.config import NamingDefaults
from daogen.contracts import SchemaContractError
from daogen.logging import ComponentType, get_logger
from daogen.schema.naming import lower_first

if TYPE_CHECKING:
    from daogen.models.entity import Entity
    from daogen.models.property import Property, ResolvedProperty

logger = get_logger(__name__, ComponentType.RESOLVER)


class ToOne:
    """
    Reference from the source entity to one target row.

    fk_properties live on the source entity and point at the target's
    primary key.
    """

    def __init__(
        self,
        source: "Entity",
        target: "Entity",
        fk_properties: List["Property"],
        name: Optional[str] = None,
    ):
        self.source = source
        self.target = target
        self.fk_properties = list(fk_properties)
        self.name = name

        # Set in pass 3
        self.fk_columns: List["ResolvedProperty"] = []
        self.target_key: Optional["ResolvedProperty"] = None

    def init_2nd_pass(self, naming: NamingDefaults) -> None:
        if self.name is None:
            self.name = lower_first(self.target.class_name)

    def init_3rd_pass(self) -> None:
        target_key = self.target.pk_property
        if target_key is None:
            raise SchemaContractError(
                f"To-one {self.source.class_name}.{self.name}: "
                f"target {self.target.class_name} has no single primary key"
            )
        if len(self.fk_properties) != 1:
            raise SchemaContractError(
                f"To-one {self.source.class_name}.{self.name}: "
                f"expected 1 foreign key property, got {len(self.fk_properties)}"
            )
        self.fk_columns = [self.source.get_resolved(p.property_name) for p in self.fk_properties]
        self.target_key = target_key
        logger.debug(
            f"To-one {self.source.class_name}.{self.name} -> "
            f"{self.target.table_name}.{target_key.column_name}"
        )

    def __str__(self) -> str:
        return f"ToOne {self.name} of {self.source.class_name} -> {self.target.class_name}"


class ToMany:
    """
    Collection of target rows referencing the source entity.

    target_properties live on the target entity. source_properties default
    to the source entity's primary key in pass 3.
    """

    def __init__(
        self,
        source: "Entity",
        target: "Entity",
        target_properties: List["Property"],
        source_properties: Optional[List["Property"]] = None,
        name: Optional[str] = None,
    ):
        self.source = source
        self.target = target
        self.target_properties = list(target_properties)
        self.source_properties = list(source_properties) if source_properties else None
        self.name = name

        # Set in pass 3
        self.source_columns: List["ResolvedProperty"] = []
        self.target_columns: List["ResolvedProperty"] = []

    def init_2nd_pass(self, naming: NamingDefaults) -> None:
        if self.name is None:
            self.name = lower_first(self.target.class_name) + naming.to_many_suffix

    def init_3rd_pass(self) -> None:
        if self.source_properties is None:
            pk = self.source.pk_property
            if pk is None:
                raise SchemaContractError(
                    f"To-many {self.source.class_name}.{self.name}: source entity has no "
                    f"single primary key and no explicit source properties"
                )
            source_columns = [pk]
        else:
            source_columns = [self.source.get_resolved(p.property_name) for p in self.source_properties]

        if len(source_columns) != len(self.target_properties):
            raise SchemaContractError(
                f"To-many {self.source.class_name}.{self.name}: {len(source_columns)} source "
                f"properties vs {len(self.target_properties)} target properties"
            )

        self.source_columns = source_columns
        self.target_columns = [self.target.get_resolved(p.property_name) for p in self.target_properties]
        logger.debug(
            f"To-many {self.source.class_name}.{self.name} <- "
            f"{self.target.table_name}({', '.join(c.column_name for c in self.target_columns)})"
        )

    def __str__(self) -> str:
        return f"ToMany {self.name} of {self.source.class_name} -> {self.target.class_name}"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["ToOne", "ToMany"]
