# ============================================================================
# INDEX DESCRIPTOR
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core model - Entity index declaration
# PURPOSE: Ordered, direction-tagged set of properties to index
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: Index, IndexColumn
# DEPENDENCIES: pydantic
# ============================================================================
"""
Index Descriptor

An Index is owned by the entity it is registered on. Columns refer to
properties by name so an index can be declared while the property is
still being built; the owning entity validates the names in pass 2.

Default names (assigned in the entity's pass 2 when no name was given):
    IDX_<TABLE>_<COLUMN>[_DESC]...
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from daogen.config import NamingDefaults
from daogen.contracts import IndexOrder


class IndexColumn(BaseModel):
    """One indexed property. order=None means the storage default direction."""
    model_config = ConfigDict(frozen=True)

    property_name: str
    order: Optional[IndexOrder] = None


class Index(BaseModel):
    """
    Index declaration.

    Maps to: CREATE [UNIQUE] INDEX <name> ON <table> (<columns>)
    """
    columns: List[IndexColumn] = Field(default_factory=list)
    name: Optional[str] = None
    unique: bool = False

    # Set by the owning entity in pass 2
    default_name: Optional[str] = None

    def add_property(self, property_name: str, order: Optional[IndexOrder] = None) -> "Index":
        self.columns.append(IndexColumn(property_name=property_name, order=order))
        return self

    def add_property_asc(self, property_name: str) -> "Index":
        return self.add_property(property_name, IndexOrder.ASC)

    def add_property_desc(self, property_name: str) -> "Index":
        return self.add_property(property_name, IndexOrder.DESC)

    def make_unique(self) -> "Index":
        self.unique = True
        return self

    @property
    def property_names(self) -> List[str]:
        return [column.property_name for column in self.columns]

    @property
    def effective_name(self) -> Optional[str]:
        """Explicit name if given, otherwise the pass-2 default."""
        return self.name or self.default_name

    def build_default_name(
        self,
        table_name: str,
        column_names: List[str],
        naming: NamingDefaults,
    ) -> str:
        """
        Derive the conventional index name.

        Args:
            table_name: Resolved table name of the owning entity
            column_names: Resolved column names, parallel to self.columns
            naming: Naming conventions (prefix, DESC suffix)
        """
        parts = [naming.index_prefix, table_name]
        for column, column_name in zip(self.columns, column_names):
            parts.append(column_name)
            if column.order == IndexOrder.DESC:
                parts.append(naming.desc_suffix)
        return "_".join(parts)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["Index", "IndexColumn"]
