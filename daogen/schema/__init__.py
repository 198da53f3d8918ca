# ============================================================================
# SCHEMA UTILITIES MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core - Naming rules and type mapping tables
# PURPOSE: Pure helpers the models resolve against
# LAST_REVIEWED: 19 OCT 2026
# ============================================================================
"""
Schema utilities.

SchemaSnapshot lives in daogen.schema.snapshot and is imported from there
(it depends on the models, which depend on this package).
"""

from daogen.schema.naming import (
    db_name,
    lower_first,
    class_name_from_fully_qualified,
    package_from_fully_qualified,
)
from daogen.schema.type_mapping import (
    DB_TYPE_MAP,
    JAVA_TYPE_NOT_NULL_MAP,
    JAVA_TYPE_NULLABLE_MAP,
    TypeMapping,
)

__all__ = [
    # Naming
    "db_name",
    "lower_first",
    "class_name_from_fully_qualified",
    "package_from_fully_qualified",
    # Type mapping
    "DB_TYPE_MAP",
    "JAVA_TYPE_NOT_NULL_MAP",
    "JAVA_TYPE_NULLABLE_MAP",
    "TypeMapping",
]
