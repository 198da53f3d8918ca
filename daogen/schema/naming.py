# ============================================================================
# NAMING UTILITIES
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core - Identifier transforms
# PURPOSE: Derive database identifiers from generated-language identifiers
# LAST_REVIEWED: 19 OCT 2026
# EXPORTS: db_name, lower_first, class_name_from_fully_qualified, package_from_fully_qualified
# DEPENDENCIES: none
# ============================================================================
"""
Naming Utilities

One rule for every derived identifier (columns, tables, index names),
so generated code and generated DDL agree across runs.

    db_name("customerId")  -> "CUSTOMER_ID"
    db_name("OrderItem")   -> "ORDER_ITEM"
    db_name("URL")         -> "URL"
"""


def db_name(java_name: str) -> str:
    """
    Convert a camelCase / PascalCase identifier to UPPER_SNAKE_CASE.

    An underscore is inserted before every upper-case character whose
    predecessor is not upper-case; runs of capitals stay together.
    """
    parts = []
    last_was_upper = False
    for i, char in enumerate(java_name):
        is_upper = char.isupper()
        if i > 0 and is_upper and not last_was_upper:
            parts.append("_")
        parts.append(char)
        last_was_upper = is_upper
    return "".join(parts).upper()


def lower_first(name: str) -> str:
    """Lower-case the first character ("OrderItem" -> "orderItem")."""
    return name[:1].lower() + name[1:]


def class_name_from_fully_qualified(qualified_name: str) -> str:
    """Return the simple class name of a dotted name."""
    return qualified_name.rsplit(".", 1)[-1]


def package_from_fully_qualified(qualified_name: str) -> str:
    """Return the package part of a dotted name ("" if unqualified)."""
    if "." not in qualified_name:
        return ""
    return qualified_name.rsplit(".", 1)[0]


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "db_name",
    "lower_first",
    "class_name_from_fully_qualified",
    "package_from_fully_qualified",
]
