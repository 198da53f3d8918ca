# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for naming, schema identity and logging
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides the conventions the resolver falls back to when a declaration
leaves something unspecified (index names, id columns, DAO class names).

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class NamingDefaults:
    """
    Naming conventions for derived identifiers.

    Column and table names themselves come from db_name(); these only
    cover the prefixes and suffixes wrapped around them.
    """
    index_prefix: str = "IDX"
    desc_suffix: str = "DESC"

    # add_id_property()
    id_property_name: str = "id"
    id_column_name: str = "_id"

    # Generated class/member names
    dao_suffix: str = "Dao"
    to_many_suffix: str = "List"

    @classmethod
    def from_env(cls) -> "NamingDefaults":
        """Create from environment variables."""
        return cls(
            index_prefix=os.getenv("DAOGEN_INDEX_PREFIX", "IDX"),
            id_property_name=os.getenv("DAOGEN_ID_PROPERTY", "id"),
            id_column_name=os.getenv("DAOGEN_ID_COLUMN", "_id"),
        )


@dataclass(frozen=True)
class SchemaDefaults:
    """Defaults for a Schema created without explicit identity."""
    version: int = 1
    java_package: str = "com.example.dao"

    @classmethod
    def from_env(cls) -> "SchemaDefaults":
        """Create from environment variables."""
        return cls(
            version=int(os.getenv("DAOGEN_SCHEMA_VERSION", 1)),
            java_package=os.getenv("DAOGEN_JAVA_PACKAGE", "com.example.dao"),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """Defaults for configure_logging()."""
    level: str = "INFO"
    json_output: bool = False

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_output=os.getenv("LOG_FORMAT", "").lower() == "json",
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    naming: NamingDefaults = field(default_factory=NamingDefaults)
    schema: SchemaDefaults = field(default_factory=SchemaDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            naming=NamingDefaults.from_env(),
            schema=SchemaDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "NamingDefaults",
    "SchemaDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
