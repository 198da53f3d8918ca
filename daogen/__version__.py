# ============================================================================
# VERSION - DAOGEN
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# ============================================================================
"""
Version information for daogen.

This is the single source of truth for the package version.
Updated manually for each release.
"""
__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-19"
EPOCH = 1
CODENAME = "Schema Resolver"
