"""Configuration constants.

This module contains truly constant values that should NOT be user-configurable.
These are protocol constraints of the ADT object model and hard caps.

For configurable values, see models.py (SearchConfig, BackendConfig, etc.).
"""

# =============================================================================
# ADT Object Addressing
# =============================================================================

ADT_URI_PREFIX = "/sap/bc/adt/"
"""Prefix of canonical ADT object locators. Refs with it resolve by identity."""

ABAP_FILE_SUFFIX = ".abap"
"""Suffix of abapGit-style serialized source files."""

ABAP_FILE_EXTENSION = "abap"
"""ABAP_FILE_SUFFIX without the dot, as returned by extension_of()."""

GIT_DIFF_PREFIXES = ("a/", "b/")
"""Path prefixes added by `git diff` to the old/new side of a hunk."""

# =============================================================================
# Search Hard Maximums
# =============================================================================
# Users can configure defaults below these, but cannot exceed them.

SEARCH_MAX_LIMIT = 500
"""Maximum results requested from the object search in one call."""

SEARCH_TERMS_MAX = 20
"""Maximum derived search terms tried for one reference."""

# =============================================================================
# Protocol/Validation Constants
# =============================================================================

HTTP_TIMEOUT_MAX_SEC = 600.0
"""Upper bound for backend request timeouts."""
