"""Reference cleanup shared by routing, term derivation and the resolver.

All functions are pure and total.
"""

from __future__ import annotations

from sourceref.config.constants import GIT_DIFF_PREFIXES


def normalize_ref(ref: str) -> str:
    """Trim whitespace, then wrapping double quotes, then wrapping single quotes.

    Handles copy-pasted quoted paths such as ``"src/zcl_demo.clas.abap"``.
    The empty string is a valid result.
    """
    return ref.strip().strip('"').strip("'")


def to_forward_slashes(ref: str) -> str:
    return ref.replace("\\", "/")


def strip_diff_prefix(ref: str) -> str:
    """Drop a leading ``a/`` or ``b/`` added by git diff, after separator cleanup."""
    normalized = to_forward_slashes(ref)
    if normalized.startswith(GIT_DIFF_PREFIXES):
        return normalized[2:]
    return normalized


def base_name(ref: str) -> str:
    """Last non-empty path segment, or the input itself when there is none."""
    parts = [part for part in to_forward_slashes(ref).split("/") if part]
    return parts[-1] if parts else ref
