"""Search-term derivation.

One reference fans out into several lookups, most specific first:

    "b/src/zcl_demo.clas.abap"
      -> b/src/zcl_demo.clas.abap, B/SRC/ZCL_DEMO.CLAS.ABAP,
         src/zcl_demo.clas.abap, SRC/ZCL_DEMO.CLAS.ABAP,
         zcl_demo.clas.abap, ZCL_DEMO.CLAS.ABAP, ...  (capped)
"""

from __future__ import annotations

import re

from sourceref.config.constants import ABAP_FILE_SUFFIX
from sourceref.refs.normalize import base_name, strip_diff_prefix

DEFAULT_MAX_TERMS = 6

_FINAL_EXTENSION_RE = re.compile(r"\.[^.]+$")


def _add_term(terms: dict[str, None], value: str) -> None:
    normalized = value.strip()
    if not normalized:
        return
    terms.setdefault(normalized, None)
    upper = normalized.upper()
    if upper != normalized:
        terms.setdefault(upper, None)


def derive_search_terms(ref: str, limit: int = DEFAULT_MAX_TERMS) -> list[str]:
    """Ordered, deduplicated search terms for a normalized reference.

    Args:
        ref: Normalized reference (see normalize_ref)
        limit: Maximum number of terms returned

    Returns:
        Terms in the order they should be tried. Each candidate is followed
        by its upper-cased form when that differs.
    """
    # dict preserves insertion order and dedups on exact string equality
    terms: dict[str, None] = {}
    cleaned = strip_diff_prefix(ref)
    name = base_name(cleaned)

    _add_term(terms, ref)
    _add_term(terms, cleaned)
    _add_term(terms, name)
    _add_term(terms, _FINAL_EXTENSION_RE.sub("", name))

    if name.lower().endswith(ABAP_FILE_SUFFIX):
        parts = [part for part in name.split(".") if part]
        if parts:
            _add_term(terms, parts[0])
        if len(parts) > 1:
            _add_term(terms, f"{parts[0]}.{parts[1]}")

    return list(terms)[:limit]
