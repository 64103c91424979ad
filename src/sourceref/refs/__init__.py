"""Pure reference handling: cleanup, routing, term derivation, type filtering."""

from sourceref.refs.normalize import base_name, normalize_ref, strip_diff_prefix
from sourceref.refs.routing import RefKind, ReferenceRoute, is_adt_uri, route_ref
from sourceref.refs.terms import derive_search_terms
from sourceref.refs.types import filter_by_expected_types, infer_expected_types

__all__ = [
    "RefKind",
    "ReferenceRoute",
    "base_name",
    "derive_search_terms",
    "filter_by_expected_types",
    "infer_expected_types",
    "is_adt_uri",
    "normalize_ref",
    "route_ref",
    "strip_diff_prefix",
]
