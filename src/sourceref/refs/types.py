"""Expected object types from abapGit file suffixes, and filtering by them.

abapGit serializes objects as ``<name>.<type>[.<include>].abap``, e.g.
``zcl_demo.clas.abap`` or ``zcl_demo.clas.testclasses.abap``. The type
segment is the one right after the object name.
"""

from __future__ import annotations

from collections.abc import Iterable

from sourceref.backend.models import ObjectSummary
from sourceref.config.constants import ABAP_FILE_SUFFIX

ABAP_SUFFIX_TO_OBJECT_TYPES: dict[str, tuple[str, ...]] = {
    "clas": ("CLAS",),
    "intf": ("INTF",),
    "prog": ("PROG",),
    "fugr": ("FUGR",),
    "tabl": ("TABL",),
    "ttyp": ("TTYP",),
    "dtel": ("DTEL",),
    "doma": ("DOMA",),
    "view": ("VIEW",),
    "msag": ("MSAG",),
    "tran": ("TRAN",),
}


def infer_expected_types(base_name: str) -> frozenset[str] | None:
    """Object type codes implied by a file name, or None for no constraint."""
    lowered = base_name.lower()
    if not lowered.endswith(ABAP_FILE_SUFFIX):
        return None

    parts = [part for part in lowered.split(".") if part]
    if len(parts) < 2:
        return None

    mapped = ABAP_SUFFIX_TO_OBJECT_TYPES.get(parts[1])
    if not mapped:
        return None
    return frozenset(code.upper() for code in mapped)


def matches_expected_type(entry: ObjectSummary, expected: Iterable[str]) -> bool:
    object_type = (entry.object_type or "").strip().upper()
    if not object_type:
        return False
    # Prefix match covers sub-types such as CLAS/OC or PROG/P
    return any(object_type.startswith(code) for code in expected)


def filter_by_expected_types(
    results: list[ObjectSummary],
    expected: frozenset[str] | None,
) -> list[ObjectSummary]:
    if not expected:
        return results
    return [entry for entry in results if matches_expected_type(entry, expected)]
