"""Classify a reference as an ADT object or a workspace file."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from sourceref.config.constants import ABAP_FILE_SUFFIX, ADT_URI_PREFIX
from sourceref.core.languages import ABAP, detect_display_language
from sourceref.refs.normalize import base_name, normalize_ref, to_forward_slashes


class RefKind(StrEnum):
    STRUCTURED_OBJECT = "structured-object"
    WORKSPACE_PATH = "workspace-path"


@dataclass(frozen=True, slots=True)
class ReferenceRoute:
    """Where a reference should be opened from.

    ``display_language`` is only meaningful for workspace paths; ADT objects
    always carry ``abap``.
    """

    kind: RefKind
    normalized_ref: str
    display_language: str


def is_adt_uri(ref: str) -> bool:
    return ref.startswith(ADT_URI_PREFIX)


def is_structured_ref(ref: str) -> bool:
    return is_adt_uri(ref) or ref.lower().endswith(ABAP_FILE_SUFFIX)


def route_ref(ref: str) -> ReferenceRoute:
    normalized = normalize_ref(ref)
    if is_structured_ref(normalized):
        return ReferenceRoute(
            kind=RefKind.STRUCTURED_OBJECT,
            normalized_ref=normalized,
            display_language=ABAP,
        )

    # Diff prefixes are kept: a workspace may really contain a/ or b/
    workspace_path = to_forward_slashes(normalized)
    return ReferenceRoute(
        kind=RefKind.WORKSPACE_PATH,
        normalized_ref=workspace_path,
        display_language=detect_display_language(base_name(workspace_path)),
    )
