"""Resolver result types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ResolvedBy(StrEnum):
    URI = "uri"
    SEARCH = "search"


@dataclass(frozen=True, slots=True)
class ResolvedReference:
    """A reference pinned to exactly one ADT object."""

    object_uri: str
    display_name: str
    resolved_by: ResolvedBy

    def to_dict(self) -> dict[str, str]:
        return {
            "object_uri": self.object_uri,
            "display_name": self.display_name,
            "resolved_by": self.resolved_by.value,
        }
