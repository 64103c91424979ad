"""Records exchanged with the ADT gateway.

The gateway returns loosely-typed JSON (optional or absent type field, extra
keys). These models give every record a fixed shape at the boundary so the
resolver never looks up dynamic keys.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ObjectSummary(_Record):
    """One hit of the object search.

    Attributes:
        uri: Canonical ADT locator (e.g., "/sap/bc/adt/oo/classes/zcl_demo")
        name: Display identifier (e.g., "ZCL_DEMO")
        object_type: Backend classification (e.g., "CLAS/OC"), absent for some hits
        package: Owning package, when reported
    """

    uri: str
    name: str
    object_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("object_type", "objectType", "type"),
    )
    package: str | None = None

    def summary(self) -> str:
        """Human-readable "NAME TYPE" label used in ambiguity reports."""
        return " ".join(part for part in (self.name, self.object_type) if part)


class SourceDocument(_Record):
    """Source text of one object as read from the gateway."""

    object_uri: str = Field(validation_alias=AliasChoices("object_uri", "objectUri"))
    source: str
    etag: str | None = None


class SourceUpdate(_Record):
    """Write request for one object's source."""

    object_uri: str = Field(validation_alias=AliasChoices("object_uri", "objectUri"))
    source: str
    etag: str | None = None


class SourceUpdateResult(_Record):
    """Gateway acknowledgement of a source write."""

    object_uri: str = Field(validation_alias=AliasChoices("object_uri", "objectUri"))
    status_code: int = Field(
        default=200, validation_alias=AliasChoices("status_code", "statusCode")
    )
    etag: str | None = None
