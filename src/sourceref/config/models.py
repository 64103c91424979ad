"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SOURCEREF__SECTION__KEY)
3. Project YAML (<root>/.sourceref/config.yaml)
4. Global YAML (~/.config/sourceref/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SOURCEREF__<SECTION>__<KEY>=<VALUE>

Examples:
    SOURCEREF__LOGGING__LEVEL=DEBUG
    SOURCEREF__SEARCH__NARROW_LIMIT=20
    SOURCEREF__BACKEND__BASE_URL=http://127.0.0.1:8765
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from sourceref.config.constants import HTTP_TIMEOUT_MAX_SEC, SEARCH_MAX_LIMIT, SEARCH_TERMS_MAX

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SOURCEREF__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. INFO logs resolution outcomes, DEBUG every search round trip.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class SearchConfig(BaseModel):
    """Object search limits used by the resolver.

    Env vars:
        SOURCEREF__SEARCH__NARROW_LIMIT: Result cap of the first search per term
        SOURCEREF__SEARCH__REVALIDATION_LIMIT: Result cap when re-checking a unique hit
        SOURCEREF__SEARCH__MAX_TERMS: Derived search terms tried per reference
        SOURCEREF__SEARCH__MAX_CANDIDATES: Candidates listed in ambiguity errors
    """

    narrow_limit: int = Field(
        default=12,
        ge=1,
        le=SEARCH_MAX_LIMIT,
        description="Result cap of the first search per term.",
    )
    revalidation_limit: int = Field(
        default=100,
        ge=1,
        le=SEARCH_MAX_LIMIT,
        description="Result cap when re-checking an apparently unique hit. "
        "RISK: Too close to narrow_limit lets truncation hide name collisions.",
    )
    max_terms: int = Field(
        default=6,
        ge=1,
        le=SEARCH_TERMS_MAX,
        description="Derived search terms tried per reference, in derivation order.",
    )
    max_candidates: int = Field(
        default=8,
        ge=1,
        description="Candidate summaries carried by ambiguity errors.",
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "SearchConfig":
        if self.revalidation_limit <= self.narrow_limit:
            raise ValueError(
                f"revalidation_limit ({self.revalidation_limit}) must exceed "
                f"narrow_limit ({self.narrow_limit})"
            )
        return self


class BackendConfig(BaseModel):
    """ADT gateway configuration.

    Env vars:
        SOURCEREF__BACKEND__BASE_URL: Gateway base URL
        SOURCEREF__BACKEND__TIMEOUT_SEC: Per-request timeout
        SOURCEREF__BACKEND__SAP_CLIENT: SAP client sent as sap-client header
        SOURCEREF__BACKEND__SAP_LANGUAGE: Logon language sent as sap-language header
    """

    base_url: str = Field(
        default="http://127.0.0.1:8765",
        description="Base URL of the ADT gateway exposing search and source endpoints.",
    )
    search_path: str = Field(
        default="/search",
        description="Path of the object search endpoint.",
    )
    source_path: str = Field(
        default="/source",
        description="Path of the source read/write endpoint.",
    )
    timeout_sec: float = Field(
        default=30.0,
        gt=0,
        le=HTTP_TIMEOUT_MAX_SEC,
        description="Per-request timeout. Timeouts surface as search_failed.",
    )
    sap_client: str | None = Field(default=None, description="SAP client number.")
    sap_language: str | None = Field(default=None, description="SAP logon language.")
    verify_tls: bool = Field(
        default=True,
        description="Verify TLS certificates. SECURITY RISK when disabled.",
    )

    @field_validator("search_path", "source_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"Endpoint path must start with '/': {v}")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must be http(s): {v}")
        return v.rstrip("/")


class SourceRefConfig(BaseModel):
    """Root configuration for sourceref.

    All settings can be configured via:
    1. Environment variables: SOURCEREF__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
