"""sourceref error types with typed error codes.

Error code families:
- config_*: configuration loading and validation
- backend_*: transport failures talking to the ADT gateway
- invalid_ref / not_found / ambiguous / search_failed: reference resolution
- stale_request: a superseded request generation
"""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Typed error codes for programmatic handling."""

    # Config
    CONFIG_PARSE_ERROR = "config_parse_error"
    CONFIG_INVALID_VALUE = "config_invalid_value"

    # Resolver
    INVALID_REF = "invalid_ref"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    SEARCH_FAILED = "search_failed"

    # Backend
    BACKEND_REQUEST_FAILED = "backend_request_failed"
    BACKEND_INVALID_RESPONSE = "backend_invalid_response"

    # Session
    STALE_REQUEST = "stale_request"
    NOTHING_OPEN = "nothing_open"
    NOT_EDITABLE = "not_editable"


RESOLVER_ERROR_CODES = frozenset(
    {
        ErrorCode.INVALID_REF,
        ErrorCode.NOT_FOUND,
        ErrorCode.AMBIGUOUS,
        ErrorCode.SEARCH_FAILED,
    }
)


class SourceRefError(Exception):
    """Base error with structured context for callers and the CLI."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.retryable = retryable
        self.details = details or {}

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class ConfigError(SourceRefError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class BackendError(SourceRefError):
    """Failures talking to the search/source gateway."""

    @classmethod
    def request_failed(cls, operation: str, reason: str, **details: Any) -> "BackendError":
        return cls(
            code=ErrorCode.BACKEND_REQUEST_FAILED,
            message=f"{operation} request failed: {reason}",
            retryable=True,
            details={"operation": operation, "reason": reason, **details},
        )

    @classmethod
    def invalid_response(cls, operation: str, reason: str) -> "BackendError":
        return cls(
            code=ErrorCode.BACKEND_INVALID_RESPONSE,
            message=f"{operation} returned an invalid payload: {reason}",
            details={"operation": operation, "reason": reason},
        )


class ResolverError(SourceRefError):
    """Reference resolution failure.

    ``ref`` is the reference as the resolver saw it (normalized, except for
    empty input where the raw value is kept).
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
        ref: str = "",
    ) -> None:
        super().__init__(code, message, retryable, details)
        self.ref = ref

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "ref": self.ref,
            "retryable": self.retryable,
            "details": self.details,
        }

    @property
    def candidates(self) -> list[str]:
        """Candidate summaries carried by ``ambiguous`` errors."""
        return list(self.details.get("candidates") or [])

    @classmethod
    def invalid_ref(cls, ref: str, message: str, **details: Any) -> "ResolverError":
        return cls(code=ErrorCode.INVALID_REF, message=message, details=details, ref=ref)

    @classmethod
    def not_found(
        cls, ref: str, searched_terms: list[str], expected_types: list[str] | None
    ) -> "ResolverError":
        return cls(
            code=ErrorCode.NOT_FOUND,
            message=f'No ABAP object found for "{ref}".',
            details={"searched_terms": searched_terms, "expected_types": expected_types},
            ref=ref,
        )

    @classmethod
    def ambiguous(
        cls,
        ref: str,
        *,
        searched_terms: list[str],
        expected_types: list[str] | None,
        candidates: list[str],
        term: str | None = None,
    ) -> "ResolverError":
        if term is not None:
            message = f'Ambiguous reference "{ref}" (term "{term}"). Refine the object name.'
        else:
            message = f'Ambiguous reference "{ref}". Refine the object name.'
        details: dict[str, Any] = {
            "searched_terms": searched_terms,
            "expected_types": expected_types,
            "candidates": candidates,
        }
        if term is not None:
            details["term"] = term
        return cls(code=ErrorCode.AMBIGUOUS, message=message, details=details, ref=ref)

    @classmethod
    def search_failed(cls, ref: str, cause: BaseException) -> "ResolverError":
        return cls(
            code=ErrorCode.SEARCH_FAILED,
            message=f'Failed to resolve "{ref}": object search raised {type(cause).__name__}.',
            retryable=True,
            details={"cause": str(cause)},
            ref=ref,
        )


class SessionError(SourceRefError):
    """Source session misuse."""

    @classmethod
    def nothing_open(cls) -> "SessionError":
        return cls(code=ErrorCode.NOTHING_OPEN, message="No object is open in this session")

    @classmethod
    def not_editable(cls, ref: str) -> "SessionError":
        return cls(
            code=ErrorCode.NOT_EDITABLE,
            message=f"'{ref}' is a workspace file; read and write it through the workspace",
            details={"ref": ref},
        )


class StaleRequestError(SourceRefError):
    """A newer request generation superseded this one."""

    @classmethod
    def superseded(cls, token: int, current: int) -> "StaleRequestError":
        return cls(
            code=ErrorCode.STALE_REQUEST,
            message=f"Request {token} was superseded by request {current}",
            details={"token": token, "current": current},
        )
