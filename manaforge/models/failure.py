"""
Failure envelope: error classification for draw analysis.

Every failure raised by the engine is a KnownError subclass:

- ValidationError: malformed category or deck specification
- DomainError: an operation violates a combinatorial precondition
  (drawing more cards than remain, vector/deck mismatch)
- ResourceError: an enumeration exceeds a configured size or depth bound

Errors are raised where they are detected and propagate unchanged.
The engine never clamps or coerces invalid input, and nothing retries:
every computation is deterministic, so the same input fails the same way.

The HTTP layer converts errors into an ApiResponse envelope through
`finalize_response()`, the single exit point for user-visible responses.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    VALIDATION_FAILED = "validation_failed"

    # Combinatorial preconditions
    DOMAIN_VIOLATION = "domain_violation"

    # Enumeration bounds
    RESOURCE_EXCEEDED = "resource_exceeded"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the caller",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Response envelope for the HTTP endpoints.

    Every response is classified into one of three outcome types.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(
        cls,
        detail: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create an unknown failure response.

        NOTE: Prefer create_unknown_failure() which auto-finalizes.
        """
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
                detail=detail,
                suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
            ),
        )


# =============================================================================
# ENGINE ERRORS
# =============================================================================


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class ValidationError(KnownError):
    """Malformed category or deck specification."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.VALIDATION_FAILED,
            message=message,
            detail=detail,
            suggestion="Fix the category or deck specification.",
            status_code=422,
        )


class DomainError(KnownError):
    """
    An operation violates a combinatorial precondition.

    Examples: drawing more cards than the deck holds, a count vector
    whose length does not match the deck's categories.
    """

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.DOMAIN_VIOLATION,
            message=message,
            detail=detail,
            suggestion="Check draw sizes against the remaining deck.",
            status_code=422,
        )


class ResourceError(KnownError):
    """
    Terminal exception raised when an enumeration exceeds its bound.

    The caller should reduce the enumeration depth or switch to
    counting-only mode. Retrying with the same input fails again.
    """

    def __init__(self, limit_type: str, requested: int, limit: int):
        self.limit_type = limit_type
        self.requested = requested
        self.limit = limit
        super().__init__(
            kind=FailureKind.RESOURCE_EXCEEDED,
            message=f"Enumeration bound exceeded: {limit_type}",
            detail=f"{limit_type}: {requested}/{limit}",
            suggestion="Reduce the draw size or turn depth, or use counting-only mode.",
            status_code=413,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The operation failed due to a known issue.",
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the error details and adjust your request.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


# Track finalized responses (weak reference would be ideal, but set is simpler)
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return id(response) in _finalized_responses


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    """Create a finalized known failure response from an engine error."""
    return finalize_response(error.to_response())


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    return finalize_response(ApiResponse.unknown_failure(detail=detail))


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
