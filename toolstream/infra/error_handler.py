"""Error taxonomy and upstream failure classification."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field


class ErrorCategory(str, Enum):
    """Client-visible error categories."""
    INVALID_REQUEST = "invalid_request"  # Bad/missing input
    NOT_FOUND = "not_found"  # Unknown tool
    OVERLOADED = "overloaded"  # Upstream has no capacity
    RATE_LIMITED = "rate_limited"  # Upstream throttled us
    UNAUTHORIZED = "unauthorized"  # Bad upstream credentials
    INPUT_TOO_LONG = "input_too_long"  # Prompt exceeds model context
    TIMEOUT = "timeout"  # Upstream took too long
    CANCELLED = "cancelled"  # Client went away before commit
    INTERNAL = "internal"  # Anything else


GENERIC_FAILURE_MESSAGE = "Failed to generate content."

USER_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.INVALID_REQUEST: "⚠️ Please check your inputs and try again.",
    ErrorCategory.NOT_FOUND: "🔍 We couldn't find that tool. It may have been moved or renamed.",
    ErrorCategory.OVERLOADED: "🔄 The AI service is overloaded right now. Please try again in a few moments.",
    ErrorCategory.RATE_LIMITED: "⏳ Too many requests. Please slow down and try again shortly.",
    ErrorCategory.UNAUTHORIZED: "🔑 The AI service has a configuration issue. Please contact support.",
    ErrorCategory.INPUT_TOO_LONG: "📏 Your input is too long. Please shorten it and try again.",
    ErrorCategory.TIMEOUT: "⏱️ The request took too long to complete. Please try again.",
    ErrorCategory.CANCELLED: "🛑 Generation cancelled.",
    ErrorCategory.INTERNAL: (
        "❌ Sorry, something went wrong while generating content. "
        "Please try again, and contact support if the problem persists."
    ),
}

CATEGORY_STATUS: Dict[ErrorCategory, int] = {
    ErrorCategory.INVALID_REQUEST: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.OVERLOADED: 503,
    ErrorCategory.RATE_LIMITED: 429,
    ErrorCategory.UNAUTHORIZED: 401,
    ErrorCategory.INPUT_TOO_LONG: 400,
    ErrorCategory.TIMEOUT: 504,
    ErrorCategory.CANCELLED: 499,
    ErrorCategory.INTERNAL: 500,
}


class ClassifiedError(BaseModel):
    """A failure reduced to what the client may see plus what operators need."""
    category: ErrorCategory
    status_code: int = Field(..., description="HTTP status sent to the client")
    error: str = Field(..., description="Internal message (logged)")
    user_message: str = Field(..., description="Sanitized, emoji-prefixed message for end users")

    @classmethod
    def for_category(
        cls,
        category: ErrorCategory,
        error: str,
        user_message: Optional[str] = None,
    ) -> "ClassifiedError":
        return cls(
            category=category,
            status_code=CATEGORY_STATUS[category],
            error=error,
            user_message=user_message or USER_MESSAGES[category],
        )

    def to_payload(self) -> Dict[str, str]:
        """Wire shape of a pre-commit failure."""
        return {"error": self.error, "userMessage": self.user_message}


class GatewayError(Exception):
    """Base exception for failures detected before the response is committed."""
    category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(self, message: str, user_message: Optional[str] = None):
        self.message = message
        self.classified = ClassifiedError.for_category(self.category, message, user_message)
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.classified.status_code


class InvalidRequestError(GatewayError):
    """Missing tool identifier or bad input values."""
    category = ErrorCategory.INVALID_REQUEST


class ToolNotFoundError(GatewayError):
    """Tool identifier does not resolve to a registered tool."""
    category = ErrorCategory.NOT_FOUND


class ConfigurationError(GatewayError):
    """Process configuration is missing something the gateway needs."""
    category = ErrorCategory.INTERNAL

    def __init__(self, message: str):
        super().__init__(message, "⚙️ The AI service is not configured yet. Please contact support.")


class GenerationCancelledError(GatewayError):
    """Client aborted before the first byte was committed."""
    category = ErrorCategory.CANCELLED

    def __init__(self, message: str = "Generation cancelled."):
        super().__init__(message)


class UpstreamError(GatewayError):
    """Upstream failure observed before commit, already classified."""

    def __init__(self, classified: ClassifiedError, cause: Any = None):
        self.message = classified.error
        self.classified = classified
        self.category = classified.category
        self.cause = cause
        Exception.__init__(self, classified.error)


@dataclass(frozen=True)
class UpstreamFailure:
    """Normalized view of a raw upstream error value."""
    kinds: Tuple[str, ...]
    message: str

    @property
    def kind(self) -> str:
        return self.kinds[0] if self.kinds else ""


def normalize_failure(raw: Any) -> UpstreamFailure:
    """
    Reduce an arbitrary raised value to its kind labels and message.

    Accepts exceptions, SDK error objects exposing ``type``/``name``/``message``
    attributes, plain dicts (possibly nesting an ``error`` dict) and strings.
    Every kind label found is kept; an SDK exception's class name stays
    alongside whatever ``type`` its response body carried.
    """
    if isinstance(raw, UpstreamFailure):
        return raw
    if raw is None:
        return UpstreamFailure(kinds=(), message="")
    if isinstance(raw, str):
        return UpstreamFailure(kinds=(), message=raw)

    if isinstance(raw, dict):
        nested = raw.get("error")
        if isinstance(nested, dict):
            return normalize_failure(nested)
        kinds = _kind_labels(raw.get("type"), raw.get("name"), raw.get("code"))
        message = raw.get("message") or (nested if isinstance(nested, str) else "") or ""
        return UpstreamFailure(kinds=kinds, message=str(message))

    labels = [getattr(raw, "type", None), getattr(raw, "name", None)]
    if isinstance(raw, BaseException):
        # Exception class names carry meaning for SDK errors (RateLimitError etc.)
        labels.append(type(raw).__name__)
        message = getattr(raw, "message", None)
        if not isinstance(message, str) or not message:
            message = str(raw)
    else:
        message = getattr(raw, "message", None)
        if not isinstance(message, str):
            message = str(raw)
    return UpstreamFailure(kinds=_kind_labels(*labels), message=message)


def _kind_labels(*labels: Any) -> Tuple[str, ...]:
    """Non-empty string labels, first occurrence order, duplicates dropped."""
    kinds = []
    for label in labels:
        if isinstance(label, str) and label and label not in kinds:
            kinds.append(label)
    return tuple(kinds)


# Ordered predicate table: (category, kinds, message substrings). First match wins.
CLASSIFICATION_RULES: Tuple[Tuple[ErrorCategory, Tuple[str, ...], Tuple[str, ...]], ...] = (
    (
        ErrorCategory.OVERLOADED,
        ("overloaded_error", "overloadederror"),
        ("overloaded", "no available model", "no endpoints available"),
    ),
    (
        ErrorCategory.RATE_LIMITED,
        ("rate_limit_error", "ratelimiterror"),
        ("rate limit", "too many requests"),
    ),
    (
        ErrorCategory.UNAUTHORIZED,
        ("authentication_error", "authenticationerror", "permissiondeniederror"),
        ("api key", "authentication", "unauthorized"),
    ),
    (
        ErrorCategory.INPUT_TOO_LONG,
        ("context_length_exceeded",),
        ("context length", "too long", "maximum context", "token limit"),
    ),
    (
        ErrorCategory.TIMEOUT,
        ("timeouterror", "apitimeouterror"),
        ("timeout", "timed out"),
    ),
)


def classify_error(raw: Any) -> ClassifiedError:
    """
    Map a raw upstream failure to exactly one ClassifiedError.

    Args:
        raw: Whatever the upstream raised or reported

    Returns:
        ClassifiedError for the first matching rule, or an internal failure
    """
    failure = normalize_failure(raw)
    observed = {kind.lower() for kind in failure.kinds}
    message = failure.message.lower()

    for category, kinds, needles in CLASSIFICATION_RULES:
        if observed.intersection(kinds) or any(needle in message for needle in needles):
            return ClassifiedError.for_category(category, failure.message or GENERIC_FAILURE_MESSAGE)

    return ClassifiedError.for_category(ErrorCategory.INTERNAL, failure.message or GENERIC_FAILURE_MESSAGE)
