"""Error kinds raised while compiling a scene plan.

Every failure a caller can see is one of the classes below. Each carries a
machine-readable ``kind`` from the closed :class:`ErrorKind` enum and a
human-readable message, so callers branch on the kind and show the message.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""

    INVALID_DURATION = "invalid_duration"
    INVALID_CONCEPT = "invalid_concept"
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    GENERATION_FAILED = "generation_failed"
    MALFORMED_RESPONSE = "malformed_response"
    UNEXPECTED_SHAPE = "unexpected_shape"
    MISSING_SCENE_KEYS = "missing_scene_keys"


class ErrorCategory(str, Enum):
    """User-facing grouping of error kinds."""

    INPUT = "input"
    CREDENTIAL = "credential"
    GENERATION = "generation"
    UNEXPECTED_RESPONSE = "unexpected_response"


class ErrorReport(BaseModel):
    """Serialisable description of a failed plan call."""

    error: str
    kind: ErrorKind
    category: ErrorCategory
    hint: str


class ScenePlanError(Exception):
    """Base class for all scene planning failures."""

    kind: ErrorKind
    category: ErrorCategory
    hint: str = ""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Return the error as a JSON-friendly dict."""
        return ErrorReport(
            error=self.message,
            kind=self.kind,
            category=self.category,
            hint=self.hint,
        ).model_dump(mode="json")


class InvalidDurationError(ScenePlanError):
    """The duration text holds no positive, finite duration."""

    kind = ErrorKind.INVALID_DURATION
    category = ErrorCategory.INPUT
    hint = "Use forms like '30s', '1 phút', '2m 30s' or a bare number of seconds"

    def __init__(self, expression: str, reason: Optional[str] = None) -> None:
        self.expression = expression
        message = f"Could not read a positive duration from {expression!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidConceptError(ScenePlanError):
    """The video idea is empty."""

    kind = ErrorKind.INVALID_CONCEPT
    category = ErrorCategory.INPUT
    hint = "Describe the video idea before planning scenes"


class MissingCredentialError(ScenePlanError):
    """No API key was supplied for the call."""

    kind = ErrorKind.MISSING_CREDENTIAL
    category = ErrorCategory.CREDENTIAL
    hint = "Pass --api-key or set GEMINI_API_KEY / ANTHROPIC_API_KEY"


class InvalidCredentialError(ScenePlanError):
    """The generation backend rejected the API key."""

    kind = ErrorKind.INVALID_CREDENTIAL
    category = ErrorCategory.CREDENTIAL
    hint = "Check the API key for the selected provider"


class GenerationFailedError(ScenePlanError):
    """The generation backend failed for a reason other than credentials."""

    kind = ErrorKind.GENERATION_FAILED
    category = ErrorCategory.GENERATION
    hint = "The model call failed; try again"


class UnexpectedResponseError(ScenePlanError):
    """The backend answered with something that is not a scene map."""

    category = ErrorCategory.UNEXPECTED_RESPONSE
    hint = "The model returned an unexpected response; try again"


class MalformedResponseError(UnexpectedResponseError):
    """The response text is not valid JSON."""

    kind = ErrorKind.MALFORMED_RESPONSE


class UnexpectedShapeError(UnexpectedResponseError):
    """The response parses but is not a JSON object."""

    kind = ErrorKind.UNEXPECTED_SHAPE


class MissingSceneKeysError(UnexpectedResponseError):
    """The response object has no ``scene_<n>`` key."""

    kind = ErrorKind.MISSING_SCENE_KEYS
