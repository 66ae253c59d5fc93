"""
Error types raised by the Stripe binding.

See https://stripe.com/docs/api#errors for the remote error taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Tuple

__all__ = [
    "ApiConnectionError",
    "BadRequest",
    "ErrorCode",
    "ErrorType",
    "ModelDecodeError",
    "NotFound",
    "RawResponse",
    "RequestFailed",
    "StripeApiError",
    "StripeError",
    "StripeServerError",
    "TooManyRequests",
    "Unauthorized",
    "UnhandledServerError",
    "UnknownErrorCode",
    "UnknownErrorType",
    "UnrecognizedVariant",
]

FieldError = Tuple[str, str]


class StripeError(Exception):
    """Base class for every error raised by this package."""


class UnknownErrorType(StripeError, ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown error type, received '{value}'")
        self.value = value


class UnknownErrorCode(StripeError, ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown error code, received '{value}'")
        self.value = value


class UnrecognizedVariant(StripeError, ValueError):
    """A discriminator named no known variant of a closed union."""

    def __init__(self, tag: str, union: str = "variant") -> None:
        super().__init__(f"Unrecognized {union} '{tag}'")
        self.tag = tag
        self.union = union


class ErrorType(str, Enum):
    API_CONNECTION_ERROR = "api_connection_error"
    API_ERROR = "api_error"
    AUTHENTICATION_ERROR = "authentication_error"
    CARD_ERROR = "card_error"
    INVALID_REQUEST_ERROR = "invalid_request_error"
    RATE_LIMIT_ERROR = "rate_limit_error"

    @classmethod
    def from_wire(cls, value: str) -> "ErrorType":
        try:
            return cls(value)
        except ValueError:
            raise UnknownErrorType(value) from None


class ErrorCode(str, Enum):
    INVALID_NUMBER = "invalid_number"
    INVALID_EXPIRY_MONTH = "invalid_expiry_month"
    INVALID_EXPIRY_YEAR = "invalid_expiry_year"
    INVALID_CVC = "invalid_cvc"
    INCORRECT_NUMBER = "incorrect_number"
    EXPIRED_CARD = "expired_card"
    INCORRECT_CVC = "incorrect_cvc"
    INCORRECT_ZIP = "incorrect_zip"
    CARD_DECLINED = "card_declined"
    MISSING = "missing"
    PROCESSING_ERROR = "processing_error"

    @classmethod
    def from_wire(cls, value: str) -> "ErrorCode":
        try:
            return cls(value)
        except ValueError:
            raise UnknownErrorCode(value) from None


class ModelDecodeError(StripeError):
    """
    A payload could not be converted into a model.

    ``errors`` lists every ``(path, reason)`` mismatch found. Paths are JSON
    pointers relative to the decoded document (``""`` is the document itself).
    The remaining attributes describe the request that produced the payload
    when it came off the wire.
    """

    def __init__(
        self,
        errors: Sequence[FieldError],
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        post_parameters: Optional[Mapping[str, str]] = None,
        response_body: Optional[bytes] = None,
    ) -> None:
        self.errors: List[FieldError] = list(errors)
        self.status_code = status_code
        self.url = url
        self.post_parameters = dict(post_parameters) if post_parameters is not None else None
        self.response_body = response_body
        super().__init__(f"Invalid model, errors are {self.errors}")

    def with_context(
        self,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        post_parameters: Optional[Mapping[str, str]] = None,
        response_body: Optional[bytes] = None,
    ) -> "ModelDecodeError":
        return ModelDecodeError(
            self.errors,
            status_code=status_code,
            url=url,
            post_parameters=post_parameters,
            response_body=response_body,
        )


@dataclass(frozen=True)
class RawResponse:
    """An HTTP response whose body was not (or could not be) interpreted."""

    status_code: int
    body: bytes
    url: Optional[str] = None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class StripeApiError(StripeError):
    """
    An error reported by Stripe with a well-formed error body.

    Subclasses are keyed by HTTP status; compare instances structurally.
    """

    status_code: ClassVar[int]

    def __init__(
        self,
        type: ErrorType,
        code: Optional[ErrorCode] = None,
        message: Optional[str] = None,
        param: Optional[str] = None,
    ) -> None:
        super().__init__(message or type.value)
        self.type = type
        self.code = code
        self.message = message
        self.param = param

    def _key(self) -> Tuple[Any, ...]:
        return (self.type, self.code, self.message, self.param)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(type={self.type!r}, code={self.code!r}, "
            f"message={self.message!r}, param={self.param!r})"
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "code": self.code.value if self.code is not None else None,
            "message": self.message,
            "param": self.param,
        }


class BadRequest(StripeApiError):
    status_code = 400


class Unauthorized(StripeApiError):
    status_code = 401


class RequestFailed(StripeApiError):
    status_code = 402


class NotFound(StripeApiError):
    status_code = 404


class TooManyRequests(StripeApiError):
    status_code = 429


class _ResponseError(StripeError):
    label: ClassVar[str]

    def __init__(self, response: RawResponse) -> None:
        super().__init__(f"{self.label}, status code is {response.status_code}")
        self.response = response

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.response == other.response  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.response))


class StripeServerError(_ResponseError):
    """Stripe answered 500, 502, 503 or 504; the body is not trusted."""

    label = "Stripe server error"


class UnhandledServerError(_ResponseError):
    """Any response the classifier has no typed variant for."""

    label = "Unhandled server error"


class ApiConnectionError(StripeError):
    """The request never produced a response (connection failure or timeout)."""

    type = ErrorType.API_CONNECTION_ERROR

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
