from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    # Raised locally, before anything is sent
    VALIDATION = "ERR_VALIDATION"

    # Service rejected the request
    BAD_REQUEST = "ERR_BAD_REQUEST"
    AUTH = "ERR_AUTH"
    PAYMENT_REQUIRED = "ERR_PAYMENT_REQUIRED"
    RATE_LIMITED = "ERR_RATE_LIMITED"
    SERVER = "ERR_SERVER"
    GENERIC = "ERR_GENERIC"

    # Transport / response handling
    NETWORK = "ERR_NETWORK"
    DECODE = "ERR_DECODE"


RETRYABLE_KINDS = frozenset({ErrorKind.RATE_LIMITED, ErrorKind.SERVER, ErrorKind.NETWORK})


class ErrorRecord(BaseModel):
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    details: Optional[str] = None
    retry_after_seconds: Optional[int] = None
    correlation_id: Optional[str] = None


class NovelAIError(Exception):
    """
    The single exception type raised by the SDK.
    `kind` tells callers what went wrong; the optional fields are only
    populated for the kinds they belong to (retry_after_seconds for
    RATE_LIMITED, correlation_id for SERVER).
    Captures the original exception for debugging if needed.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
        retry_after_seconds: Optional[int] = None,
        correlation_id: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code
        self.details = details
        self.retry_after_seconds = retry_after_seconds
        self.correlation_id = correlation_id
        self.original_error = original_error

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS

    @property
    def record(self) -> ErrorRecord:
        return ErrorRecord(
            kind=self.kind,
            message=self.message,
            status_code=self.status_code,
            details=self.details,
            retry_after_seconds=self.retry_after_seconds,
            correlation_id=self.correlation_id,
        )

    def __repr__(self) -> str:
        return f"NovelAIError(kind={self.kind.name}, status_code={self.status_code}, message={self.message!r})"

    # --- Constructors for the kinds raised outside the status table ---

    @classmethod
    def validation(cls, message: str) -> "NovelAIError":
        return cls(message, ErrorKind.VALIDATION)

    @classmethod
    def network(cls, message: str, original_error: Optional[BaseException] = None) -> "NovelAIError":
        return cls(message, ErrorKind.NETWORK, original_error=original_error)

    @classmethod
    def decode(cls, message: str, original_error: Optional[BaseException] = None) -> "NovelAIError":
        return cls(message, ErrorKind.DECODE, original_error=original_error)
