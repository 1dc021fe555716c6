import asyncio
import json
from typing import Any, Optional

import structlog

from novelai_image.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS
from novelai_image.core.entropy import CorrelationIdSource, generate_correlation_id
from novelai_image.core.exceptions import ErrorKind, NovelAIError
from novelai_image.domain.interfaces import HttpTransport
from novelai_image.domain.models import GenerateImagePayload, ImageMetadata, ImageResult, TransportResponse
from novelai_image.services.archive_decoder import ArchiveDecoder

logger = structlog.get_logger()

GENERATE_ENDPOINT = "/ai/generate-image"
ACCEPT_HEADER = "application/x-zip-compressed, application/json"
SERVER_ERROR_STATUSES = (500, 502, 503, 504)


def _parse_error_body(response: TransportResponse) -> Optional[Any]:
    """Best-effort JSON decode; error bodies are not always JSON."""
    try:
        return json.loads(response.content)
    except (ValueError, UnicodeDecodeError):
        return None


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    # Only the delta-seconds form is honoured, HTTP-dates are ignored
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class APIClient:
    """
    Low-level client for the generate-image endpoint.

    One call is one attempt: no retries happen here. RATE_LIMITED and
    SERVER errors carry retry_after_seconds / correlation_id so the caller
    can build its own backoff.
    """

    def __init__(
        self,
        token: str,
        transport: HttpTransport,
        archive_decoder: ArchiveDecoder,
        base_url: str = DEFAULT_BASE_URL,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        correlation_id_source: Optional[CorrelationIdSource] = None,
    ):
        self._token = token
        self._transport = transport
        self._decoder = archive_decoder
        self.base_url = base_url.rstrip("/")
        self.timeout_ms = timeout_ms
        self._correlation_ids = correlation_id_source or generate_correlation_id

    @property
    def url(self) -> str:
        return f"{self.base_url}{GENERATE_ENDPOINT}"

    def _headers(self, correlation_id: str) -> dict:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Accept": ACCEPT_HEADER,
            "x-correlation-id": correlation_id,
        }

    async def submit(self, payload: GenerateImagePayload) -> ImageResult:
        correlation_id = self._correlation_ids()
        body = payload.model_dump_json().encode("utf-8")

        with structlog.contextvars.bound_contextvars(correlation_id=correlation_id):
            logger.info(
                "generation_request_submitted",
                model=payload.model.value,
                n_samples=payload.parameters.n_samples,
                timeout_ms=self.timeout_ms,
            )
            deadline = asyncio.timeout(self.timeout_ms / 1000)
            try:
                async with deadline:
                    response = await self._transport.send("POST", self.url, self._headers(correlation_id), body)
                if not response.is_success:
                    raise self._error_from_response(response, correlation_id)

                images = self._decoder.extract_images(response.content)

            except NovelAIError as e:
                logger.warning("generation_request_failed", kind=e.kind.name, status_code=e.status_code)
                raise

            except TimeoutError as e:
                # A TimeoutError the transport raised on its own is just a network fault
                if not deadline.expired():
                    logger.warning("generation_request_failed", kind=ErrorKind.NETWORK.name, error=repr(e))
                    raise NovelAIError.network(f"Network error: {e}", original_error=e) from e
                logger.warning("generation_request_failed", kind=ErrorKind.NETWORK.name, reason="timeout")
                raise NovelAIError.network(f"Request timed out after {self.timeout_ms}ms", original_error=e) from e

            except asyncio.CancelledError as e:
                # Cancellation of *this* task belongs to the caller; anything
                # else was raised by the transport itself.
                task = asyncio.current_task()
                if task is not None and task.cancelling():
                    raise
                logger.warning("generation_request_failed", kind=ErrorKind.NETWORK.name, reason="cancelled")
                raise NovelAIError.network("Network error: request was cancelled", original_error=e) from e

            except Exception as e:
                logger.warning("generation_request_failed", kind=ErrorKind.NETWORK.name, error=repr(e))
                raise NovelAIError.network(f"Network error: {e}", original_error=e) from e

            logger.info("generation_request_completed", images=len(images))

        return ImageResult(images=images, metadata=ImageMetadata.from_payload(payload))

    def _error_from_response(self, response: TransportResponse, correlation_id: str) -> NovelAIError:
        error_body = _parse_error_body(response)

        message = None
        if isinstance(error_body, dict):
            message = error_body.get("message") or error_body.get("error")
        message = str(message or response.reason or f"HTTP {response.status_code}")

        status = response.status_code

        if status == 400:
            return NovelAIError(
                f"Bad request: {message}",
                ErrorKind.BAD_REQUEST,
                status_code=status,
                details=response.content.decode("utf-8", errors="replace") or None,
            )
        if status in (401, 403):
            return NovelAIError(message, ErrorKind.AUTH, status_code=status)
        if status == 402:
            return NovelAIError(message, ErrorKind.PAYMENT_REQUIRED, status_code=status)
        if status == 429:
            return NovelAIError(
                message,
                ErrorKind.RATE_LIMITED,
                status_code=status,
                retry_after_seconds=_parse_retry_after(response.headers.get("retry-after")),
            )
        if status in SERVER_ERROR_STATUSES:
            return NovelAIError(
                f"Server error ({status}): {message}. This may be caused by payload schema issues.",
                ErrorKind.SERVER,
                status_code=status,
                correlation_id=correlation_id,
            )
        return NovelAIError(f"HTTP {status}: {message}", ErrorKind.GENERIC, status_code=status)
