from typing import Mapping, Optional

import httpx
import structlog

from novelai_image.domain.interfaces import HttpTransport
from novelai_image.domain.models import TransportResponse

logger = structlog.get_logger()


class HttpxTransport(HttpTransport):
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        # `transport` lets callers plug in httpx.MockTransport or a custom pool
        self._transport = transport

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        # The client (and its connection) lives only for this exchange and is
        # closed on every exit path, including cancellation by the caller.
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
            response = await client.request(method, url, headers=dict(headers), content=body)

        logger.debug("http_exchange_finished", method=method, url=url, status_code=response.status_code)
        return TransportResponse(
            status_code=response.status_code,
            content=response.content,
            reason=response.reason_phrase,
            headers={key.lower(): value for key, value in response.headers.items()},
        )
