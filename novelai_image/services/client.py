from typing import Optional

import structlog

from novelai_image.core.config import Settings, get_settings
from novelai_image.core.dependencies import get_archive_reader, get_transport
from novelai_image.core.entropy import CorrelationIdSource, SeedSource
from novelai_image.core.exceptions import NovelAIError
from novelai_image.domain.interfaces import ArchiveReader, HttpTransport
from novelai_image.domain.models import GenerateImagePayload, ImageResult
from novelai_image.services.api_client import APIClient
from novelai_image.services.archive_decoder import ArchiveDecoder
from novelai_image.services.request_builder import ImageRequestBuilder

logger = structlog.get_logger()


class NovelAIClient:
    """
    Entry point of the SDK.

        client = NovelAIClient(token=os.environ["NOVELAI_TOKEN"])
        result = await (
            client.image()
            .set_prompt("1girl, cyberpunk, neon lights")
            .set_size(832, 1216)
            .generate()
        )
        Path("output.png").write_bytes(result.images[0])

    Holds only read-only configuration, so concurrent generate() calls
    from builders of the same client are independent.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        *,
        settings: Optional[Settings] = None,
        transport: Optional[HttpTransport] = None,
        archive_reader: Optional[ArchiveReader] = None,
        seed_source: Optional[SeedSource] = None,
        correlation_id_source: Optional[CorrelationIdSource] = None,
    ):
        settings = settings or get_settings()

        token = token if token is not None else settings.TOKEN
        if not token:
            raise NovelAIError.validation("NovelAI API token is required")

        timeout_ms = timeout_ms if timeout_ms is not None else settings.TIMEOUT_MS
        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int) or timeout_ms <= 0:
            raise NovelAIError.validation(f"Timeout must be a positive number of milliseconds, got {timeout_ms!r}")

        archive_reader = archive_reader or get_archive_reader(settings)

        self._seed_source = seed_source
        self._api = APIClient(
            token=token,
            transport=transport or get_transport(),
            archive_decoder=ArchiveDecoder(archive_reader),
            base_url=base_url or settings.BASE_URL,
            timeout_ms=timeout_ms,
            correlation_id_source=correlation_id_source,
        )

        logger.debug(
            "client_initialized",
            base_url=self._api.base_url,
            timeout_ms=timeout_ms,
            archive_reader=archive_reader.__class__.__name__,
        )

    @classmethod
    def from_env(cls) -> "NovelAIClient":
        """Builds a client purely from NOVELAI_* environment variables."""
        return cls(settings=Settings())

    @property
    def base_url(self) -> str:
        return self._api.base_url

    @property
    def timeout_ms(self) -> int:
        return self._api.timeout_ms

    def image(self) -> ImageRequestBuilder:
        """Starts a new generation request bound to this client."""
        return ImageRequestBuilder(self, seed_source=self._seed_source)

    async def _execute(self, payload: GenerateImagePayload) -> ImageResult:
        # Called by ImageRequestBuilder.generate()
        return await self._api.submit(payload)
