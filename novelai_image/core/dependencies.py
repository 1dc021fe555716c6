from typing import Optional

from novelai_image.connections.httpx_transport import HttpxTransport
from novelai_image.connections.stream_archive_reader import StreamingArchiveReader
from novelai_image.connections.zipfile_archive_reader import ZipfileArchiveReader
from novelai_image.core.config import Settings, get_settings
from novelai_image.domain.interfaces import ArchiveReader, HttpTransport


def get_archive_reader(settings: Optional[Settings] = None) -> ArchiveReader:
    """
    Dependency Factory: Returns the archive backend selected by the environment.
    The decoder itself never inspects the environment.
    """
    settings = settings or get_settings()
    if settings.ARCHIVE_BACKEND == "stream":
        return StreamingArchiveReader()

    return ZipfileArchiveReader()


def get_transport() -> HttpTransport:
    """
    Dependency Factory: Returns the HTTP transport used for API calls.
    """
    return HttpxTransport()
