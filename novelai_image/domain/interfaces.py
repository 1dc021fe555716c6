from abc import ABC, abstractmethod
from typing import List, Mapping, Optional

from novelai_image.domain.models import ArchiveEntry, TransportResponse


class HttpTransport(ABC):
    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """
        Performs one HTTP exchange and returns the fully read response.
        Timeouts are applied by the caller through task cancellation, so
        implementations must release their connection when cancelled.
        Raises on transport faults (DNS, connect, protocol errors).
        """
        pass


class ArchiveFormatError(Exception):
    """Raised by an ArchiveReader when the buffer is not a readable archive."""

    pass


class ArchiveReader(ABC):
    @abstractmethod
    def read_entries(self, data: bytes) -> List[ArchiveEntry]:
        """Returns every entry in archive iteration order, directories included"""
        pass
