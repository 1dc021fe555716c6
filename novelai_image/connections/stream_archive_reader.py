from typing import Iterator, List

from stream_unzip import UnzipError, stream_unzip

from novelai_image.domain.interfaces import ArchiveFormatError, ArchiveReader
from novelai_image.domain.models import ArchiveEntry

CHUNK_SIZE = 65536


def _chunks(data: bytes) -> Iterator[bytes]:
    for offset in range(0, len(data), CHUNK_SIZE):
        yield data[offset : offset + CHUNK_SIZE]


def _decode_name(raw: bytes) -> str:
    # zip names are UTF-8 when flagged, CP437 otherwise
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("cp437")


class StreamingArchiveReader(ArchiveReader):
    """
    Portable reader built on stream-unzip.
    Walks local file headers front to back instead of seeking to the
    central directory, so it works on any byte source.
    """

    def read_entries(self, data: bytes) -> List[ArchiveEntry]:
        entries = []
        try:
            for raw_name, _size, unzipped_chunks in stream_unzip(_chunks(data)):
                # Each member must be fully consumed before advancing
                content = b"".join(unzipped_chunks)
                name = _decode_name(raw_name)
                entries.append(ArchiveEntry(name=name, is_dir=name.endswith("/"), data=content))
        except UnzipError as e:
            raise ArchiveFormatError(f"Not a valid zip archive: {e!r}") from e
        return entries
