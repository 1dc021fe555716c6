import io
import zipfile
import zlib
from typing import List

from novelai_image.domain.interfaces import ArchiveFormatError, ArchiveReader
from novelai_image.domain.models import ArchiveEntry


class ZipfileArchiveReader(ArchiveReader):
    """
    Host-native reader built on the stdlib zipfile module.
    Reads the central directory, so the whole buffer is held in memory.
    """

    def read_entries(self, data: bytes) -> List[ArchiveEntry]:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                return [
                    ArchiveEntry(
                        name=info.filename,
                        is_dir=info.is_dir(),
                        data=b"" if info.is_dir() else archive.read(info),
                    )
                    for info in archive.infolist()
                ]
        # RuntimeError: encrypted member, NotImplementedError: unknown compression method
        except (zipfile.BadZipFile, zlib.error, EOFError, RuntimeError, NotImplementedError) as e:
            raise ArchiveFormatError(f"Not a valid zip archive: {e}") from e
