from typing import List

import structlog

from novelai_image.core.exceptions import NovelAIError
from novelai_image.domain.interfaces import ArchiveFormatError, ArchiveReader

logger = structlog.get_logger()

IMAGE_EXTENSION = ".png"


class ArchiveDecoder:
    """
    Turns the zip body returned by the generate endpoint into image buffers.
    Which reader does the unpacking is decided by whoever builds the decoder
    (see core.dependencies.get_archive_reader).
    """

    def __init__(self, reader: ArchiveReader):
        self.reader = reader

    def extract_images(self, data: bytes) -> List[bytes]:
        try:
            entries = self.reader.read_entries(bytes(data))
        except ArchiveFormatError as e:
            logger.warning("archive_decode_failed", size=len(data), reader=self.reader.__class__.__name__)
            raise NovelAIError.decode(f"Response is not a valid image archive: {e}", original_error=e) from e

        images = [entry.data for entry in entries if entry.name.endswith(IMAGE_EXTENSION) and not entry.is_dir]

        logger.debug("archive_decoded", entries=len(entries), images=len(images))
        return images
