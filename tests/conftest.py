import io
import struct
import zipfile
from typing import Iterable, Tuple

import pytest

from novelai_image.services.request_builder import ImageRequestBuilder

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def build_zip(entries: Iterable[Tuple[str, bytes]], compression: int = zipfile.ZIP_STORED) -> bytes:
    """Builds an in-memory zip the same way the service packs its samples."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression) as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


def patch_entry_headers(data: bytes, flag_bits: int = None, method: int = None) -> bytes:
    """
    Rewrites the general purpose flags and compression method of the first
    entry in both its local header and its central directory record.
    """
    patched = bytearray(data)
    local = patched.find(b"PK\x03\x04")
    central = patched.find(b"PK\x01\x02")
    if flag_bits is not None:
        struct.pack_into("<H", patched, local + 6, flag_bits)
        struct.pack_into("<H", patched, central + 8, flag_bits)
    if method is not None:
        struct.pack_into("<H", patched, local + 8, method)
        struct.pack_into("<H", patched, central + 10, method)
    return bytes(patched)


@pytest.fixture
def two_image_archive():
    return build_zip(
        [
            ("image_0.png", PNG_MAGIC + b"first"),
            ("notes.txt", b"not an image"),
            ("image_1.png", PNG_MAGIC + b"second"),
        ]
    )


@pytest.fixture
def payload():
    return ImageRequestBuilder(seed_source=lambda: 12345).set_prompt("test prompt").build_payload()


@pytest.fixture(params=["encrypted", "unknown_method"])
def unreadable_archive(request):
    data = build_zip([("image_0.png", PNG_MAGIC + b"locked")])
    if request.param == "encrypted":
        return patch_entry_headers(data, flag_bits=0x1)
    return patch_entry_headers(data, method=99)
