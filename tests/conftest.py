import struct
import zlib

import pytest


def _chunk(cid: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + cid + data + struct.pack(">I", zlib.crc32(cid + data) & 0xFFFFFFFF)


@pytest.fixture
def broken_png() -> bytes:
    """16x16 RGB PNG whose image data runs into a chunk with a corrupt type."""
    rows = b"".join(
        b"\x00" + bytes((x * 37 + y * 11 + c * 53) % 256 for x in range(16) for c in range(3))
        for y in range(16)
    )
    compressed = zlib.compress(rows)
    header = struct.pack(">IIBBBBB", 16, 16, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _chunk(b"IHDR", header)
        + _chunk(b"IDAT", compressed[: len(compressed) // 2])
        + _chunk(b"\x9fEND", b"")
    )
