"""Streaming SHA-256 digests for bundle artifacts.

Archives can be several gigabytes, so files are read through a fixed
8 KiB buffer and memory use does not grow with file size.
"""

import hashlib
import logging
from pathlib import Path
from typing import BinaryIO

logger = logging.getLogger(__name__)

DIGEST_ALGORITHM = "sha256"
READ_BUFFER_SIZE = 8192


def digest_stream(stream: BinaryIO) -> bytes:
    """Digest everything remaining in ``stream``. Read errors propagate."""
    digest = hashlib.new(DIGEST_ALGORITHM)
    buf = bytearray(READ_BUFFER_SIZE)
    view = memoryview(buf)
    while True:
        n = stream.readinto(buf)
        if not n:
            break
        digest.update(view[:n])
    return digest.digest()


def digest_file(path: Path) -> bytes:
    """Return the raw SHA-256 digest of a file's contents."""
    with path.open("rb") as f:
        return digest_stream(f)


def sha256_hex(path: Path) -> str:
    """Return the lowercase hex SHA-256 of a file's contents."""
    hex_digest = digest_file(path).hex()
    logger.debug("Digest of %s: %s", path, hex_digest)
    return hex_digest
