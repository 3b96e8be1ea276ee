"""Unit tests for streaming SHA-256 digests."""

import hashlib
import io
from pathlib import Path

import pytest

from bundler.packaging import digest as digest_module
from bundler.packaging.digest import READ_BUFFER_SIZE, digest_file, digest_stream, sha256_hex

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class _FailingStream(io.RawIOBase):
    """Returns one chunk then fails, like a file on a dying disk."""

    def __init__(self):
        self.calls = 0

    def readable(self):
        return True

    def readinto(self, b):
        self.calls += 1
        if self.calls == 1:
            b[:3] = b"abc"
            return 3
        raise OSError("read failed")


class TestDigest:
    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert sha256_hex(path) == EMPTY_SHA256

    def test_known_value(self, tmp_path):
        path = tmp_path / "abc"
        path.write_bytes(b"abc")
        assert sha256_hex(path) == ABC_SHA256

    def test_hex_is_lowercase_and_fixed_length(self, tmp_path):
        path = tmp_path / "f"
        path.write_bytes(b"\xff" * 10)
        hex_digest = sha256_hex(path)
        assert len(hex_digest) == 64
        assert hex_digest == hex_digest.lower()

    def test_multi_chunk_file(self, tmp_path):
        data = bytes(range(256)) * (READ_BUFFER_SIZE // 64 + 3)
        path = tmp_path / "big"
        path.write_bytes(data)

        assert len(data) > READ_BUFFER_SIZE * 2
        assert digest_file(path) == hashlib.sha256(data).digest()

    def test_single_byte_change_changes_digest(self, tmp_path):
        a = tmp_path / "a"
        b = tmp_path / "b"
        a.write_bytes(b"hello world")
        b.write_bytes(b"hello worle")
        assert sha256_hex(a) != sha256_hex(b)

    def test_stream(self):
        assert digest_stream(io.BytesIO(b"abc")).hex() == ABC_SHA256

    def test_read_error_propagates(self):
        with pytest.raises(OSError, match="read failed"):
            digest_stream(_FailingStream())

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            digest_file(tmp_path / "missing")

    def test_file_closed_on_error(self, tmp_path, monkeypatch):
        path = tmp_path / "f"
        path.write_bytes(b"data")
        opened = []
        real_open = Path.open

        def tracking_open(self, *args, **kwargs):
            f = real_open(self, *args, **kwargs)
            if self == path:
                opened.append(f)
            return f

        def boom(stream):
            raise OSError("device error")

        monkeypatch.setattr(Path, "open", tracking_open)
        monkeypatch.setattr(digest_module, "digest_stream", boom)

        with pytest.raises(OSError, match="device error"):
            digest_file(path)

        assert len(opened) == 1
        assert opened[0].closed
