"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/index_store.py
Persists the fingerprint index between runs.

FILE FORMAT (little-endian)
---------------------------
    magic     4s   b"DSIX"
    version   H    FORMAT_VERSION
    count     I    number of records
    records        count × (fingerprint Q, path_len I, path bytes)
    digest    8s   xxh64 of everything above

Paths are stored as UTF-8; bytes of non-UTF-8 file names are kept as-is
(surrogateescape), so such names survive a round trip.

A missing file means "no prior state". Any file that fails to parse or
whose digest does not match is discarded and the run starts empty.
"""
import logging
import os
import struct
import tempfile
from typing import Optional

import xxhash

from dupesniff.core.index import DuplicateIndex
from dupesniff.core.models import FileRecord

logger = logging.getLogger(__name__)

MAGIC = b"DSIX"
FORMAT_VERSION = 1

_HEADER = struct.Struct("<4sHI")
_RECORD = struct.Struct("<QI")
_DIGEST_SIZE = 8


class IndexFormatError(ValueError):
    """Raised when persisted index bytes cannot be decoded."""


class IndexStore:

    @staticmethod
    def encode(index: DuplicateIndex, prune_missing: bool = False) -> bytes:
        body = bytearray()
        count = 0
        for fingerprint, record in index.items():
            if prune_missing and not os.path.exists(record.path):
                logger.debug(f"Not persisting missing file: {record.path}")
                continue
            path_bytes = record.path.encode("utf-8", "surrogateescape")
            body += _RECORD.pack(fingerprint, len(path_bytes))
            body += path_bytes
            count += 1

        payload = _HEADER.pack(MAGIC, FORMAT_VERSION, count) + bytes(body)
        return payload + xxhash.xxh64(payload).digest()

    @staticmethod
    def decode(data: bytes) -> DuplicateIndex:
        """Parses index bytes; raises IndexFormatError on any inconsistency."""
        if len(data) < _HEADER.size + _DIGEST_SIZE:
            raise IndexFormatError("Index file is truncated")

        payload, digest = data[:-_DIGEST_SIZE], data[-_DIGEST_SIZE:]
        magic, version, count = _HEADER.unpack_from(payload, 0)
        if magic != MAGIC:
            raise IndexFormatError("Not a dupesniff index file")
        if version != FORMAT_VERSION:
            raise IndexFormatError(f"Unsupported index version: {version}")
        if xxhash.xxh64(payload).digest() != digest:
            raise IndexFormatError("Index checksum mismatch")

        index = DuplicateIndex()
        pos = _HEADER.size
        for _ in range(count):
            if pos + _RECORD.size > len(payload):
                raise IndexFormatError("Index record is truncated")
            fingerprint, path_len = _RECORD.unpack_from(payload, pos)
            pos += _RECORD.size
            path_bytes = payload[pos:pos + path_len]
            if len(path_bytes) != path_len:
                raise IndexFormatError("Index path is truncated")
            pos += path_len
            if not path_bytes or b"\x00" in path_bytes:
                raise IndexFormatError("Invalid path in index record")
            path = path_bytes.decode("utf-8", "surrogateescape")
            index.put_if_absent(fingerprint, FileRecord(path))

        if pos != len(payload):
            raise IndexFormatError("Trailing bytes after last record")
        return index

    @staticmethod
    def load(index_path: str) -> Optional[DuplicateIndex]:
        """
        Returns the persisted index, or None when there is nothing usable.
        """
        if not os.path.exists(index_path):
            logger.info(f"No index at {index_path}, skipping preload")
            return None

        try:
            with open(index_path, "rb") as f:
                data = f.read()
            index = IndexStore.decode(data)
        except (OSError, IndexFormatError) as e:
            logger.warning(f"Discarding unreadable index {index_path}: {e}")
            return None

        logger.info(f"Loaded index with {len(index)} entries from {index_path}")
        return index

    @staticmethod
    def save(index_path: str, index: DuplicateIndex, prune_missing: bool = True) -> int:
        """
        Writes the index, replacing any previous file at the same path.
        Returns the number of entries written.
        """
        data = IndexStore.encode(index, prune_missing=prune_missing)
        directory = os.path.dirname(os.path.abspath(index_path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".dupesniff-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, index_path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        written = _HEADER.unpack_from(data, 0)[2]
        logger.info(f"Saved index with {written} entries to {index_path}")
        return written
