"""OpenSubtitles-style file hash: size plus the 64-bit sum of the head and tail chunks."""

from __future__ import annotations

import os
import struct
from pathlib import Path
from typing import BinaryIO

CHUNK_SIZE = 65536

_WORDS_PER_CHUNK = CHUNK_SIZE // 8
_UINT64_MASK = (1 << 64) - 1
_CHUNK_FORMAT = f"<{_WORDS_PER_CHUNK}Q"


def _read_chunk(fileobj: BinaryIO, offset: int) -> bytes:
    fileobj.seek(offset)
    data = fileobj.read(CHUNK_SIZE)
    if len(data) != CHUNK_SIZE:
        raise OSError(f"invalid read {len(data)}")
    return data


def hash_file(fileobj: BinaryIO) -> int:
    """Return the hash of an open binary file; raise ValueError if it is under 64 KiB."""
    size = fileobj.seek(0, os.SEEK_END)
    if size < CHUNK_SIZE:
        raise ValueError("file is too small")

    head = _read_chunk(fileobj, 0)
    tail = _read_chunk(fileobj, size - CHUNK_SIZE)
    total = sum(struct.unpack(_CHUNK_FORMAT, head)) + sum(struct.unpack(_CHUNK_FORMAT, tail))
    return (total + size) & _UINT64_MASK


def hash_path(path: str | os.PathLike[str]) -> int:
    """Return the hash of the file at ``path``."""
    with Path(path).open("rb") as fileobj:
        return hash_file(fileobj)