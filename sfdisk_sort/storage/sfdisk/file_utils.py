"""Read dump text from files and streams."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Union

from sfdisk_sort.storage.exceptions import DumpReadError

BINARY_SNIFF_BYTES = 1024


def decode_dump(data: bytes, source: str) -> str:
    """Decode dump bytes, rejecting binary data such as a raw MBR or GPT copy."""
    if b"\x00" in data[:BINARY_SNIFF_BYTES]:
        raise DumpReadError(source, "input looks like binary data, not an sfdisk dump")
    return data.decode("utf-8", errors="replace")


def read_dump(path: Path) -> str:
    """Read a dump from a file."""
    try:
        data = path.read_bytes()
    except OSError as error:
        raise DumpReadError(str(path), error.strerror or str(error)) from error
    return decode_dump(data, str(path))


def read_dump_stream(stream: IO, source: str = "<stdin>") -> str:
    """Read a dump from an open stream (text or binary, e.g. ``sys.stdin``)."""
    binary = getattr(stream, "buffer", stream)
    try:
        data: Union[bytes, str] = binary.read()
    except OSError as error:
        raise DumpReadError(source, error.strerror or str(error)) from error
    if isinstance(data, str):
        data = data.encode("utf-8")
    return decode_dump(data, source)
