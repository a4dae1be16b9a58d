"""Parse ``sfdisk -d`` dump text into a :class:`Disk`.

A dump looks like::

    label: gpt
    label-id: 12345678-F226-1234-5678-E55555555555
    device: /dev/nvme0n1
    unit: sectors
    sector-size: 512

    /dev/nvme0n1p1 : start=        2048, size=      409600, type=C12A7328-...

Partition lines become :class:`Partition` records. Everything else is kept
verbatim as a header line.
"""

from __future__ import annotations

import re

from sfdisk_sort.logging import LoggerFactory
from sfdisk_sort.storage.block import DEFAULT_PATTERNS, BlockPatterns
from sfdisk_sort.storage.exceptions import (
    DumpParseError,
    MalformedDeviceLineError,
    MalformedPartitionLineError,
    MissingDeviceNameError,
    MissingHeaderLinesError,
    NumericParseError,
    UnrecognizedDeviceFamilyError,
)

from .models import Disk, Partition

log = LoggerFactory.for_parser()
line_log = LoggerFactory.for_line()

# The path must end in digits; the prefix may end in a "p" infix
# (mmcblk0p1, nvme0n1p1), which the last-non-digit rule covers.
PARTITION_LINE_PATTERN = re.compile(
    r"^\s*(?P<name>/dev/[\w/]*[^\W\d](?P<designation>\d+))"
    r"\s*:\s*start=\s*(?P<start_block>\d+)\s*,(?P<rest>.*)$",
    re.ASCII,
)

DEVICE_LINE_PATTERN = re.compile(r"^\s*device:\s+(?P<path>/dev/.*?)\s*$")
DEVICE_LINE_PREFIX = re.compile(r"^\s*device:")

# Fields are separated by ASCII whitespace only.
EXTRAS_SEPARATOR = re.compile(r"\s+", re.ASCII)


def split_dump_lines(text: str) -> list[str]:
    """Split dump text on "\\n" only, dropping one trailing "\\r" per line.

    Form feeds and Unicode line separators stay inside their line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_partition_line(line: str) -> bool:
    """Check if a line is an sfdisk partition line."""
    return PARTITION_LINE_PATTERN.match(line) is not None


def _parse_unsigned(field: str, value: str) -> int:
    if not value.isdigit():
        raise NumericParseError(field, value)
    try:
        return int(value)
    except ValueError:
        raise NumericParseError(field, value) from None


def parse_partition_line(line: str) -> Partition:
    """Parse one partition line.

    Raises:
        MalformedPartitionLineError: If the line is not a partition line or a
            required part of it is missing
        NumericParseError: If the partition number or start block is not an
            unsigned integer
    """
    match = PARTITION_LINE_PATTERN.match(line)
    if match is None:
        raise MalformedPartitionLineError(line)

    groups = match.groupdict()
    for key in ("name", "designation", "start_block", "rest"):
        if groups.get(key) is None:
            raise MalformedPartitionLineError(line, f"missing {key.replace('_', ' ')}")

    return Partition(
        designation=_parse_unsigned("partition number", groups["designation"]),
        start_block=_parse_unsigned("start block", groups["start_block"]),
        name=groups["name"],
        extras=[token for token in EXTRAS_SEPARATOR.split(groups["rest"]) if token],
    )


def is_device_line(line: str) -> bool:
    """Check if a line is the ``device: /dev/...`` header line."""
    return DEVICE_LINE_PATTERN.match(line) is not None


def parse_device_line(line: str) -> str:
    """Return the device path announced by a ``device:`` line.

    Raises:
        MalformedDeviceLineError: If the line does not announce a /dev path
    """
    match = DEVICE_LINE_PATTERN.match(line)
    if match is None or not match.group("path"):
        raise MalformedDeviceLineError(line)
    return match.group("path")


def parse_dump(text: str, patterns: BlockPatterns = DEFAULT_PATTERNS) -> Disk:
    """Parse a whole dump into a :class:`Disk`.

    Partition lines go to ``Disk.partitions``; every other line, in order, goes
    to ``Disk.header_lines``. If a dump has more than one ``device:`` line the
    first one names the disk.

    Raises:
        DumpParseError: For malformed lines, with ``line_number`` set
        MissingDeviceNameError: If the dump has no ``device:`` line
        MissingHeaderLinesError: If the dump has no header lines
        UnrecognizedDeviceFamilyError: If the device path is not a known family
    """
    header_lines: list[str] = []
    partitions: list[Partition] = []
    device_name = None
    device_line_number = None

    for line_number, line in enumerate(split_dump_lines(text), start=1):
        try:
            if is_partition_line(line):
                partition = parse_partition_line(line)
                line_log.trace(f"line {line_number}: partition {partition.name}")
                partitions.append(partition)
                continue

            header_lines.append(line)
            if is_device_line(line):
                path = parse_device_line(line)
                if device_name is None:
                    device_name = path
                    device_line_number = line_number
                    line_log.trace(f"line {line_number}: device {path}")
                else:
                    log.warning(
                        f"Ignoring extra device line {line_number} ({path}); "
                        f"using {device_name} from line {device_line_number}"
                    )
            elif DEVICE_LINE_PREFIX.match(line):
                raise MalformedDeviceLineError(line)
        except DumpParseError as error:
            error.line_number = line_number
            raise

    if device_name is None:
        raise MissingDeviceNameError()
    if not header_lines:
        raise MissingHeaderLinesError()

    try:
        disk = Disk.from_device_name(device_name, header_lines, partitions, patterns)
    except UnrecognizedDeviceFamilyError as error:
        log.debug(f"Device line {device_line_number} names an unknown family: {error}")
        raise

    log.debug(
        f"Parsed {disk.name} ({disk.family}): "
        f"{len(disk.header_lines)} header lines, {len(disk.partitions)} partitions"
    )
    return disk
