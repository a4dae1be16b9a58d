"""Custom exceptions for sfdisk dump processing.

This module defines a hierarchy of exceptions so callers can tell apart
unknown device names, malformed dump text and failures while renumbering.

Exception Hierarchy:
    SfdiskSortError (base)
        ├── DeviceFamilyError
        │   ├── UnrecognizedDeviceFamilyError
        │   ├── PartitionPathError
        │   └── MissingPatternError
        ├── DumpParseError
        │   ├── MalformedPartitionLineError
        │   ├── MalformedDeviceLineError
        │   ├── NumericParseError
        │   ├── MissingDeviceNameError
        │   └── MissingHeaderLinesError
        ├── RearrangeError
        │   └── PartitionNameMismatchError
        └── DumpReadError

Usage:
    from sfdisk_sort.storage.exceptions import UnrecognizedDeviceFamilyError

    if family is None:
        raise UnrecognizedDeviceFamilyError(device_name)
"""

from __future__ import annotations

from typing import Optional


class SfdiskSortError(Exception):
    """Base exception for all dump processing errors."""



class DeviceFamilyError(SfdiskSortError):
    """Base exception for device naming errors."""



class UnrecognizedDeviceFamilyError(DeviceFamilyError):
    """Device path does not belong to any known block device family."""

    def __init__(self, device_name: str):
        self.device_name = device_name
        super().__init__(
            f"Unrecognized block device name: {device_name} "
            f"(expected sdX, vdX, mmcblkN or nvmeNnM)"
        )


class PartitionPathError(DeviceFamilyError):
    """Partition path does not have the shape its device family expects."""

    def __init__(self, family: object, partition_name: str, reason: str = ""):
        self.family = family
        self.partition_name = partition_name
        self.reason = reason
        msg = f"Failed to match {family} prefix and partition number for {partition_name}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class MissingPatternError(DeviceFamilyError):
    """No partition pattern is registered for a device family."""

    def __init__(self, family: object):
        self.family = family
        super().__init__(f"No partition pattern registered for {family}")


class DumpParseError(SfdiskSortError):
    """Base exception for errors in dump text.

    ``line_number`` is 1-based and filled in by the dump assembler once it
    knows which line failed.
    """

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.message = message
        self.line_number = line_number
        super().__init__(message)

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class MalformedPartitionLineError(DumpParseError):
    """Line is not a valid sfdisk partition line."""

    def __init__(self, line: str, reason: str = "does not match partition line format"):
        self.line = line
        self.reason = reason
        super().__init__(f"Bad partition line ({reason}): {line!r}")


class MalformedDeviceLineError(DumpParseError):
    """Line is not a valid ``device:`` header line."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Bad device line: {line!r}")


class NumericParseError(DumpParseError):
    """A numeric field could not be converted to an integer."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Failed to parse {field} {value!r} as an unsigned integer")


class MissingDeviceNameError(DumpParseError):
    """Dump has no ``device:`` line."""

    def __init__(self):
        super().__init__("Dump does not contain a 'device: /dev/...' line")


class MissingHeaderLinesError(DumpParseError):
    """Dump has no header lines at all."""

    def __init__(self):
        super().__init__("Dump does not contain any header lines")


class RearrangeError(SfdiskSortError):
    """Base exception for partition renumbering errors."""



class PartitionNameMismatchError(RearrangeError):
    """Partition name does not follow its disk's naming convention."""

    def __init__(self, partition_name: str, family: object):
        self.partition_name = partition_name
        self.family = family
        super().__init__(
            f"Partition {partition_name} does not match {family} partition naming"
        )


class DumpReadError(SfdiskSortError):
    """Dump input could not be read or is not text."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read dump from {source}: {reason}")
