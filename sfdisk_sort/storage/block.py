"""Linux block device naming families.

Each family encodes the partition number differently in a device path:

- SCSI/ATA/SATA (``/dev/sda3``) and virtio (``/dev/vda3``) append the digits
  directly to the disk name.
- eMMC/SD (``/dev/mmcblk0p3``) and NVMe (``/dev/nvme0n1p3``) put a literal
  ``p`` between the disk name and the partition digits.

The family therefore has to be known before a partition path can be split
into its prefix and partition number.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from .exceptions import MissingPatternError, PartitionPathError


class DeviceFamily(Enum):
    """Block device naming convention."""

    SCSI = "SCSI"  # SCSI, ATA and SATA
    VIRT = "VIRT"  # virtio, e.g. /dev/vdX and /dev/xvdX
    MMCBLK = "MMCBLK"  # eMMC, SD cards and other flash
    NVME = "NVME"

    def __str__(self) -> str:
        return self.value


# Classification order; the families never overlap, the order only keeps
# results deterministic.
FAMILY_ORDER = (
    DeviceFamily.SCSI,
    DeviceFamily.VIRT,
    DeviceFamily.MMCBLK,
    DeviceFamily.NVME,
)

DEVICE_NAME_PATTERNS = {
    DeviceFamily.SCSI: r"sd[a-z]",
    DeviceFamily.VIRT: r"vd[a-z]",
    DeviceFamily.MMCBLK: r"mmcblk\d+",
    DeviceFamily.NVME: r"nvme\d+n\d+",
}

# The prefix group includes the "p" infix for mmcblk and nvme.
PARTITION_PATH_PATTERNS = {
    DeviceFamily.SCSI: r"(?P<prefix>/dev/sd[a-z]+)(?P<number>\d+)",
    DeviceFamily.VIRT: r"(?P<prefix>/dev/x?vd[a-z]+)(?P<number>\d+)",
    DeviceFamily.MMCBLK: r"(?P<prefix>/dev/mmcblk\d+p)(?P<number>\d+)",
    DeviceFamily.NVME: r"(?P<prefix>/dev/nvme\d+n\d+p)(?P<number>\d+)",
}


@dataclass(frozen=True)
class BlockPatterns:
    """Compiled, read-only pattern tables keyed by device family.

    Built once at import time as ``DEFAULT_PATTERNS`` and shared by every
    caller; nothing mutates it afterwards.
    """

    device: Mapping[DeviceFamily, re.Pattern[str]]
    partition: Mapping[DeviceFamily, re.Pattern[str]]

    @classmethod
    def compile(
        cls,
        device_patterns: Mapping[DeviceFamily, str] = DEVICE_NAME_PATTERNS,
        partition_patterns: Mapping[DeviceFamily, str] = PARTITION_PATH_PATTERNS,
    ) -> BlockPatterns:
        return cls(
            device=MappingProxyType(
                {family: re.compile(pattern, re.ASCII) for family, pattern in device_patterns.items()}
            ),
            partition=MappingProxyType(
                {family: re.compile(pattern, re.ASCII) for family, pattern in partition_patterns.items()}
            ),
        )

    def partition_pattern(self, family: DeviceFamily) -> re.Pattern[str]:
        try:
            return self.partition[family]
        except KeyError:
            raise MissingPatternError(family) from None


DEFAULT_PATTERNS = BlockPatterns.compile()


def classify(device_name: str, patterns: BlockPatterns = DEFAULT_PATTERNS) -> Optional[DeviceFamily]:
    """Return the family whose device name pattern occurs in ``device_name``.

    Returns None when no family recognizes it, e.g. ``/dev/sd1`` or
    ``/dev/nvme1``.
    """
    for family in FAMILY_ORDER:
        pattern = patterns.device.get(family)
        if pattern is not None and pattern.search(device_name):
            return family
    return None


def matches_partition_path(
    family: DeviceFamily,
    partition_name: str,
    patterns: BlockPatterns = DEFAULT_PATTERNS,
) -> bool:
    """Check whether ``partition_name`` is a valid partition path for ``family``."""
    return patterns.partition_pattern(family).fullmatch(partition_name) is not None


def split_prefix_and_number(
    family: DeviceFamily,
    partition_name: str,
    patterns: BlockPatterns = DEFAULT_PATTERNS,
) -> tuple[str, str]:
    """Split a partition path into its prefix and partition number.

    Example:
        split_prefix_and_number(DeviceFamily.SCSI, "/dev/sda1000")
        -> ("/dev/sda", "1000")
        split_prefix_and_number(DeviceFamily.MMCBLK, "/dev/mmcblk10p20")
        -> ("/dev/mmcblk10p", "20")

    Raises:
        PartitionPathError: If the path does not have the family's shape
        MissingPatternError: If the family has no registered pattern
    """
    match = patterns.partition_pattern(family).fullmatch(partition_name)
    if match is None:
        raise PartitionPathError(family, partition_name)

    groups = match.groupdict()
    prefix = groups.get("prefix")
    if prefix is None:
        raise PartitionPathError(family, partition_name, "missing prefix")
    number = groups.get("number")
    if number is None:
        raise PartitionPathError(family, partition_name, "missing partition number")

    return prefix, number
