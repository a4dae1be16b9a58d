"""Sort partitions by start block and redesignate them.

Partitions that were deleted and recreated out of order end up with
designations that no longer follow their position on disk. Rearranging
sorts them by start sector and renames them ``1..n`` while keeping the
family-specific path prefix, e.g. ``/dev/nvme0n1p7`` -> ``/dev/nvme0n1p2``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sfdisk_sort.logging import LoggerFactory
from sfdisk_sort.storage.block import (
    DEFAULT_PATTERNS,
    BlockPatterns,
    DeviceFamily,
    matches_partition_path,
    split_prefix_and_number,
)
from sfdisk_sort.storage.exceptions import PartitionNameMismatchError

if TYPE_CHECKING:
    from .models import Disk, Partition

log = LoggerFactory.for_rearrange()


def redesignated_name(
    family: DeviceFamily,
    partition_name: str,
    designation: int,
    patterns: BlockPatterns = DEFAULT_PATTERNS,
) -> str:
    """Return ``partition_name`` with its partition number replaced.

    Example: ``redesignated_name(DeviceFamily.MMCBLK, "/dev/mmcblk11p2", 1)``
    returns ``"/dev/mmcblk11p1"``.
    """
    prefix, _ = split_prefix_and_number(family, partition_name, patterns)
    return f"{prefix}{designation}"


def sorted_by_start_block(partitions: list[Partition]) -> list[Partition]:
    # sorted() is stable, equal start blocks keep their dump order
    return sorted(partitions, key=lambda partition: partition.start_block)


def rearrange(disk: Disk, patterns: BlockPatterns = DEFAULT_PATTERNS) -> None:
    """Sort ``disk.partitions`` by start block and renumber them from 1.

    Only ``name`` and ``designation`` change; ``start_block`` and ``extras``
    are left as they are. All new names are computed before any partition is
    touched, so on error the disk is unchanged.

    Raises:
        PartitionNameMismatchError: If a partition name does not follow the
            disk's naming convention
        MissingPatternError: If the disk's family has no partition pattern
    """
    ordered = sorted_by_start_block(disk.partitions)

    renames: list[tuple[Partition, str, int]] = []
    for index, partition in enumerate(ordered):
        if not matches_partition_path(disk.family, partition.name, patterns):
            raise PartitionNameMismatchError(partition.name, disk.family)
        designation = index + 1
        renames.append(
            (partition, redesignated_name(disk.family, partition.name, designation, patterns), designation)
        )

    for partition, name, designation in renames:
        if partition.name != name:
            log.debug(f"Redesignating {partition.name} -> {name} (start {partition.start_block})")
        partition.name = name
        partition.designation = designation

    disk.partitions[:] = ordered
    log.debug(f"Rearranged {len(ordered)} partitions on {disk.name}")
