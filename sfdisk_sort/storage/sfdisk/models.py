"""Data models for sfdisk dumps."""

from __future__ import annotations

from dataclasses import dataclass, field

from sfdisk_sort.storage.block import DEFAULT_PATTERNS, BlockPatterns, DeviceFamily, classify
from sfdisk_sort.storage.exceptions import UnrecognizedDeviceFamilyError

from .rearrange import rearrange as rearrange_disk


@dataclass
class Partition:
    """One partition line of a dump.

    ``extras`` holds every token after ``start=<N>,`` exactly as it was
    split on whitespace, trailing commas included.
    """

    designation: int
    start_block: int
    name: str
    extras: list[str] = field(default_factory=list)

    def to_line(self) -> str:
        """Render in ``sfdisk -d`` format, e.g. ``/dev/sda1 : start= 2048, size= 4096,``."""
        return f"{self.name} : start= {self.start_block}, {' '.join(self.extras)}"


@dataclass
class Disk:
    """A whole dump: header lines plus partitions.

    ``header_lines`` keeps every non-partition line in its original order,
    including the ``device:`` line and blank separators.
    """

    name: str
    family: DeviceFamily
    header_lines: list[str]
    partitions: list[Partition] = field(default_factory=list)

    @classmethod
    def from_device_name(
        cls,
        name: str,
        header_lines: list[str],
        partitions: list[Partition],
        patterns: BlockPatterns = DEFAULT_PATTERNS,
    ) -> Disk:
        """Build a disk, deriving its family from the device path.

        Raises:
            UnrecognizedDeviceFamilyError: If ``name`` matches no family
        """
        family = classify(name, patterns)
        if family is None:
            raise UnrecognizedDeviceFamilyError(name)
        return cls(
            name=name,
            family=family,
            header_lines=list(header_lines),
            partitions=list(partitions),
        )

    def rearrange(self, patterns: BlockPatterns = DEFAULT_PATTERNS) -> None:
        """Sort partitions by start block and renumber them from 1."""
        rearrange_disk(self, patterns)

    def is_ordered(self) -> bool:
        """True if partitions are already sorted by start block and numbered 1..n."""
        previous_start = -1
        for index, partition in enumerate(self.partitions, start=1):
            if partition.start_block < previous_start or partition.designation != index:
                return False
            previous_start = partition.start_block
        return True

    def to_lines(self) -> list[str]:
        return [*self.header_lines, *(partition.to_line() for partition in self.partitions)]

    def to_text(self) -> str:
        """Render the disk back to dump text, one line per entry."""
        return "".join(f"{line}\n" for line in self.to_lines())
