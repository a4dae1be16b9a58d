"""sfdisk dump parsing, partition renumbering and rendering.

Main Functions:
    - parse_dump(): Parse dump text into a Disk
    - Disk.rearrange(): Sort partitions by start block and renumber them
    - read_dump() / read_dump_stream(): Read dump text from a file or stream

Data Models:
    - Disk: Header lines plus partitions of one dump
    - Partition: One partition line
"""
from .file_utils import read_dump, read_dump_stream
from .models import Disk, Partition
from .parser import (
    is_device_line,
    is_partition_line,
    parse_device_line,
    parse_dump,
    parse_partition_line,
)
from .rearrange import redesignated_name

__all__ = [
    # Main functions
    "parse_dump",
    "read_dump",
    "read_dump_stream",
    # Line helpers
    "is_device_line",
    "is_partition_line",
    "parse_device_line",
    "parse_partition_line",
    "redesignated_name",
    # Data models
    "Disk",
    "Partition",
]
