"""
Pytest configuration and shared fixtures for sfdisk-sort tests.

This module provides sample dumps used across all test modules.
"""

import pytest
from loguru import logger

from sfdisk_sort.config import settings


# ==============================================================================
# Sample Dumps
# ==============================================================================

GPT_HEADER = """label: gpt
label-id: 12345678-F226-1234-5678-E55555555555
device: /dev/sda
unit: sectors
first-lba: 2048
last-lba: 60088286
sector-size: 512
"""

UNSORTED_SDA_DUMP = GPT_HEADER + """
/dev/sda1 : start=     1050624, size=     2097152, type=0FC63DAF-8483-4772-8E79-3D69D8477DE4, uuid=11111111-BBBB-CCCC-DDDD-EEEEEEEEEEEE
/dev/sda2 : start=        2048, size=     1048576, type=C12A7328-F81F-11D2-BA4B-00A0C93EC93B, uuid=22222222-BBBB-CCCC-DDDD-EEEEEEEEEEEE, name="EFI System"
/dev/sda3 : start=     3147776, size=    56940511, type=0FC63DAF-8483-4772-8E79-3D69D8477DE4, uuid=33333333-BBBB-CCCC-DDDD-EEEEEEEEEEEE
"""

SORTED_SDA_DUMP = GPT_HEADER + """
/dev/sda1 : start= 2048, size= 1048576, type=C12A7328-F81F-11D2-BA4B-00A0C93EC93B, uuid=22222222-BBBB-CCCC-DDDD-EEEEEEEEEEEE, name="EFI System"
/dev/sda2 : start= 1050624, size= 2097152, type=0FC63DAF-8483-4772-8E79-3D69D8477DE4, uuid=11111111-BBBB-CCCC-DDDD-EEEEEEEEEEEE
/dev/sda3 : start= 3147776, size= 56940511, type=0FC63DAF-8483-4772-8E79-3D69D8477DE4, uuid=33333333-BBBB-CCCC-DDDD-EEEEEEEEEEEE
"""

NVME_DUMP = """label: gpt
label-id: 12345678-F226-1234-5678-E55555555555
device: /dev/nvme0n1
unit: sectors
first-lba: 34
last-lba: 1000215182
sector-size: 512

/dev/nvme0n1p3 : start=     1050624, size=   999164559, type=0FC63DAF-8483-4772-8E79-3D69D8477DE4, uuid=33333333-BBBB-CCCC-DDDD-EEEEEEEEEEEE
/dev/nvme0n1p12 : start=        2048, size=     1048576, type=C12A7328-F81F-11D2-BA4B-00A0C93EC93B, uuid=CCCCCCCC-BBBB-CCCC-DDDD-EEEEEEEEEEEE
"""

MMCBLK_DUMP = """label: dos
label-id: 0x12345678
device: /dev/mmcblk0
unit: sectors
sector-size: 512

/dev/mmcblk0p2 : start=      532480, size=    61702144, type=83
/dev/mmcblk0p1 : start=        8192, size=      524288, type=c, bootable
"""


@pytest.fixture
def unsorted_sda_dump() -> str:
    """Dump whose partition numbers do not follow their start sectors."""
    return UNSORTED_SDA_DUMP


@pytest.fixture
def sorted_sda_dump() -> str:
    """The same partitions as ``unsorted_sda_dump`` after sorting, single-spaced."""
    return SORTED_SDA_DUMP


@pytest.fixture
def nvme_dump() -> str:
    return NVME_DUMP


@pytest.fixture
def mmcblk_dump() -> str:
    return MMCBLK_DUMP


@pytest.fixture
def dump_file(tmp_path, unsorted_sda_dump):
    """Unsorted dump written to a temporary file."""
    path = tmp_path / "sda.dump"
    path.write_text(unsorted_sda_dump)
    return path


# ==============================================================================
# Global State Fixtures
# ==============================================================================


@pytest.fixture
def default_settings(monkeypatch):
    """Run with default settings regardless of the user's settings file."""
    monkeypatch.setattr(
        settings.settings_store, "values", dict(settings.DEFAULT_SETTINGS)
    )
    return settings.settings_store.values


@pytest.fixture
def log_records():
    """Capture loguru records in a list."""
    logger.remove()
    records: list[dict] = []
    logger.add(lambda message: records.append(message.record), level="TRACE")
    return records


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added during a test so they do not outlive pytest capture."""
    yield
    logger.remove()
