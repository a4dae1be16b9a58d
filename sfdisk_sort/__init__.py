"""Re-number and re-sort sfdisk partition table dumps."""

from .__version__ import __version__

__all__ = ["__version__"]
