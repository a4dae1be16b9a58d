"""Block device naming and sfdisk dump handling."""
