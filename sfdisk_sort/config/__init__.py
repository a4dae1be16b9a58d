"""Configuration for sfdisk-sort."""
