"""Pull headings from Obsidian notes into named, re-syncable workbenches."""

__version__ = "0.1.0"
