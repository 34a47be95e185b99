"""Archivarr: compress aged log files into an archive directory."""

__version__ = "1.0.0"
