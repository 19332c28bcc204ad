"""Rocksmith Toolkit - decode PSARC archives and their song manifests."""

__version__ = "0.1.0"
