"""Offline curation tooling for the terrarium plant library."""

__version__ = "0.1.0"
