"""Inspect and merge CycloneDX software bills of materials in JSON form."""

__version__ = "0.1.0"