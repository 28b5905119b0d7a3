"""CVSS v2 and v3.0 scoring, NVD feed reading, version comparison and an LRU eviction queue."""

__version__ = "0.1.0"