"""Geocoin: collect coins from caches scattered over a deterministic world grid."""

__version__ = "0.1.0"
