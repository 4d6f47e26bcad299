"""Whitespace-preserving JSON parsing and stringifying with default, pretty and minimal output."""

__version__ = "0.1.0"