"""Local prompt library with fuzzy name resolution."""

__version__ = "0.1.0"
