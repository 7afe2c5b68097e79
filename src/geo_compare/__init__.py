"""Overlay one administrative boundary on another at equal area."""

__version__ = "0.1.0"
