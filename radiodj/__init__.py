"""Collaborative radio station service."""

__version__ = "0.1.0"
