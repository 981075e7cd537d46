"""Idea Terminal: analytics over idea submission logs."""

__version__ = "0.1.0"
