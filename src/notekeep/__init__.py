"""Notekeep - notes and categories with a pluggable storage repository."""

__version__ = "0.1.0"
