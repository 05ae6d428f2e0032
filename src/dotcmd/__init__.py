"""Expand dot-notation shorthand like ``ls.all.long`` into real commands."""

__version__ = "0.1.0"
