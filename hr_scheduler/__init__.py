"""HR interview scheduling service."""

__version__ = "0.1.0"
