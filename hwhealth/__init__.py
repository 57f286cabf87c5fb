"""Point-in-time hardware health assessment."""

__version__ = "0.1.0"
