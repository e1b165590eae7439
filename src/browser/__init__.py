"""Text-only web page viewer."""

__version__ = "0.1.0"
