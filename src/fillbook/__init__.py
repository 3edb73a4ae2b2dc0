"""Order book fixtures for a standalone rippled."""

__version__ = "0.1.0"
