"""Chat-bot plugin logic: emoji mixing, lookups, request handling and images."""

__version__ = "0.1.0"