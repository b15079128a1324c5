"""Admin HTTP API for managing catalog products."""

__version__ = "0.1.0"
