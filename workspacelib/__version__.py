"""Version information for workspace."""

__version__ = "0.1.0"
