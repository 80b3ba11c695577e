"""Exceptions raised by termraster."""


class ConfigurationError(ValueError):
    """Raised for an invalid mode, geometry, aspect ratio or strategy name."""
