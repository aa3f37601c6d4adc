"""
Exception types shared across the rendering engine.
"""


class ConfigurationError(ValueError):
    """Render-wide configuration mismatch detected before any pixel work."""
