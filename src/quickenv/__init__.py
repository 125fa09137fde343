"""quickenv - named environment-variable presets for your shell."""

__version__ = "0.3.0"
