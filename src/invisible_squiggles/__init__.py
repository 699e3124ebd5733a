"""Toggle editor diagnostic squiggles by rewriting theme color overrides."""

__version__ = "0.1.0"
