"""FinCommand: personal and small-business finance tracking."""

__version__ = "0.1.0"
