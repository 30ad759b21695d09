"""NHL player database generator."""

__version__ = "0.1.0"
