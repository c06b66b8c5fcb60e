"""Implementation package for BaselineKit. Library users import ``baselinekit``."""

__version__ = "0.1.0"
