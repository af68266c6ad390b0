"""UpdateKit: low-level filesystem operations for application updaters."""

__version__ = "0.1.0"
