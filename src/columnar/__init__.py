"""Column-based candidate line formatting for selection UIs."""

__version__ = "0.1.0"
