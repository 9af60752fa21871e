"""HelixGate - zoo registry and time-series query proxy service."""

__version__ = "0.1.0"
