"""HelixGate HTTP API."""

from helixgate.api.router import router

__all__ = ["router"]
