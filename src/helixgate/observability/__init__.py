"""Observability helpers for HelixGate."""

from helixgate.observability.metrics import MetricsRegistry, metrics

__all__ = ["MetricsRegistry", "metrics"]
