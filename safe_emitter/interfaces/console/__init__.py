"""Console interface for observing emitters."""

from .monitor import EmitterMonitor

__all__ = ['EmitterMonitor']
