"""Rendering and document post-processing."""

from .markers import MARKER, MarkerError, PersistenceError, VersionDocument
from .render import ReleaseRenderer

__all__ = ["MARKER", "MarkerError", "PersistenceError", "ReleaseRenderer", "VersionDocument"]
