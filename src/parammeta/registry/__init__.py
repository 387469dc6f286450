"""Registry subsystem for parammeta.

The registry module holds the identity maps from schema and field
objects to their loaded overlays.
"""
from __future__ import annotations

from parammeta.registry.registry import OverlayRegistry

__all__ = ["OverlayRegistry"]
