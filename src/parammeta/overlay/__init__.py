"""Overlay module.

Exports the overlay types, the loader, and the error hierarchy.
"""
from __future__ import annotations

from parammeta.overlay.enums import EnumTable
from parammeta.overlay.errors import (
    DuplicateRegistrationError,
    MalformedDocumentError,
    NotRegisteredError,
    OverlayDocumentError,
    OverlayError,
    OverlayFormatError,
    VersionMismatchError,
)
from parammeta.overlay.field import FieldOverlay
from parammeta.overlay.loader import LoaderConfig, OverlayLoader
from parammeta.overlay.naming import sanitize_field_name
from parammeta.overlay.schema import XML_VERSION, SchemaOverlay

__all__ = [
    "EnumTable",
    "FieldOverlay",
    "SchemaOverlay",
    "OverlayLoader",
    "LoaderConfig",
    "sanitize_field_name",
    "XML_VERSION",
    "OverlayError",
    "OverlayDocumentError",
    "VersionMismatchError",
    "MalformedDocumentError",
    "OverlayFormatError",
    "NotRegisteredError",
    "DuplicateRegistrationError",
]
