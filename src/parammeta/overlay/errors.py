"""Error types raised while reading overlay documents and registering overlays.

Document-quality errors (``OverlayDocumentError`` and its subclasses) are
always caught inside the loader and turned into blank metadata plus a
diagnostic.  Registry errors describe caller misuse and propagate.
"""
from __future__ import annotations


class OverlayError(Exception):
    """Base class for all parammeta errors."""


class OverlayDocumentError(OverlayError):
    """An overlay document, or one node inside it, cannot be used."""


class VersionMismatchError(OverlayDocumentError):
    """Raised when a document declares a format version this loader does not read."""

    def __init__(self, found: int, expected: int) -> None:
        self.found = found
        self.expected = expected
        super().__init__(
            f"Mismatched XML version; current version: {expected}, file version: {found}"
        )


class MalformedDocumentError(OverlayDocumentError):
    """Raised when a required element or attribute is missing or unusable."""


class OverlayFormatError(OverlayDocumentError, ValueError):
    """Raised when an attribute that must hold an integer does not."""

    def __init__(self, attribute: str, text: str) -> None:
        self.attribute = attribute
        self.text = text
        super().__init__(f"Attribute {attribute!r} must be an integer, got {text!r}")


class NotRegisteredError(OverlayError, KeyError):
    """Raised when an overlay is requested for an object that was never loaded."""

    def __init__(self, kind: str, obj: object) -> None:
        self.kind = kind
        self.obj = obj
        super().__init__(
            f"No {kind} overlay is registered for {obj!r}. "
            "Load the schema through the same registry before querying it."
        )

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateRegistrationError(OverlayError, ValueError):
    """Raised when a schema or field is registered a second time."""

    def __init__(self, kind: str, obj: object) -> None:
        self.kind = kind
        self.obj = obj
        super().__init__(
            f"A {kind} overlay is already registered for {obj!r}. "
            "Each schema may be loaded only once per registry."
        )
