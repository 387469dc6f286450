"""Per-field presentation and semantic metadata.

A ``FieldOverlay`` exists for every field of every loaded schema.  When
the overlay document has no usable entry for a field, the field gets a
blank overlay: all optional attributes unset and ``is_bool`` false.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parammeta.overlay.enums import EnumTable

if TYPE_CHECKING:
    from parammeta.schema.nodes import Field


@dataclass(frozen=True)
class FieldOverlay:
    """Merged metadata for one schema field.

    Parameters
    ----------
    ref_types:
        Names of other schemas this field's value is an identifier into.
    virtual_ref:
        Cross-schema grouping key, independent of ``ref_types``.
    enum_type:
        The bound ``EnumTable``, owned by the parent ``SchemaOverlay``.
    alt_name:
        Display name overriding the internal name.
    wiki:
        Multi-line help text.
    is_bool:
        Whether an integer field should be shown as a boolean.
    """

    ref_types: tuple[str, ...] | None = None
    virtual_ref: str | None = None
    enum_type: EnumTable | None = None
    alt_name: str | None = None
    wiki: str | None = None
    is_bool: bool = False

    @classmethod
    def blank(cls) -> "FieldOverlay":
        """Return an overlay with every attribute at its default."""
        return cls()

    @classmethod
    def from_element(
        cls, element: ET.Element, enums: Mapping[str, EnumTable]
    ) -> "FieldOverlay":
        """Build an overlay from one field entry of the document.

        Each attribute is optional.  ``Refs`` is split on commas with
        surrounding whitespace trimmed and empty segments dropped; a
        ``Refs`` that names no schema leaves ``ref_types`` unset.  An
        ``Enum`` naming a table missing from ``enums`` leaves
        ``enum_type`` unset.  ``Wiki`` has the two-character sequence
        ``\\n`` turned into a line break.  ``IsBool`` is a presence flag;
        its text is ignored.
        """
        ref_types: tuple[str, ...] | None = None
        refs = element.get("Refs")
        if refs is not None:
            ref_types = _split_refs(refs) or None

        enum_type: EnumTable | None = None
        enum_name = element.get("Enum")
        if enum_name is not None:
            enum_type = enums.get(enum_name)

        wiki = element.get("Wiki")
        if wiki is not None:
            wiki = wiki.replace("\\n", "\n")

        return cls(
            ref_types=ref_types,
            virtual_ref=element.get("VRef"),
            enum_type=enum_type,
            alt_name=element.get("AltName"),
            wiki=wiki,
            is_bool=element.get("IsBool") is not None,
        )

    @property
    def is_blank(self) -> bool:
        """Return True if no attribute carries metadata."""
        return self == FieldOverlay()

    def display_name(self, field: "Field") -> str:
        """Return ``alt_name`` when set, else the field's internal name."""
        return self.alt_name if self.alt_name is not None else field.internal_name

    def enum_label(self, raw: object) -> str | None:
        """Return the enum label for ``raw``, or ``None`` without an enum."""
        if self.enum_type is None:
            return None
        return self.enum_type.label_for(raw)


def _split_refs(text: str) -> tuple[str, ...]:
    names: list[str] = []
    for segment in text.split(","):
        segment = segment.strip()
        if segment and segment not in names:
            names.append(segment)
    return tuple(names)
