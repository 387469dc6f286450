"""Per-schema overlay: document reading and field matching.

Document format
---------------
::

    <PARAMMETA XmlVersion="0">
      <Self OffsetSize="N" AlternativeOrder="f1,f2,..."/>
      <Enums>
        <Enum Name="...">
          <Option Value="raw" Name="label"/>
        </Enum>
      </Enums>
      <Field>
        <sanitized_name Refs="A,B" VRef="key" Enum="Name"
                        AltName="..." Wiki="line1\\nline2" IsBool=""/>
      </Field>
    </PARAMMETA>

Matching contract
-----------------
Each schema field is looked up under ``sanitize_field_name(internal_name)``.
When several fields share a key, the first field takes the first entry
filed under that key (in document order, across every ``<Field>``
container), the second field takes the second entry, and so on.  Authors
of documents for schemas with repeated names must therefore list the
entries in schema order.  Entries beyond the number of fields with that
key are ignored and reported.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from parammeta.diagnostics import DiagnosticCode, DiagnosticSeverity, LoadDiagnostic
from parammeta.overlay.enums import EnumTable
from parammeta.overlay.errors import (
    MalformedDocumentError,
    OverlayFormatError,
    VersionMismatchError,
)
from parammeta.overlay.field import FieldOverlay
from parammeta.overlay.naming import sanitize_field_name
from parammeta.schema.nodes import Field, Schema, schema_name

logger = logging.getLogger(__name__)

#: The only document format version this loader reads.
XML_VERSION = 0

ROOT_TAG = "PARAMMETA"


@dataclass(frozen=True, eq=False)
class SchemaOverlay:
    """Merged metadata for one schema.

    Parameters
    ----------
    schema:
        The schema this overlay was built for.
    field_overlays:
        One ``FieldOverlay`` per schema field, in schema order.
    offset_size:
        Max value of the trailing digits used for row offsets, plus one.
    alternate_order:
        Field names in display order.  Presentation only.
    enums:
        Enum tables declared by the document, keyed by name.
    diagnostics:
        Everything the load degraded or ignored.
    loaded_from_document:
        False for the all-blank fallback.
    """

    schema: Schema
    field_overlays: tuple[FieldOverlay, ...]
    offset_size: int | None = None
    alternate_order: tuple[str, ...] | None = None
    enums: Mapping[str, EnumTable] = field(default_factory=dict)
    diagnostics: tuple[LoadDiagnostic, ...] = ()
    loaded_from_document: bool = False

    def __post_init__(self) -> None:
        if len(self.field_overlays) != len(self.schema.fields):
            raise ValueError(
                f"Expected {len(self.schema.fields)} field overlay(s), "
                f"got {len(self.field_overlays)}"
            )
        object.__setattr__(self, "enums", MappingProxyType(dict(self.enums)))

    def __repr__(self) -> str:
        return (
            f"SchemaOverlay(schema={schema_name(self.schema)!r}, "
            f"fields={len(self.field_overlays)}, enums={sorted(self.enums)}, "
            f"loaded_from_document={self.loaded_from_document})"
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def blank(
        cls, schema: Schema, diagnostics: Sequence[LoadDiagnostic] = ()
    ) -> "SchemaOverlay":
        """Return the all-defaults overlay: a blank ``FieldOverlay`` per field."""
        return cls(
            schema=schema,
            field_overlays=tuple(FieldOverlay.blank() for _ in schema.fields),
            diagnostics=tuple(diagnostics),
        )

    @classmethod
    def from_bytes(
        cls, data: bytes, schema: Schema, *, report_unmatched: bool = True
    ) -> "SchemaOverlay":
        """Parse ``data`` as an overlay document and merge it onto ``schema``.

        Raises
        ------
        xml.etree.ElementTree.ParseError
            If ``data`` is not well-formed XML.
        MalformedDocumentError
            If the XML declaration names an encoding the parser cannot read.
        OverlayDocumentError
            If the document as a whole is unusable.
        """
        try:
            root = ET.fromstring(data)
        except (ValueError, LookupError) as exc:
            raise MalformedDocumentError(f"Cannot decode document: {exc}") from exc
        return cls.from_document(root, schema, report_unmatched=report_unmatched)

    @classmethod
    def from_document(
        cls, root: ET.Element, schema: Schema, *, report_unmatched: bool = True
    ) -> "SchemaOverlay":
        """Merge a parsed document onto ``schema``.

        Problems confined to one enum or one field entry are recorded as
        diagnostics and degrade that item only.

        Raises
        ------
        VersionMismatchError
            If ``XmlVersion`` is not ``XML_VERSION``.
        MalformedDocumentError
            If the root element or its version attribute is missing.
        OverlayFormatError
            If ``XmlVersion`` or ``OffsetSize`` is not an integer.
        """
        _check_version(root)
        diagnostics: list[LoadDiagnostic] = []

        offset_size, alternate_order = _read_self(root.find("Self"))
        enums = _read_enums(root, diagnostics)
        entries = _index_entries(root)

        occurrences: dict[str, int] = {}
        overlays = [
            _match_field(f, index, entries, occurrences, enums, diagnostics)
            for index, f in enumerate(schema.fields)
        ]

        if report_unmatched:
            for key, nodes in entries.items():
                for extra in range(occurrences.get(key, 0), len(nodes)):
                    diagnostics.append(
                        LoadDiagnostic(
                            severity=DiagnosticSeverity.INFORMATION,
                            code=DiagnosticCode.UNMATCHED_ENTRY,
                            message=f"Entry #{extra} filed under <{key}> matches no field",
                            field_name=key,
                        )
                    )

        return cls(
            schema=schema,
            field_overlays=tuple(overlays),
            offset_size=offset_size,
            alternate_order=alternate_order,
            enums=enums,
            diagnostics=tuple(diagnostics),
            loaded_from_document=True,
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def overlay_for(self, field: Field) -> FieldOverlay:
        """Return the overlay of ``field``, which must belong to this schema."""
        for f, overlay in zip(self.schema.fields, self.field_overlays):
            if f is field:
                return overlay
        raise KeyError(f"{field!r} is not a field of {schema_name(self.schema)!r}")

    def items(self) -> list[tuple[Field, FieldOverlay]]:
        """Return ``(field, overlay)`` pairs in schema order."""
        return list(zip(self.schema.fields, self.field_overlays))

    def ordered_fields(self) -> list[Field]:
        """Return the schema's fields in display order.

        Names in ``alternate_order`` come first, in that order; a name
        listed twice takes the next field with that internal name.  Names
        matching no field are skipped.  Fields not listed follow in
        schema order.
        """
        fields = list(self.schema.fields)
        if not self.alternate_order:
            return fields
        ordered: list[Field] = []
        taken: set[int] = set()
        for name in self.alternate_order:
            for position, f in enumerate(fields):
                if position not in taken and f.internal_name == name:
                    ordered.append(f)
                    taken.add(position)
                    break
        ordered.extend(f for position, f in enumerate(fields) if position not in taken)
        return ordered

    @property
    def has_errors(self) -> bool:
        """Return True if any diagnostic is an error."""
        return any(d.is_error for d in self.diagnostics)


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------


def _parse_int(attribute: str, text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise OverlayFormatError(attribute, text) from None


def _check_version(root: ET.Element) -> None:
    if root.tag != ROOT_TAG:
        raise MalformedDocumentError(f"Expected <{ROOT_TAG}> root element, found <{root.tag}>")
    text = root.get("XmlVersion")
    if text is None:
        raise MalformedDocumentError(f"<{ROOT_TAG}> is missing its 'XmlVersion' attribute")
    version = _parse_int("XmlVersion", text)
    if version != XML_VERSION:
        raise VersionMismatchError(version, XML_VERSION)


def _read_self(node: ET.Element | None) -> tuple[int | None, tuple[str, ...] | None]:
    if node is None:
        return None, None
    offset_size: int | None = None
    text = node.get("OffsetSize")
    if text is not None:
        offset_size = _parse_int("OffsetSize", text)
    alternate_order: tuple[str, ...] | None = None
    text = node.get("AlternativeOrder")
    if text is not None:
        alternate_order = tuple(name for name in text.split(",") if name)
    return offset_size, alternate_order


def _read_enums(root: ET.Element, diagnostics: list[LoadDiagnostic]) -> dict[str, EnumTable]:
    enums: dict[str, EnumTable] = {}
    for element in root.findall("Enums/Enum"):
        try:
            table = EnumTable.from_element(element)
        except MalformedDocumentError as exc:
            logger.warning("Skipping enum %r: %s", element.get("Name"), exc)
            diagnostics.append(
                LoadDiagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    code=DiagnosticCode.INVALID_ENUM,
                    message=str(exc),
                )
            )
            continue
        if table.name in enums:
            diagnostics.append(
                LoadDiagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    code=DiagnosticCode.DUPLICATE_ENUM,
                    message=f"Enum {table.name!r} is declared more than once; the last one is used",
                )
            )
        for raw in table.duplicate_values:
            diagnostics.append(
                LoadDiagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    code=DiagnosticCode.DUPLICATE_ENUM_OPTION,
                    message=(
                        f"Enum {table.name!r} declares value {raw!r} more than once; "
                        "the last label is used"
                    ),
                )
            )
        enums[table.name] = table
    return enums


def _index_entries(root: ET.Element) -> dict[str, list[ET.Element]]:
    entries: dict[str, list[ET.Element]] = {}
    for container in root.findall("Field"):
        for child in container:
            entries.setdefault(child.tag, []).append(child)
    return entries


def _match_field(
    f: Field,
    index: int,
    entries: Mapping[str, list[ET.Element]],
    occurrences: dict[str, int],
    enums: Mapping[str, EnumTable],
    diagnostics: list[LoadDiagnostic],
) -> FieldOverlay:
    key = sanitize_field_name(f.internal_name)
    if not key:
        diagnostics.append(
            LoadDiagnostic(
                severity=DiagnosticSeverity.WARNING,
                code=DiagnosticCode.UNMATCHABLE_FIELD_NAME,
                message="Internal name has no characters usable as a document key",
                field_name=f.internal_name,
                index=index,
            )
        )
        return FieldOverlay.blank()

    occurrence = occurrences.get(key, 0)
    occurrences[key] = occurrence + 1
    nodes = entries.get(key, ())
    if occurrence >= len(nodes):
        return FieldOverlay.blank()
    element = nodes[occurrence]

    overlay = FieldOverlay.from_element(element, enums)

    refs = element.get("Refs")
    if refs is not None and overlay.ref_types is None:
        logger.warning("Ignoring Refs of field %r: names no schema", f.internal_name)
        diagnostics.append(
            LoadDiagnostic(
                severity=DiagnosticSeverity.WARNING,
                code=DiagnosticCode.INVALID_FIELD_ENTRY,
                message=f"<{key}> has a 'Refs' attribute that names no schema: {refs!r}",
                field_name=f.internal_name,
                index=index,
            )
        )

    enum_name = element.get("Enum")
    if enum_name is not None and overlay.enum_type is None:
        diagnostics.append(
            LoadDiagnostic(
                severity=DiagnosticSeverity.INFORMATION,
                code=DiagnosticCode.UNRESOLVED_ENUM,
                message=f"Enum {enum_name!r} is not declared in this document",
                field_name=f.internal_name,
                index=index,
            )
        )
    return overlay
