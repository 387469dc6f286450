"""Export of a merged ``SchemaOverlay`` for inspection.

The output is a plain dict/list structure describing the schema fields
together with their merged metadata, suitable for JSON or YAML.  It is
a read-only view; it is not an overlay document and cannot be loaded
back.

Usage
-----
::

    from parammeta.serializer import OverlaySerializer

    serializer = OverlaySerializer()
    print(serializer.to_yaml(registry.schema_overlay(weapon_def)))
"""
from __future__ import annotations

import json

import yaml

from parammeta.diagnostics import LoadDiagnostic
from parammeta.overlay.enums import EnumTable
from parammeta.overlay.field import FieldOverlay
from parammeta.overlay.schema import SchemaOverlay
from parammeta.schema.nodes import Field, schema_name


class OverlaySerializer:
    """Converts a ``SchemaOverlay`` into plain Python data."""

    def to_dict(self, overlay: SchemaOverlay) -> dict[str, object]:
        """Serialize ``overlay`` to a JSON-compatible dict."""
        return {
            "schema": schema_name(overlay.schema),
            "loaded_from_document": overlay.loaded_from_document,
            "offset_size": overlay.offset_size,
            "alternate_order": list(overlay.alternate_order)
            if overlay.alternate_order is not None
            else None,
            "enums": {name: self._enum_to_dict(table) for name, table in overlay.enums.items()},
            "fields": [self._field_to_dict(f, fo) for f, fo in overlay.items()],
            "diagnostics": [self._diagnostic_to_dict(d) for d in overlay.diagnostics],
        }

    def _enum_to_dict(self, table: EnumTable) -> dict[str, str]:
        return dict(table.values)

    def _field_to_dict(self, f: Field, fo: FieldOverlay) -> dict[str, object]:
        return {
            "internal_name": f.internal_name,
            "display_name": fo.display_name(f),
            "ref_types": list(fo.ref_types) if fo.ref_types is not None else None,
            "virtual_ref": fo.virtual_ref,
            "enum": fo.enum_type.name if fo.enum_type is not None else None,
            "alt_name": fo.alt_name,
            "wiki": fo.wiki,
            "is_bool": fo.is_bool,
        }

    def _diagnostic_to_dict(self, d: LoadDiagnostic) -> dict[str, object]:
        return {
            "severity": d.severity.name,
            "code": d.code,
            "message": d.message,
            "field": d.field_name,
            "index": d.index,
        }

    def to_json(self, overlay: SchemaOverlay, indent: int | None = None) -> str:
        """Serialize ``overlay`` to a JSON string."""
        return json.dumps(self.to_dict(overlay), indent=indent, ensure_ascii=False)

    def to_yaml(self, overlay: SchemaOverlay) -> str:
        """Serialize ``overlay`` to a YAML string."""
        return yaml.safe_dump(
            self.to_dict(overlay), default_flow_style=False, allow_unicode=True, sort_keys=False
        )
