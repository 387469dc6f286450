"""Read schema descriptions from YAML or JSON.

Binary schema definitions are decoded by the host.  For the CLI and for
tests, a schema can instead be described as plain data::

    name: EquipParamWeapon
    fields:
      - name: id
        type: s32
      - name: 1flag
        type: u8
      - name: dmy:pad[2]
        type: dummy8

``yaml.safe_load`` also accepts JSON documents, so one reader serves
both formats.
"""
from __future__ import annotations

import os
from pathlib import Path

import yaml

from parammeta.schema.nodes import ParamDef, ParamField


class SchemaLoadError(ValueError):
    """Raised when a schema description is missing or has the wrong shape."""


def load_schema(data: object) -> ParamDef:
    """Build a ``ParamDef`` from already-decoded description data.

    Raises
    ------
    SchemaLoadError
        If ``data`` is not a mapping with a ``fields`` list of named entries.
    """
    if not isinstance(data, dict):
        raise SchemaLoadError("Schema description must be a mapping")
    raw_fields = data.get("fields")
    if not isinstance(raw_fields, list):
        raise SchemaLoadError("Schema description needs a 'fields' list")
    fields: list[ParamField] = []
    for position, entry in enumerate(raw_fields):
        if isinstance(entry, str):
            fields.append(ParamField(internal_name=entry))
            continue
        if not isinstance(entry, dict) or "name" not in entry:
            raise SchemaLoadError(f"Field #{position} needs a 'name'")
        fields.append(
            ParamField(
                internal_name=str(entry["name"]),
                display_type=str(entry.get("type", "s32")),
                display_name=entry.get("display_name"),
            )
        )
    return ParamDef(name=str(data.get("name", "unnamed")), fields=fields)


def load_schema_file(path: str | os.PathLike[str]) -> ParamDef:
    """Read a YAML or JSON schema description from ``path``.

    Raises
    ------
    OSError
        If the file cannot be read.
    SchemaLoadError
        If the file is not UTF-8, not valid YAML/JSON, or has the wrong shape.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SchemaLoadError(f"Schema description {path} is not UTF-8: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"Cannot parse schema description {path}: {exc}") from exc
    return load_schema(data)
