"""Host-side schema objects and the schema description reader."""
from __future__ import annotations

from parammeta.schema.loader import SchemaLoadError, load_schema, load_schema_file
from parammeta.schema.nodes import Field, ParamDef, ParamField, Schema

__all__ = [
    "Field",
    "Schema",
    "ParamDef",
    "ParamField",
    "load_schema",
    "load_schema_file",
    "SchemaLoadError",
]
