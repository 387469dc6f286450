"""Schema objects supplied by the host.

parammeta never decodes binary schema definitions itself.  Hosts hand
in any object shaped like ``Schema`` (an ordered ``fields`` sequence)
whose fields are shaped like ``Field`` (an ``internal_name``).  The
``ParamDef`` and ``ParamField`` dataclasses below are a ready-made
implementation used by the CLI and the test suite.

Identity matters: overlays are registered per object, so two
structurally identical schemas loaded separately are distinct.  Both
dataclasses therefore compare and hash by identity.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Field(Protocol):
    """One named slot within a schema."""

    @property
    def internal_name(self) -> str: ...


@runtime_checkable
class Schema(Protocol):
    """An ordered sequence of fields."""

    @property
    def fields(self) -> Sequence[Field]: ...


@dataclass(eq=False)
class ParamField:
    """A field of a ``ParamDef``.

    Parameters
    ----------
    internal_name:
        Name as stored in the schema definition.  May contain characters
        that are not valid in an XML tag and may repeat within a schema.
    display_type:
        Storage type, e.g. ``"s32"`` or ``"u8"``.
    display_name:
        Name supplied by the definition itself, if any.
    """

    internal_name: str
    display_type: str = "s32"
    display_name: str | None = None

    def __repr__(self) -> str:
        return f"ParamField({self.internal_name!r}, {self.display_type!r})"


@dataclass(eq=False)
class ParamDef:
    """A record layout: a named, ordered list of ``ParamField``."""

    name: str
    fields: list[ParamField] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"ParamDef({self.name!r}, fields={len(self.fields)})"

    def field_named(self, internal_name: str) -> ParamField | None:
        """Return the first field with ``internal_name``, or ``None``."""
        for f in self.fields:
            if f.internal_name == internal_name:
                return f
        return None


def schema_name(schema: Schema) -> str:
    """Return a human-readable name for ``schema``."""
    return getattr(schema, "name", None) or type(schema).__name__
