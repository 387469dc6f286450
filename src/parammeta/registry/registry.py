"""Identity registry for loaded overlays.

Hosts own an ``OverlayRegistry`` and pass it to the loader; editors then
query it by schema or field object.  Keys are opaque handles derived
from object identity, so two structurally identical schemas are
distinct entries.  The registry keeps a reference to every keyed object
for as long as the entry exists, which keeps each handle unambiguous.

Example
-------
::

    registry = OverlayRegistry()
    parammeta.load("meta/EquipParamWeapon.xml", weapon_def, registry)

    registry.schema_overlay(weapon_def).offset_size
    registry.field_overlay(weapon_def.fields[0]).alt_name
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from parammeta.overlay.errors import DuplicateRegistrationError, NotRegisteredError

if TYPE_CHECKING:
    from parammeta.overlay.field import FieldOverlay
    from parammeta.overlay.schema import SchemaOverlay
    from parammeta.schema.nodes import Field, Schema

logger = logging.getLogger(__name__)


def _handle(obj: object) -> int:
    return id(obj)


class OverlayRegistry:
    """Maps schema objects to ``SchemaOverlay`` and field objects to ``FieldOverlay``.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in log messages).
    """

    def __init__(self, name: str = "default") -> None:
        self._name = name
        self._schemas: dict[int, tuple[Schema, SchemaOverlay]] = {}
        self._fields: dict[int, tuple[Field, FieldOverlay]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def ensure_unregistered(self, schema: "Schema") -> None:
        """Check that ``schema`` and its fields can be registered.

        Raises
        ------
        DuplicateRegistrationError
            If ``schema`` or one of its fields already has an overlay, or
            if the same field object occurs twice in ``schema``.
        """
        if _handle(schema) in self._schemas:
            raise DuplicateRegistrationError("schema", schema)
        seen: set[int] = set()
        for f in schema.fields:
            handle = _handle(f)
            if handle in self._fields or handle in seen:
                raise DuplicateRegistrationError("field", f)
            seen.add(handle)

    def register(self, overlay: "SchemaOverlay") -> None:
        """Register ``overlay`` for its schema and each field overlay for its field.

        Nothing is registered when this raises.

        Raises
        ------
        DuplicateRegistrationError
            As for ``ensure_unregistered``.
        """
        schema = overlay.schema
        self.ensure_unregistered(schema)
        self._schemas[_handle(schema)] = (schema, overlay)
        for f, field_overlay in zip(schema.fields, overlay.field_overlays):
            self._fields[_handle(f)] = (f, field_overlay)
        logger.debug(
            "Registered overlay for %r (%d field(s)) in registry %r",
            schema,
            len(overlay.field_overlays),
            self._name,
        )

    def clear(self) -> None:
        """Forget every registered overlay."""
        self._schemas.clear()
        self._fields.clear()
        logger.debug("Cleared registry %r", self._name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def schema_overlay(self, schema: "Schema") -> "SchemaOverlay":
        """Return the overlay registered for ``schema``.

        Raises
        ------
        NotRegisteredError
            If ``schema`` was never loaded through this registry.
        """
        try:
            return self._schemas[_handle(schema)][1]
        except KeyError:
            raise NotRegisteredError("schema", schema) from None

    def field_overlay(self, field: "Field") -> "FieldOverlay":
        """Return the overlay registered for ``field``.

        Raises
        ------
        NotRegisteredError
            If the schema owning ``field`` was never loaded through this registry.
        """
        try:
            return self._fields[_handle(field)][1]
        except KeyError:
            raise NotRegisteredError("field", field) from None

    def schemas(self) -> Iterable["Schema"]:
        """Return registered schemas in registration order."""
        return [schema for schema, _ in self._schemas.values()]

    def __contains__(self, obj: object) -> bool:
        """Support ``schema in registry`` and ``field in registry``."""
        handle = _handle(obj)
        return handle in self._schemas or handle in self._fields

    def __len__(self) -> int:
        """Return the number of registered schemas."""
        return len(self._schemas)

    def __repr__(self) -> str:
        return (
            f"OverlayRegistry(name={self._name!r}, schemas={len(self._schemas)}, "
            f"fields={len(self._fields)})"
        )
