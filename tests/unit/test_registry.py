"""Unit tests for parammeta.registry.registry: OverlayRegistry and the
registry error types.
"""
from __future__ import annotations

import logging

import pytest

from parammeta.overlay.errors import DuplicateRegistrationError, NotRegisteredError, OverlayError
from parammeta.overlay.schema import SchemaOverlay
from parammeta.registry import OverlayRegistry
from parammeta.schema.nodes import ParamDef, ParamField


def _fresh_registry(name: str = "test") -> OverlayRegistry:
    """Return a new empty registry for each test."""
    return OverlayRegistry(name)


def _def(*names: str) -> ParamDef:
    return ParamDef(name="TestParam", fields=[ParamField(n) for n in names])


# ===========================================================================
# Error types
# ===========================================================================


class TestNotRegisteredError:
    def test_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            raise NotRegisteredError("schema", object())

    def test_is_overlay_error(self) -> None:
        with pytest.raises(OverlayError):
            raise NotRegisteredError("schema", object())

    def test_has_kind_attribute(self) -> None:
        assert NotRegisteredError("field", object()).kind == "field"

    def test_message_names_object(self) -> None:
        field = ParamField("atkType")
        assert "atkType" in str(NotRegisteredError("field", field))


class TestDuplicateRegistrationError:
    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            raise DuplicateRegistrationError("schema", object())

    def test_has_obj_attribute(self) -> None:
        schema = _def("a")
        assert DuplicateRegistrationError("schema", schema).obj is schema


# ===========================================================================
# Construction and basic state
# ===========================================================================


class TestConstruction:
    def test_empty_registry_has_zero_length(self) -> None:
        assert len(_fresh_registry()) == 0

    def test_repr_contains_name(self) -> None:
        assert "editor" in repr(_fresh_registry("editor"))

    def test_schemas_empty(self) -> None:
        assert list(_fresh_registry().schemas()) == []


# ===========================================================================
# register
# ===========================================================================


class TestRegister:
    def test_registers_schema_and_fields(self) -> None:
        registry = _fresh_registry()
        schema = _def("a", "b")
        overlay = SchemaOverlay.blank(schema)
        registry.register(overlay)
        assert registry.schema_overlay(schema) is overlay
        assert registry.field_overlay(schema.fields[0]) is overlay.field_overlays[0]
        assert registry.field_overlay(schema.fields[1]) is overlay.field_overlays[1]

    def test_membership(self) -> None:
        registry = _fresh_registry()
        schema = _def("a")
        registry.register(SchemaOverlay.blank(schema))
        assert schema in registry
        assert schema.fields[0] in registry
        assert _def("a") not in registry

    def test_duplicate_schema_raises(self) -> None:
        registry = _fresh_registry()
        schema = _def("a")
        registry.register(SchemaOverlay.blank(schema))
        with pytest.raises(DuplicateRegistrationError):
            registry.register(SchemaOverlay.blank(schema))

    def test_field_shared_between_schemas_raises(self) -> None:
        registry = _fresh_registry()
        shared = ParamField("shared")
        first = ParamDef("First", [shared])
        second = ParamDef("Second", [ParamField("own"), shared])
        registry.register(SchemaOverlay.blank(first))
        with pytest.raises(DuplicateRegistrationError) as info:
            registry.register(SchemaOverlay.blank(second))
        assert info.value.kind == "field"
        assert second not in registry
        assert second.fields[0] not in registry

    def test_field_repeated_within_schema_raises(self) -> None:
        registry = _fresh_registry()
        repeated = ParamField("x")
        with pytest.raises(DuplicateRegistrationError):
            registry.register(SchemaOverlay.blank(ParamDef("P", [repeated, repeated])))
        assert len(registry) == 0

    def test_ensure_unregistered_passes_for_new_schema(self) -> None:
        _fresh_registry().ensure_unregistered(_def("a"))

    def test_register_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = _fresh_registry("logged")
        with caplog.at_level(logging.DEBUG, logger="parammeta.registry.registry"):
            registry.register(SchemaOverlay.blank(_def("a")))
        assert "logged" in caplog.text


# ===========================================================================
# Lookup
# ===========================================================================


class TestLookup:
    def test_unknown_schema_raises(self) -> None:
        with pytest.raises(NotRegisteredError):
            _fresh_registry().schema_overlay(_def("a"))

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(NotRegisteredError):
            _fresh_registry().field_overlay(ParamField("a"))

    def test_lookup_is_by_identity(self) -> None:
        registry = _fresh_registry()
        registry.register(SchemaOverlay.blank(_def("a")))
        with pytest.raises(NotRegisteredError):
            registry.schema_overlay(_def("a"))

    def test_schemas_in_registration_order(self) -> None:
        registry = _fresh_registry()
        first, second = _def("a"), _def("b")
        registry.register(SchemaOverlay.blank(first))
        registry.register(SchemaOverlay.blank(second))
        assert list(registry.schemas()) == [first, second]


# ===========================================================================
# clear
# ===========================================================================


class TestClear:
    def test_clear_forgets_everything(self) -> None:
        registry = _fresh_registry()
        schema = _def("a")
        registry.register(SchemaOverlay.blank(schema))
        registry.clear()
        assert len(registry) == 0
        assert schema.fields[0] not in registry

    def test_schema_can_be_registered_after_clear(self) -> None:
        registry = _fresh_registry()
        schema = _def("a")
        registry.register(SchemaOverlay.blank(schema))
        registry.clear()
        registry.register(SchemaOverlay.blank(schema))
        assert schema in registry
