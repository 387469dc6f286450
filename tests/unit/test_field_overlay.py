"""Unit tests for parammeta.overlay.field: FieldOverlay."""
from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from parammeta.overlay.enums import EnumTable
from parammeta.overlay.field import FieldOverlay
from parammeta.schema.nodes import ParamField

_ENUMS = {"ATK_TYPE": EnumTable(name="ATK_TYPE", values={"0": "Slash", "1": "Thrust"})}


def _overlay(xml: str) -> FieldOverlay:
    return FieldOverlay.from_element(ET.fromstring(xml), _ENUMS)


class TestBlank:
    def test_all_attributes_unset(self) -> None:
        blank = FieldOverlay.blank()
        assert blank.ref_types is None
        assert blank.virtual_ref is None
        assert blank.enum_type is None
        assert blank.alt_name is None
        assert blank.wiki is None
        assert blank.is_bool is False

    def test_is_blank(self) -> None:
        assert FieldOverlay.blank().is_blank

    def test_entry_without_attributes_is_blank(self) -> None:
        assert _overlay("<id/>").is_blank


class TestRefs:
    def test_single_ref(self) -> None:
        assert _overlay('<f Refs="NpcParam"/>').ref_types == ("NpcParam",)

    def test_comma_split_keeps_order(self) -> None:
        assert _overlay('<f Refs="B,A,C"/>').ref_types == ("B", "A", "C")

    def test_empty_segments_dropped(self) -> None:
        assert _overlay('<f Refs="A,,B,"/>').ref_types == ("A", "B")

    def test_segments_trimmed(self) -> None:
        assert _overlay('<f Refs=" A , B"/>').ref_types == ("A", "B")

    def test_repeated_names_collapse(self) -> None:
        assert _overlay('<f Refs="A,B,A"/>').ref_types == ("A", "B")

    @pytest.mark.parametrize("refs", ["", ",", " , "])
    def test_refs_naming_nothing_is_unset(self, refs: str) -> None:
        assert _overlay(f'<f Refs="{refs}"/>').ref_types is None

    def test_empty_refs_keeps_other_attributes(self) -> None:
        overlay = _overlay('<f Refs="" AltName="Row ID" Wiki="a\\nb" IsBool=""/>')
        assert overlay.ref_types is None
        assert overlay.alt_name == "Row ID"
        assert overlay.wiki == "a\nb"
        assert overlay.is_bool is True


class TestAttributes:
    def test_virtual_ref_verbatim(self) -> None:
        assert _overlay('<f VRef="Flag Id"/>').virtual_ref == "Flag Id"

    def test_alt_name(self) -> None:
        assert _overlay('<f AltName="Attack Type"/>').alt_name == "Attack Type"

    def test_enum_resolved(self) -> None:
        overlay = _overlay('<f Enum="ATK_TYPE"/>')
        assert overlay.enum_type is _ENUMS["ATK_TYPE"]

    def test_unknown_enum_is_none_not_error(self) -> None:
        assert _overlay('<f Enum="MISSING"/>').enum_type is None

    def test_wiki_unescapes_newline(self) -> None:
        overlay = _overlay(r'<f Wiki="line1\nline2"/>')
        assert overlay.wiki == "line1\nline2"

    def test_wiki_without_escape_unchanged(self) -> None:
        assert _overlay('<f Wiki="plain"/>').wiki == "plain"


class TestIsBool:
    @pytest.mark.parametrize("text", ["", "true", "false", "0"])
    def test_presence_sets_flag(self, text: str) -> None:
        assert _overlay(f'<f IsBool="{text}"/>').is_bool is True

    def test_absence_clears_flag(self) -> None:
        assert _overlay('<f AltName="x"/>').is_bool is False


class TestHelpers:
    def test_display_name_prefers_alt_name(self) -> None:
        field = ParamField("atkType")
        assert _overlay('<f AltName="Attack Type"/>').display_name(field) == "Attack Type"

    def test_display_name_falls_back_to_internal_name(self) -> None:
        field = ParamField("atkType")
        assert FieldOverlay.blank().display_name(field) == "atkType"

    def test_enum_label(self) -> None:
        assert _overlay('<f Enum="ATK_TYPE"/>').enum_label(1) == "Thrust"

    def test_enum_label_without_enum(self) -> None:
        assert FieldOverlay.blank().enum_label(1) is None

    def test_frozen(self) -> None:
        overlay = FieldOverlay.blank()
        with pytest.raises(AttributeError):
            overlay.is_bool = True  # type: ignore[misc]
