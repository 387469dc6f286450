"""Unit tests for parammeta.overlay.naming: sanitize_field_name."""
from __future__ import annotations

import pytest

from parammeta.overlay.naming import sanitize_field_name


class TestSanitizeFieldName:
    @pytest.mark.parametrize(
        ("internal", "expected"),
        [
            ("id", "id"),
            ("sortId", "sortId"),
            ("dmy:pad[2]", "dmypad2"),
            ("spEffect Id 0", "spEffectId0"),
            ("under_score", "under_score"),
        ],
    )
    def test_removes_unsafe_characters(self, internal: str, expected: str) -> None:
        assert sanitize_field_name(internal) == expected

    def test_leading_digit_gets_underscore(self) -> None:
        assert sanitize_field_name("1flag") == "_1flag"

    def test_leading_digit_after_removal_gets_underscore(self) -> None:
        assert sanitize_field_name("[3]slot") == "_3slot"

    def test_non_ascii_letters_are_removed(self) -> None:
        assert sanitize_field_name("wäpon") == "wpon"

    def test_only_unsafe_characters_gives_empty_key(self) -> None:
        assert sanitize_field_name(":[]") == ""

    def test_distinct_names_can_collide(self) -> None:
        assert sanitize_field_name("pad:1") == sanitize_field_name("pad1")
