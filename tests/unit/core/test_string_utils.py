"""Tests for core/string_utils.py module."""

import pytest

from exifnamer.core.string_utils import sanitize_path_component


class TestSanitizePathComponent:
    """Tests for sanitize_path_component function."""

    def test_plain_value_unchanged(self) -> None:
        """Safe values, internal spaces included, are kept."""
        assert sanitize_path_component("Canon EOS 5D") == "Canon EOS 5D"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Mark II/III", "Mark II-III"),
            ("A\\B", "A-B"),
            ("Cam:1", "Cam-1"),
        ],
    )
    def test_separators_replaced(self, value: str, expected: str) -> None:
        """Path and drive separators become dashes."""
        assert sanitize_path_component(value) == expected

    def test_reserved_characters_removed(self) -> None:
        """Characters reserved on Windows are dropped."""
        assert sanitize_path_component('a*b?c"d<e>f|g') == "abcdefg"

    def test_control_characters_removed(self) -> None:
        """NUL, tabs, newlines and DEL are dropped."""
        assert sanitize_path_component("EOS\x00 5D\n\t\x7f") == "EOS 5D"

    def test_leading_and_trailing_dots_stripped(self) -> None:
        """Dots at the ends are stripped, dots inside are kept."""
        assert sanitize_path_component("..E.O.S..") == "E.O.S"

    def test_dots_and_spaces_stripped_together(self) -> None:
        """Alternating dots and spaces at the ends are all stripped."""
        assert sanitize_path_component(" . . Canon . . ") == "Canon"

    @pytest.mark.parametrize("value", ["../etc", "..", "/", "../../x"])
    def test_no_traversal(self, value: str) -> None:
        """The result never contains a separator or is a dot entry."""
        result = sanitize_path_component(value)

        assert "/" not in result
        assert "\\" not in result
        assert result not in (".", "..")

    def test_traversal_example(self) -> None:
        """'../etc' becomes '-etc'."""
        assert sanitize_path_component("../etc") == "-etc"

    def test_empty_result_allowed(self) -> None:
        """A value made only of removed characters becomes empty."""
        assert sanitize_path_component("...") == ""
        assert sanitize_path_component("") == ""

    def test_non_ascii_kept(self) -> None:
        """Non-ASCII letters are not filtered."""
        assert sanitize_path_component("Appareil Café") == "Appareil Café"
