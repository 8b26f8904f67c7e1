"""Tests for glob to regex translation."""

import re

import pytest

from nsvalidators.parser.glob import glob_to_regex


def _matches(glob: str, text: str) -> bool:
    return re.fullmatch(glob_to_regex(glob), text) is not None


class TestGlobToRegex:
    """Test wildcard translation and escaping."""

    def test_star_and_question_mark(self):
        assert glob_to_regex("OSGI-INF/*.xml") == r"OSGI-INF/.*\.xml"
        assert glob_to_regex("OSGI-INF/Comp?.xml") == r"OSGI-INF/Comp.\.xml"

    @pytest.mark.parametrize("literal", [
        "OSGI-INF/a.b.xml",
        "OSGI-INF/(x)+y|z{1}$^.xml",
        "OSGI-INF/back\\slash.xml",
    ])
    def test_literal_matches_only_itself(self, literal):
        assert _matches(literal, literal)
        assert not _matches(literal, literal + "x")
        assert not _matches(literal, "x" + literal)

    def test_dot_is_not_a_wildcard(self):
        assert not _matches("OSGI-INF/a.xml", "OSGI-INF/aXxml")

    def test_star_matches_empty_and_any_run(self):
        assert _matches("OSGI-INF/*.xml", "OSGI-INF/.xml")
        assert _matches("OSGI-INF/*.xml", "OSGI-INF/Component.xml")
        assert _matches("OSGI-INF/*Impl.xml", "OSGI-INF/MyImpl.xml")

    def test_star_crosses_path_separators(self):
        assert _matches("OSGI-INF/*.xml", "OSGI-INF/sub/B.xml")

    def test_question_mark_matches_exactly_one_character(self):
        assert _matches("OSGI-INF/Comp?.xml", "OSGI-INF/Comp1.xml")
        assert not _matches("OSGI-INF/Comp?.xml", "OSGI-INF/Comp.xml")
        assert not _matches("OSGI-INF/Comp?.xml", "OSGI-INF/Comp12.xml")

    def test_character_class_passes_through(self):
        assert glob_to_regex("OSGI-INF/[ab].xml") == r"OSGI-INF/[ab]\.xml"
        assert _matches("OSGI-INF/[ab].xml", "OSGI-INF/a.xml")
        assert not _matches("OSGI-INF/[ab].xml", "OSGI-INF/c.xml")

    def test_wildcards_inside_character_class_are_literal(self):
        assert glob_to_regex("[*?]") == "[*?]"
        assert _matches("file[*].xml", "file*.xml")
        assert not _matches("file[*].xml", "fileX.xml")

    def test_unbalanced_bracket_is_passed_through(self):
        regex = glob_to_regex("OSGI-INF/[abc*.xml")
        assert regex == r"OSGI-INF/[abc*\.xml"
        with pytest.raises(re.error):
            re.compile(regex)
