"""Unit tests for segment-wildcard matching."""

import pytest

from hooter.core.hooks.matching import GLOBSTAR, compile_pattern, match


class TestMatch:
    """Tests for match()."""

    @pytest.mark.parametrize(
        "event_type, pattern, expected",
        [
            ("user.created", "user.created", True),
            ("user.created", "user.deleted", False),
            ("user.created", "user.*", True),
            ("user.created.v2", "user.*", False),
            ("order.created", "user.*", False),
            ("user.created", "*.created", True),
            ("user.created", "*", False),
            ("user", "*", True),
            ("user.created.v2", "user.**", True),
            ("user", "user.**", True),
            ("a.b.c.d", "a.**.d", True),
            ("a.d", "a.**.d", True),
            ("a.b.c.e", "a.**.d", False),
            ("a.b.c", "**.c", True),
            ("a.b.c", "**.b", False),
            ("users.created", "user*.created", True),
            ("user.created", "user.creat?d", True),
        ],
    )
    def test_segment_wildcards(self, event_type: str, pattern: str, expected: bool) -> None:
        """Test that * spans one segment and ** spans any number."""
        assert match(event_type, pattern) is expected

    @pytest.mark.parametrize("event_type", ["a", "a.b", "a.b.c.d.e", ""])
    def test_globstar_matches_everything(self, event_type: str) -> None:
        """Test that ** matches every type."""
        assert match(event_type, GLOBSTAR) is True

    def test_custom_separator(self) -> None:
        """Test that a different separator splits segments."""
        assert match("user:created", "user:*", ":") is True
        assert match("user.created", "user:*", ":") is False
        assert match("user.created", "*", ":") is True

    def test_special_regex_characters_are_literal(self) -> None:
        """Test that regex metacharacters in patterns are matched literally."""
        assert match("price.$5+", "price.$5+") is True
        assert match("price.55", "price.$5+") is False


class TestCompilePattern:
    """Tests for compile_pattern()."""

    def test_consecutive_globstars_collapse(self) -> None:
        """Test that ** segments next to each other compile to one."""
        compiled = compile_pattern("a.**.**.b")
        assert len(compiled) == 3
        assert compiled[1] is GLOBSTAR

    def test_compilation_is_cached(self) -> None:
        """Test that compiling the same pattern twice returns the same object."""
        assert compile_pattern("user.*") is compile_pattern("user.*")
