"""Tests for alias and destination validation."""

import pytest

from shortlink.validators import (
    ALIAS_ERROR,
    DESTINATION_ERROR,
    FRIENDLY_ALPHABET,
    alias_error,
    can_submit,
    destination_error,
    is_valid_alias,
    is_valid_destination,
)

AMBIGUOUS = "0O1Il"


class TestAlphabet:
    """The friendly alphabet itself."""

    def test_has_57_unique_symbols(self):
        assert len(FRIENDLY_ALPHABET) == 57
        assert len(set(FRIENDLY_ALPHABET)) == 57

    def test_excludes_ambiguous_characters(self):
        for ch in AMBIGUOUS:
            assert ch not in FRIENDLY_ALPHABET


class TestIsValidAlias:
    """Test alias validation."""

    @pytest.mark.parametrize("alias", ["", "A", "Ab", "Ab3", "Ab3Zx", "Ab3ZxYw2"])
    def test_wrong_length(self, alias):
        assert not is_valid_alias(alias)

    def test_every_friendly_symbol_accepted(self):
        for ch in FRIENDLY_ALPHABET:
            assert is_valid_alias(ch * 4), ch

    def test_mixed_friendly_aliases(self):
        assert is_valid_alias("Ab3Z")
        assert is_valid_alias("zz99")
        assert is_valid_alias("HJKM")

    @pytest.mark.parametrize("ch", list(AMBIGUOUS))
    def test_ambiguous_character_rejected_at_any_position(self, ch):
        for position in range(4):
            alias = list("Ab3Z")
            alias[position] = ch
            assert not is_valid_alias("".join(alias))

    @pytest.mark.parametrize("alias", ["Ab Z", "Ab-Z", "Ab_Z", "Ab\tZ", "Abé2", "ＡＢＣＤ"])
    def test_symbols_outside_alphabet_rejected(self, alias):
        assert not is_valid_alias(alias)

    def test_non_string_rejected(self):
        assert not is_valid_alias(None)
        assert not is_valid_alias(1234)


class TestIsValidDestination:
    """Test destination URL validation."""

    @pytest.mark.parametrize("url", [
        "https://a.b/c",
        "http://example.com",
        "https://sub.example.com:8080/path?query=value#frag",
        "HTTPS://EXAMPLE.COM/",
        "  https://example.com/padded  ",
        "http://127.0.0.1:3000/x",
        "http://[::1]:8080/",
    ])
    def test_valid(self, url):
        assert is_valid_destination(url)

    @pytest.mark.parametrize("url", [
        "",
        "   ",
        "not a url",
        "example.com",
        "ftp://x.com",
        "mailto:someone@example.com",
        "javascript:alert(1)",
        "http://",
        "https:///path-only",
        "http://example.com:99999/",
        "http://[::1",
    ])
    def test_invalid(self, url):
        assert not is_valid_destination(url)

    @pytest.mark.parametrize("url", [
        "http://a b/",
        "http://exa mple.com",
        "https://<x>/",
        "https://a^b.com/",
        "https://a|b.com/",
        "http://a%20b.com/",
        "http://a\\b.com/",
        "http://[not-ipv6]/",
    ])
    def test_forbidden_host_characters(self, url):
        assert not is_valid_destination(url)

    def test_never_raises_on_odd_input(self):
        assert not is_valid_destination(None)
        assert not is_valid_destination(42)


class TestErrorsAndGating:
    """Test field messages and the submission conjunction."""

    def test_empty_inputs_have_no_message(self):
        assert destination_error("") == ""
        assert alias_error("") == ""

    def test_messages_for_invalid_inputs(self):
        assert destination_error("ftp://x.com") == DESTINATION_ERROR
        assert alias_error("abc") == ALIAS_ERROR
        assert FRIENDLY_ALPHABET in ALIAS_ERROR

    def test_valid_inputs_have_no_message(self):
        assert destination_error("https://example.com") == ""
        assert alias_error("Ab3Z") == ""

    def test_can_submit_without_alias(self):
        assert can_submit("https://example.com")
        assert can_submit("https://example.com", "")

    def test_can_submit_with_valid_alias(self):
        assert can_submit("https://example.com", "Ab3Z")

    def test_cannot_submit_with_invalid_alias(self):
        assert not can_submit("https://example.com", "abc")
        assert not can_submit("https://example.com", "Ab1Z")

    def test_cannot_submit_with_invalid_destination(self):
        assert not can_submit("not a url", "")
        assert not can_submit("", "Ab3Z")
