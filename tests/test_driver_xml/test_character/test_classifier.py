"""Tests for ASCII character classification."""

import pytest

from driver_xml.character.classifier import (
    is_name_char,
    is_name_start_char,
    is_printable,
    is_tag_terminator,
    is_truncated_markup,
    is_whitespace,
    is_xml_char,
    looks_like_close_tag,
    looks_like_comment,
    looks_like_declaration,
    looks_like_empty_tag,
    looks_like_open_or_close_tag,
    looks_like_pi,
    to_printable,
)


class TestBytePredicates:
    """Test single-byte predicates."""

    @pytest.mark.parametrize("char", [" ", "\t", "\r", "\n"])
    def test_whitespace(self, char: str) -> None:
        assert is_whitespace(ord(char))

    @pytest.mark.parametrize("char", ["a", "\x0b", "\x0c", "0", "\x00"])
    def test_not_whitespace(self, char: str) -> None:
        assert not is_whitespace(ord(char))

    def test_name_start_chars(self) -> None:
        for char in "AZaz_:":
            assert is_name_start_char(ord(char))
        for char in "09-.<> ":
            assert not is_name_start_char(ord(char))

    def test_name_chars(self) -> None:
        for char in "Az_:09-.":
            assert is_name_char(ord(char))
        for char in "<>=/ \"'":
            assert not is_name_char(ord(char))

    def test_non_ascii_is_not_a_name_char(self) -> None:
        assert not is_name_start_char(0xC3)
        assert not is_name_char(0xE9)

    def test_xml_chars(self) -> None:
        for byte in (0x09, 0x0A, 0x0D, 0x20, 0x7E):
            assert is_xml_char(byte)
        for byte in (0x00, 0x08, 0x0B, 0x1F, 0x7F, 0x80):
            assert not is_xml_char(byte)

    def test_printable(self) -> None:
        assert is_printable(ord("~"))
        assert not is_printable(ord("\n"))
        assert not is_printable(0x7F)


class TestToPrintable:
    """Test the printable filter shared by the debug writer and hex dump."""

    def test_replaces_unprintable_bytes(self) -> None:
        assert to_printable(b"a\tb\x00c\xffd") == "a.b.c.d"

    def test_keeps_printable_ascii(self) -> None:
        assert to_printable(b'<a x="1"/>') == '<a x="1"/>'

    def test_empty(self) -> None:
        assert to_printable(b"") == ""


class TestShapeDetectors:
    """Test markup shape detectors and their bounds checks."""

    def test_open_and_close_tags(self) -> None:
        assert looks_like_open_or_close_tag(b"<a>")
        assert looks_like_open_or_close_tag(b"</a>")
        assert looks_like_open_or_close_tag(b"xx<a>", 2)
        assert not looks_like_open_or_close_tag(b"<1>")
        assert not looks_like_open_or_close_tag(b"</>")
        assert not looks_like_open_or_close_tag(b"a>")

    def test_tag_detector_respects_buffer_end(self) -> None:
        assert not looks_like_open_or_close_tag(b"<")
        assert not looks_like_open_or_close_tag(b"</")
        assert not looks_like_open_or_close_tag(b"<a", 5)

    def test_close_tag(self) -> None:
        assert looks_like_close_tag(b"</a>")
        assert not looks_like_close_tag(b"<a>")
        assert not looks_like_close_tag(b"</")

    def test_empty_tag(self) -> None:
        assert looks_like_empty_tag(b"<a/>")
        assert looks_like_empty_tag(b'<a x="1"/>')
        assert not looks_like_empty_tag(b"<a>")
        assert not looks_like_empty_tag(b"/>")

    def test_comment(self) -> None:
        assert looks_like_comment(b"<!-- x -->")
        assert not looks_like_comment(b"<!-")
        assert not looks_like_comment(b"<!DOCTYPE a>")

    def test_pi(self) -> None:
        assert looks_like_pi(b"<?xml?>")
        assert not looks_like_pi(b"<")
        assert not looks_like_pi(b"<!x>")

    def test_declaration(self) -> None:
        assert looks_like_declaration(b"<!DOCTYPE a>")
        assert looks_like_declaration(b"<![CDATA[x]]>")
        assert looks_like_declaration(b"<!")
        assert not looks_like_declaration(b"<!-- c -->")
        assert not looks_like_declaration(b"<?pi?>")

    def test_tag_terminator(self) -> None:
        assert is_tag_terminator(b"a>", 1)
        assert is_tag_terminator(b"a/>", 1)
        assert not is_tag_terminator(b"a/", 1)
        assert not is_tag_terminator(b"a", 1)

    @pytest.mark.parametrize("tail", [b"<", b"<!", b"<!-", b"</", b"<?"])
    def test_truncated_markup(self, tail: bytes) -> None:
        assert is_truncated_markup(b"text" + tail, 4)

    @pytest.mark.parametrize("tail", [b"<1", b"<!-x", b"", b"< a"])
    def test_not_truncated_markup(self, tail: bytes) -> None:
        assert not is_truncated_markup(b"text" + tail, 4)
