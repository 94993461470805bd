"""Tests for tag name, attribute and PI extraction."""

import pytest

from driver_xml.shared.errors import InvalidArgument, MalformedMarkup
from driver_xml.tokenization.attributes import (
    AttributeScanner,
    get_close_tag_name,
    get_pi_data,
    get_tag_name,
)


class TestGetTagName:
    """Test element name extraction."""

    @pytest.mark.parametrize(
        "chunk, name, end",
        [
            (b"<a>", "a", 2),
            (b"<abc/>", "abc", 4),
            (b"</abc>", "abc", 5),
            (b'<ns:item-1.x attr="v">', "ns:item-1.x", 12),
            (b"<a\n>", "a", 2),
        ],
    )
    def test_names(self, chunk: bytes, name: str, end: int) -> None:
        assert get_tag_name(chunk) == (name, end)

    @pytest.mark.parametrize("chunk", [b"<1a>", b"<a!b>", b"<-a>", b"a>", b"<>"])
    def test_invalid_names(self, chunk: bytes) -> None:
        with pytest.raises(MalformedMarkup):
            get_tag_name(chunk)

    def test_invalid_character_position(self) -> None:
        with pytest.raises(MalformedMarkup, match="in tag name") as exc_info:
            get_tag_name(b"<ab$c>")
        assert exc_info.value.position == 3


class TestGetCloseTagName:
    """Test close tag name extraction."""

    @pytest.mark.parametrize("chunk", [b"</a>", b"</a >", b"</a\n\t>"])
    def test_valid(self, chunk: bytes) -> None:
        assert get_close_tag_name(chunk) == "a"

    @pytest.mark.parametrize(
        "chunk, position",
        [(b'</a x="1">', 4), (b"</a/>", 3), (b"</a b>", 4)],
    )
    def test_content_after_name(self, chunk: bytes, position: int) -> None:
        with pytest.raises(MalformedMarkup, match="Unexpected content") as exc_info:
            get_close_tag_name(chunk)
        assert exc_info.value.position == position

    def test_open_tag_rejected(self) -> None:
        with pytest.raises(MalformedMarkup, match="does not start with"):
            get_close_tag_name(b"<a>")


class TestAttributeScanner:
    """Test attribute iteration."""

    def scan(self, chunk: bytes):
        _, end = get_tag_name(chunk)
        return list(AttributeScanner(chunk, end))

    def test_no_attributes(self) -> None:
        assert self.scan(b"<a>") == []
        assert self.scan(b"<a  />") == []

    def test_double_and_single_quotes(self) -> None:
        assert self.scan(b"<a x=\"1\" y='2'>") == [("x", b"1"), ("y", b"2")]

    def test_other_quote_is_content(self) -> None:
        assert self.scan(b"<a x='y\"z' w=\"it's\"/>") == [
            ("x", b'y"z'),
            ("w", b"it's"),
        ]

    def test_empty_value_is_present(self) -> None:
        assert self.scan(b'<a x=""/>') == [("x", b"")]

    def test_whitespace_around_equals(self) -> None:
        assert self.scan(b'<a x \t= \n"1">') == [("x", b"1")]

    def test_adjacent_attributes(self) -> None:
        assert self.scan(b'<a x="1"y="2">') == [("x", b"1"), ("y", b"2")]

    def test_value_may_contain_slash(self) -> None:
        assert self.scan(b'<a href="/x/y"/>') == [("href", b"/x/y")]

    def test_exhaustion_is_repeatable(self) -> None:
        scanner = AttributeScanner(b'<a x="1">', 2)
        assert next(scanner) == ("x", b"1")
        with pytest.raises(StopIteration):
            next(scanner)
        with pytest.raises(StopIteration):
            next(scanner)

    @pytest.mark.parametrize(
        "chunk, message",
        [
            (b"<a x>", "missing '='"),
            (b"<a x y='1'>", "missing '='"),
            (b"<a x=1>", "not quoted"),
            (b'<a x="1>', "no closing quote"),
            (b"<a x='1\">", "no closing quote"),
            (b'<a 1x="1">', "Invalid first character"),
            (b'<a x!="1">', "Invalid character"),
        ],
    )
    def test_malformed(self, chunk: bytes, message: str) -> None:
        with pytest.raises(MalformedMarkup, match=message):
            self.scan(chunk)

    def test_start_out_of_range(self) -> None:
        with pytest.raises(InvalidArgument):
            AttributeScanner(b"<a>", 10)


class TestGetPiData:
    """Test processing instruction splitting."""

    def test_target_and_data(self) -> None:
        assert get_pi_data(b'<?xml version="1.0"?>') == ("xml", b'version="1.0"')

    def test_no_data(self) -> None:
        assert get_pi_data(b"<?target?>") == ("target", None)
        assert get_pi_data(b"<?target   ?>") == ("target", None)

    def test_trailing_space_kept(self) -> None:
        assert get_pi_data(b"<?t  a b ?>") == ("t", b"a b ")

    @pytest.mark.parametrize("chunk", [b"<??>", b"<?1x?>", b"<?x!y?>", b"<?x", b"<x?>"])
    def test_malformed(self, chunk: bytes) -> None:
        with pytest.raises(MalformedMarkup):
            get_pi_data(chunk)
