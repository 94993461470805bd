"""Tests for the growable output buffer."""

import pytest

from driver_xml.shared.errors import InvalidArgument
from driver_xml.writer.buffer import OutputBuffer


class TestOutputBuffer:
    """Test writing and growth."""

    def test_starts_empty(self) -> None:
        buffer = OutputBuffer()
        assert buffer.size == 0
        assert buffer.capacity == 0
        assert buffer.getvalue() == b""

    def test_small_write_grows_by_step(self) -> None:
        buffer = OutputBuffer()
        buffer.write(b"<a/>")
        assert buffer.capacity == 512
        assert buffer.free == 508
        assert buffer.reallocations == 1

    def test_large_write_grows_by_size_plus_one(self) -> None:
        buffer = OutputBuffer()
        buffer.write(b"x" * 600)
        assert buffer.capacity == 601
        assert buffer.size == 600

    def test_write_equal_to_step_grows_by_size_plus_one(self) -> None:
        buffer = OutputBuffer(grow_step=8)
        buffer.write(b"12345678")
        assert buffer.capacity == 9

    def test_fitting_writes_do_not_grow(self) -> None:
        buffer = OutputBuffer(initial_capacity=16)
        buffer.write(b"0123456789")
        buffer.write(b"abcdef")
        assert buffer.reallocations == 0
        assert buffer.free == 0
        buffer.write(b"!")
        assert buffer.reallocations == 1
        assert buffer.capacity == 16 + 512

    def test_contents_survive_growth(self) -> None:
        buffer = OutputBuffer(grow_step=4)
        for piece in (b"ab", b"cde", b"fghij", b"k"):
            buffer.write(piece)
        assert buffer.getvalue() == b"abcdefghijk"
        assert len(buffer) == 11

    def test_ascii_text_accepted(self) -> None:
        buffer = OutputBuffer()
        buffer.write("<a>")
        assert buffer.getvalue() == b"<a>"

    def test_non_ascii_text_rejected(self) -> None:
        with pytest.raises(InvalidArgument, match="ASCII"):
            OutputBuffer().write("é")

    def test_empty_write_is_noop(self) -> None:
        buffer = OutputBuffer()
        buffer.write(b"")
        assert buffer.reallocations == 0

    @pytest.mark.parametrize("kwargs", [{"initial_capacity": -1}, {"grow_step": 0}])
    def test_invalid_settings(self, kwargs) -> None:
        with pytest.raises(InvalidArgument):
            OutputBuffer(**kwargs)
