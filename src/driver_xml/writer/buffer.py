"""Growable output buffer for serialized XML."""

from typing import Union

from driver_xml.shared.config import DEFAULT_GROW_STEP
from driver_xml.shared.errors import InvalidArgument


class OutputBuffer:
    """Byte buffer with an explicit capacity.

    Writes that do not fit grow the storage by ``grow_step`` bytes when the
    write is smaller than the step, and by the write size plus one otherwise.
    Existing contents are kept across growth and the write position carries
    on where it was.

    Example:
        >>> buf = OutputBuffer()
        >>> buf.write(b"<a/>")
        >>> buf.getvalue(), buf.capacity, buf.reallocations
        (b'<a/>', 512, 1)
    """

    def __init__(self, initial_capacity: int = 0, grow_step: int = DEFAULT_GROW_STEP) -> None:
        if initial_capacity < 0:
            raise InvalidArgument("initial_capacity must be >= 0")
        if grow_step <= 0:
            raise InvalidArgument("grow_step must be > 0")
        self._storage = bytearray(initial_capacity)
        self._size = 0
        self.grow_step = grow_step
        self.reallocations = 0

    @property
    def size(self) -> int:
        """Number of bytes written so far."""
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._storage)

    @property
    def free(self) -> int:
        return len(self._storage) - self._size

    def __len__(self) -> int:
        return self._size

    def write(self, data: Union[bytes, bytearray, str]) -> None:
        """Append ``data``; text must be ASCII."""
        if isinstance(data, str):
            try:
                data = data.encode("ascii")
            except UnicodeEncodeError as e:
                raise InvalidArgument(f"Output text must be ASCII: {e}") from e
        if not data:
            return
        if len(data) > self.free:
            self._grow(len(data))
        end = self._size + len(data)
        self._storage[self._size:end] = data
        self._size = end

    def _grow(self, needed: int) -> None:
        increment = self.grow_step if needed < self.grow_step else needed + 1
        self._storage.extend(bytes(increment))
        self.reallocations += 1

    def getvalue(self) -> bytes:
        """The bytes written so far, without the unused capacity."""
        return bytes(self._storage[:self._size])
