from __future__ import annotations
from typing import BinaryIO, Iterator, Optional

from .errors import BufferGrowthError

INITIAL_BUFFER_SIZE = 1024
NEWLINE = b"\n"


class LineReader:
    """Reads logical lines of any length into a growable, reusable buffer.

    The buffer belongs to a single file scan. It doubles whenever a line does
    not fit and never shrinks, so ``capacity`` always exceeds the longest line
    read so far. Growth past ``max_capacity`` (when set) or a failed allocation
    raises :class:`BufferGrowthError`.
    """

    def __init__(self, initial_capacity: int = INITIAL_BUFFER_SIZE, max_capacity: Optional[int] = None) -> None:
        if initial_capacity < 2:
            raise ValueError("initial_capacity must be at least 2")
        if max_capacity is not None and max_capacity < initial_capacity:
            raise ValueError("max_capacity must not be smaller than initial_capacity")
        self.max_capacity = max_capacity
        self._buffer: Optional[bytearray] = bytearray(initial_capacity)

    @property
    def capacity(self) -> int:
        return len(self._buffer) if self._buffer is not None else 0

    def _grow(self) -> None:
        requested = self.capacity * 2
        if self.max_capacity is not None and requested > self.max_capacity:
            raise BufferGrowthError(requested, f"exceeds limit of {self.max_capacity} bytes")
        try:
            self._buffer.extend(bytes(requested - self.capacity))
        except MemoryError as exc:
            raise BufferGrowthError(requested, "out of memory") from exc

    def read_line(self, handle: BinaryIO) -> Optional[bytes]:
        """Return the next line (newline included when present) or ``None`` at EOF."""
        if self._buffer is None:
            raise ValueError("line reader has been released")
        fill = 0
        while True:
            # Leave one spare byte, as a C string buffer would for its terminator.
            room = self.capacity - fill - 1
            chunk = handle.readline(room)
            if chunk:
                end = fill + len(chunk)
                self._buffer[fill:end] = chunk
                fill = end
                if chunk.endswith(NEWLINE):
                    break
            if not chunk or len(chunk) < room:
                # EOF: what we have is the final, unterminated line.
                break
            self._grow()
        if fill == 0:
            return None
        return bytes(self._buffer[:fill])

    def lines(self, handle: BinaryIO) -> Iterator[bytes]:
        while True:
            line = self.read_line(handle)
            if line is None:
                return
            yield line

    def release(self) -> None:
        self._buffer = None
