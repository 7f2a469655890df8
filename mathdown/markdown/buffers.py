"""Growable byte buffer used to pass text across the render boundary."""

from __future__ import annotations

from .errors import AllocationError


class RenderBuffer:
    """
    A growable UTF-8 byte buffer.

    Growth is observable: asking for more room than ``max_size`` allows (or
    running out of memory) raises AllocationError instead of silently
    truncating. A released buffer cannot be written to or read from.

    Use it as a context manager to release it on every exit path::

        with RenderBuffer(max_size=limit) as buffer:
            buffer.put(html)
            return buffer.getvalue()
    """

    def __init__(self, unit: int = 128, max_size: int | None = None):
        if unit <= 0:
            raise ValueError("unit must be positive")
        self.unit = unit
        self.max_size = max_size
        self._data: bytearray | None = bytearray()
        self._capacity = 0
        self.grow(unit if max_size is None else min(unit, max_size))

    @classmethod
    def from_text(cls, text: str, max_size: int | None = None) -> "RenderBuffer":
        """Allocate a buffer sized for ``text`` and copy it in."""
        buffer = cls(max_size=max_size)
        try:
            buffer.put(text)
        except AllocationError:
            buffer.release()
            raise
        return buffer

    @property
    def allocated(self) -> bool:
        return self._data is not None

    @property
    def size(self) -> int:
        self._check_allocated()
        return len(self._data)

    @property
    def capacity(self) -> int:
        return self._capacity

    def grow(self, size: int) -> None:
        """Make sure the buffer can hold at least ``size`` bytes."""
        self._check_allocated()
        if size <= self._capacity:
            return
        if self.max_size is not None and size > self.max_size:
            raise AllocationError(
                f"buffer cannot grow to {size} bytes (limit {self.max_size})",
                location="RenderBuffer.grow",
            )
        # Round up to the next multiple of the allocation unit
        capacity = -(-size // self.unit) * self.unit
        if self.max_size is not None:
            capacity = min(capacity, self.max_size)
        try:
            # Allocation check only: the data itself grows on put_bytes
            bytearray(capacity - len(self._data))
        except MemoryError as exc:
            raise AllocationError("out of memory growing buffer", location="RenderBuffer.grow") from exc
        self._capacity = capacity

    def put(self, text: str) -> None:
        self.put_bytes(text.encode("utf-8"))

    def put_bytes(self, data: bytes) -> None:
        self._check_allocated()
        self.grow(len(self._data) + len(data))
        self._data.extend(data)

    def getvalue(self) -> str:
        """Return the contents decoded as UTF-8."""
        self._check_allocated()
        return self._data.decode("utf-8")

    def release(self) -> None:
        self._data = None
        self._capacity = 0

    def __enter__(self) -> "RenderBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def _check_allocated(self) -> None:
        if self._data is None:
            raise AllocationError("buffer has been released", location="RenderBuffer")
