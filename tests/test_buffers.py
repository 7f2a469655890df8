import pytest

from mathdown.markdown.buffers import RenderBuffer
from mathdown.markdown.errors import AllocationError


def test_put_and_read_back_utf8() -> None:
    with RenderBuffer() as buffer:
        buffer.put("<p>caf")
        buffer.put("é</p>")
        assert buffer.getvalue() == "<p>café</p>"
        assert buffer.size == len("<p>café</p>".encode("utf-8"))


def test_grows_in_allocation_units() -> None:
    buffer = RenderBuffer(unit=16)
    assert buffer.capacity == 16
    buffer.put("x" * 17)
    assert buffer.capacity == 32


def test_growing_past_the_limit_is_an_allocation_error() -> None:
    buffer = RenderBuffer(max_size=8)
    buffer.put("12345678")
    with pytest.raises(AllocationError) as excinfo:
        buffer.put("9")
    assert excinfo.value.location == "RenderBuffer.grow"
    # The failed write left the contents alone
    assert buffer.getvalue() == "12345678"


def test_from_text_respects_the_limit() -> None:
    with pytest.raises(AllocationError):
        RenderBuffer.from_text("# Title\n\nHello", max_size=4)
    assert RenderBuffer.from_text("# Title", max_size=64).getvalue() == "# Title"


def test_released_buffer_cannot_be_used() -> None:
    with RenderBuffer() as buffer:
        buffer.put("text")
    assert not buffer.allocated
    with pytest.raises(AllocationError):
        buffer.getvalue()


def test_rejects_non_positive_unit() -> None:
    with pytest.raises(ValueError):
        RenderBuffer(unit=0)
