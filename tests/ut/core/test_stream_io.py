import io

import pytest

from framewire.core.helpers.io import copy_exact, read_exact, write_all
from framewire.core.models.errors import EndOfStream, FrameIOError
from tests.fake.fake_stream import (
    BrokenWriter,
    FailingReader,
    NotReadyReader,
    PartialWriter,
    StalledWriter,
    TrickleReader,
)


@pytest.mark.ut
def test_read_exact_retries_short_reads():
    reader = TrickleReader(b"abcdefgh", step=3)

    assert read_exact(reader, 8, chunk_size=1024) == b"abcdefgh"
    assert reader.reads == 3


@pytest.mark.ut
def test_read_exact_honours_chunk_size():
    reader = TrickleReader(b"abcdefgh", step=100)

    assert read_exact(reader, 6, chunk_size=2) == b"abcdef"
    assert reader.reads == 3
    assert reader.position == 6


@pytest.mark.ut
def test_read_exact_zero_bytes_does_not_touch_stream():
    reader = TrickleReader(b"abc")

    assert read_exact(reader, 0, chunk_size=4) == b""
    assert reader.reads == 0


@pytest.mark.ut
def test_read_exact_short_stream():
    with pytest.raises(FrameIOError) as exc_info:
        read_exact(io.BytesIO(b"abc"), 5, chunk_size=4)

    err = exc_info.value
    assert not isinstance(err, EndOfStream)
    assert err.expected == 5
    assert err.received == 3


@pytest.mark.ut
def test_read_exact_empty_stream_at_boundary():
    with pytest.raises(EndOfStream) as exc_info:
        read_exact(io.BytesIO(b""), 8, chunk_size=4, at_boundary=True)

    assert exc_info.value.received == 0


@pytest.mark.ut
def test_read_exact_empty_stream_inside_frame_is_plain_io_error():
    with pytest.raises(FrameIOError) as exc_info:
        read_exact(io.BytesIO(b""), 8, chunk_size=4)

    assert not isinstance(exc_info.value, EndOfStream)


@pytest.mark.ut
def test_read_exact_wraps_stream_errors():
    cause = TimeoutError("timed out")
    reader = FailingReader(b"ab", cause)

    with pytest.raises(FrameIOError) as exc_info:
        read_exact(reader, 4, chunk_size=2)

    assert exc_info.value.cause is cause
    assert exc_info.value.__cause__ is cause
    assert exc_info.value.received == 2


@pytest.mark.ut
def test_read_exact_closed_stream():
    stream = io.BytesIO(b"abcdefgh")
    stream.close()

    with pytest.raises(FrameIOError):
        read_exact(stream, 8, chunk_size=8)


@pytest.mark.ut
def test_read_exact_non_blocking_stream_without_data():
    with pytest.raises(FrameIOError):
        read_exact(NotReadyReader(), 8, chunk_size=8)


@pytest.mark.ut
def test_write_all_retries_partial_writes():
    writer = PartialWriter(step=3)

    write_all(writer, b"abcdefgh")

    assert bytes(writer.buffer) == b"abcdefgh"
    assert writer.writes == 3


@pytest.mark.ut
def test_write_all_empty_data_is_a_noop():
    writer = PartialWriter()

    write_all(writer, b"")

    assert writer.writes == 0


@pytest.mark.ut
def test_write_all_wraps_broken_pipe():
    writer = BrokenWriter(capacity=5)

    with pytest.raises(FrameIOError) as exc_info:
        write_all(writer, b"abcdefgh")

    assert isinstance(exc_info.value.cause, BrokenPipeError)
    assert bytes(writer.buffer) == b"abcde"


@pytest.mark.ut
def test_write_all_stalled_writer():
    with pytest.raises(FrameIOError):
        write_all(StalledWriter(), b"abc")


@pytest.mark.ut
def test_copy_exact_copies_only_requested_bytes():
    source = io.BytesIO(b"abcdefgh")
    target = io.BytesIO()

    copy_exact(source, target, 5, chunk_size=2)

    assert target.getvalue() == b"abcde"
    assert source.read() == b"fgh"
