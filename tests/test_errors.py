import io
import math
import queue
import threading

import pytest

from structdigest import (
    BufferSink,
    DepthExceeded,
    DigestError,
    SinkWriteFailure,
    UnsupportedType,
    compute_digest,
    sha256_digest,
)


def _gen():
    yield 1


@pytest.mark.parametrize("value", [
    lambda: 0,
    len,
    _gen(),
    math,
    int,
    object(),
    threading.Lock(),
    queue.Queue(),
    io.BytesIO(b"x"),
    memoryview(b"x"),
])
def test_unsupported_values_raise(value):
    with pytest.raises(UnsupportedType):
        sha256_digest(value)


def test_error_path_names_the_position():
    value = [1, {"k": [2, lambda: 0]}]
    with pytest.raises(UnsupportedType) as ei:
        sha256_digest(value)
    err = ei.value
    assert err.location == "$[1]{'k'}[1]"
    assert "function" in str(err)
    assert str(err).endswith("at $[1]{'k'}[1]")


def test_error_path_through_aggregate_member():
    import dataclasses

    @dataclasses.dataclass
    class Job:
        name: str
        run: object

    with pytest.raises(UnsupportedType) as ei:
        sha256_digest([Job("a", print)])
    assert ei.value.location == "$[0].run"


def test_errors_share_a_base_class():
    assert issubclass(DepthExceeded, DigestError)
    assert issubclass(UnsupportedType, DigestError)
    assert issubclass(SinkWriteFailure, DigestError)


class FailingSink:
    def __init__(self, fail_after=0):
        self.writes = 0
        self.fail_after = fail_after
        self.finalized = False

    def write(self, data):
        if self.writes >= self.fail_after:
            raise OSError("disk full")
        self.writes += 1
        return len(data)

    def finalize(self):
        self.finalized = True
        return b""


class ShortSink(BufferSink):
    def write(self, data):
        super().write(data)
        return len(data) - 1


def test_sink_exception_becomes_write_failure():
    sink = FailingSink(fail_after=1)
    with pytest.raises(SinkWriteFailure) as ei:
        compute_digest(["a", "b"], sink)
    assert isinstance(ei.value.__cause__, OSError)
    assert ei.value.location == "$[0]"
    assert not sink.finalized


def test_short_write_is_a_failure():
    with pytest.raises(SinkWriteFailure):
        compute_digest("abc", ShortSink())


def test_failure_aborts_before_finalize():
    sink = FailingSink(fail_after=100)
    with pytest.raises(UnsupportedType):
        compute_digest([1, object()], sink)
    assert not sink.finalized
