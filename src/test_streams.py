"""
test_streams.py
Purpose: Record-at-a-time reading and flushed writing over binary pipes.
"""

import io

import pytest

from axcheck.errors import EndOfStream, IOFailure, MalformedEnvelope
from axcheck.schemas import Action, ROLE_TICK
from axcheck.streams import StreamReader, StreamWriter


class FlushTracker(io.BytesIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


class BrokenPipe(io.BytesIO):
    def write(self, data):
        raise BrokenPipeError("downstream went away")


class FailingFlush(io.BytesIO):
    def flush(self):
        raise OSError("flush rejected")


class FailingRead(io.BytesIO):
    def readline(self, size=-1):
        raise OSError("read rejected")


def test_reads_one_record_at_a_time():
    reader = StreamReader(io.BytesIO(b'{"a": 1}\n{"b": 2}\n'))
    assert reader.read_record() == b'{"a": 1}'
    assert reader.read_record() == b'{"b": 2}'
    with pytest.raises(EndOfStream):
        reader.read_record()


def test_empty_input_is_end_of_stream():
    with pytest.raises(EndOfStream):
        StreamReader(io.BytesIO(b"")).read_record()


def test_unterminated_tail_is_end_of_stream():
    reader = StreamReader(io.BytesIO(b'{"a": 1}\n{"b"'))
    assert reader.read_record() == b'{"a": 1}'
    with pytest.raises(EndOfStream):
        reader.read_record()


def test_read_error_is_io_failure():
    with pytest.raises(IOFailure):
        StreamReader(FailingRead()).read_record()


def test_read_action_decodes():
    reader = StreamReader(io.BytesIO(b'{"axmsg": 1, "responseId": 4, "role": "tick"}\n'))
    action = reader.read_action()
    assert action.response_id == 4


def test_write_record_terminates_and_flushes_each_call():
    sink = FlushTracker()
    writer = StreamWriter(sink)
    writer.write_record(b'{"x": 1}')
    assert sink.flushes == 1
    writer.write_record(b'{"x": 2}\n')
    assert sink.flushes == 2
    assert sink.getvalue() == b'{"x": 1}\n{"x": 2}\n'


def test_write_record_rejects_embedded_terminator():
    with pytest.raises(MalformedEnvelope):
        StreamWriter(io.BytesIO()).write_record(b"one\ntwo")


def test_write_action_is_one_line():
    sink = io.BytesIO()
    StreamWriter(sink).write_action(Action.event(1, ROLE_TICK))
    assert sink.getvalue() == b'{"axmsg":1,"responseId":1,"role":"tick"}\n'


@pytest.mark.parametrize("sink", [BrokenPipe(), FailingFlush()])
def test_write_failures_are_io_failures(sink):
    with pytest.raises(IOFailure):
        StreamWriter(sink).write_record(b"{}")


def test_closed_sink_is_io_failure():
    sink = io.BytesIO()
    sink.close()
    with pytest.raises(IOFailure):
        StreamWriter(sink).write_record(b"{}")
