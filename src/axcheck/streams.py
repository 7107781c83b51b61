from __future__ import annotations

import sys
from typing import BinaryIO

from .codec import TERMINATOR, decode, encode
from .errors import EndOfStream, IOFailure, MalformedEnvelope
from .schemas import Action

STDIO = "-"


class StreamReader:
    """
    Forward-only, one-record-at-a-time reader over a binary pipe.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def read_record(self) -> bytes:
        """Block until one full record arrives; returns it without the terminator."""
        try:
            line = self._stream.readline()
        except (OSError, ValueError) as e:
            raise IOFailure(f"read failed: {e}") from e

        if not line:
            raise EndOfStream("input closed")
        if not line.endswith(TERMINATOR):
            # closed mid-record; the fragment can never be completed
            raise EndOfStream(f"input closed after {len(line)} bytes of an unterminated record")
        return line[: -len(TERMINATOR)]

    def read_action(self) -> Action:
        return decode(self.read_record())


class StreamWriter:
    """
    Writes one terminated record per call and flushes before returning.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def write_record(self, record: bytes) -> None:
        if record.endswith(TERMINATOR):
            record = record[: -len(TERMINATOR)]
        if TERMINATOR in record:
            raise MalformedEnvelope("record contains an embedded line terminator")
        self._write(record + TERMINATOR)

    def write_action(self, action: Action) -> None:
        self._write(encode(action))

    def _write(self, data: bytes) -> None:
        try:
            self._stream.write(data)
        except (OSError, ValueError) as e:
            raise IOFailure(f"write failed: {e}") from e
        try:
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise IOFailure(f"flush failed: {e}") from e


def open_input(name: str) -> BinaryIO:
    """`-` is stdin; anything else is a path (typically a named pipe)."""
    if name == STDIO:
        return sys.stdin.buffer
    try:
        return open(name, "rb")
    except OSError as e:
        raise IOFailure(f"cannot open input {name!r}: {e}") from e


def open_output(name: str) -> BinaryIO:
    """`-` is stdout; anything else is a path (typically a named pipe)."""
    if name == STDIO:
        return sys.stdout.buffer
    try:
        return open(name, "wb")
    except OSError as e:
        raise IOFailure(f"cannot open output {name!r}: {e}") from e
