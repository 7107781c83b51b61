from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .config import Mode, ProbeConfig
from .errors import EndOfStream, IOFailure, MalformedEnvelope, ValidationFailure
from .logger import Diagnostics
from .pacing import Pacer
from .schemas import (
    Action,
    CMD_ADD_PROCESSOR_NAME,
    ROLE_CHECK,
    ROLE_CHECK_SUCCESS,
    ROLE_TICK,
    CheckPayload,
    DatePayload,
    SuccessPayload,
)
from .streams import StreamReader, StreamWriter
from .validators.discovery import validate_discovery


@dataclass
class ProbeState:
    """
    Per-run mutable state, owned by exactly one driver.

    - counter: correlation id source; only ever incremented
    - date: simulated calendar day, one day per tick written
    """
    counter: int = 0
    date: datetime.date = field(default_factory=datetime.date.today)

    def next_id(self) -> int:
        self.counter += 1
        return self.counter

    def advance_day(self) -> None:
        self.date = self.date + datetime.timedelta(days=1)


class ModeDriver:
    """
    Runs one of the tick / collect / check loops against a single input and output.

    Notes:
    - Only tick recovers from errors (log, skip the tick, keep going).
    - Every other failure goes through `Diagnostics.log_fatal`, which exits.
    """

    def __init__(
        self,
        config: ProbeConfig,
        reader: StreamReader,
        writer: StreamWriter,
        diagnostics: Diagnostics,
        state: Optional[ProbeState] = None,
        pacer: Optional[Pacer] = None,
    ) -> None:
        self.config = config
        self.reader = reader
        self.writer = writer
        self.diagnostics = diagnostics
        self.state = state or ProbeState()
        self.pacer = pacer

    def run(self, max_ticks: Optional[int] = None) -> None:
        loops: Dict[Mode, Callable[[], None]] = {
            Mode.TICK: lambda: self.run_tick(max_ticks),
            Mode.COLLECT: self.run_collect,
            Mode.CHECK: self.run_check,
        }
        loop = loops.get(self.config.mode)
        if loop is None:
            self.diagnostics.log_fatal(None, "Unsupported mode %s", self.config.mode)
        loop()

    # ---- tick ----

    def run_tick(self, max_ticks: Optional[int] = None) -> None:
        """Produce ticks until terminated (or until `max_ticks` attempts)."""
        if self.pacer is None:
            speed = self.config.speed
            if speed is None:
                self.diagnostics.log_fatal(None, "Tick mode requires a SPEED")
            self.pacer = Pacer(speed.interval)

        attempts = 0
        while max_ticks is None or attempts < max_ticks:
            self.pacer.wait()
            self.produce_next()
            attempts += 1

    def produce_next(self) -> bool:
        """Write one tick for the current simulated day. False if the write failed."""
        cid = self.state.next_id()
        action = Action.event(cid, ROLE_TICK, DatePayload.from_date(self.state.date))
        try:
            self.writer.write_action(action)
        except IOFailure as e:
            self.diagnostics.log(cid, "Error writing tick to output: %s", e)
            return False
        self.state.advance_day()
        return True

    # ---- collect ----

    def run_collect(self) -> None:
        """Forward input records to output verbatim; any input closure is fatal."""
        while True:
            try:
                record = self.reader.read_record()
            except EndOfStream:
                self.diagnostics.log_fatal(None, "Unexpected EOL listening for input")
            except IOFailure as e:
                self.diagnostics.log_fatal(None, "Unexpected error listening for input: %s", e)

            try:
                self.writer.write_record(record)
            except IOFailure as e:
                self.diagnostics.log_fatal(None, "Error forwarding record to output: %s", e)

    # ---- check ----

    def run_check(self) -> None:
        """One discovery round-trip; returns only on success."""
        request_id = self.state.next_id()
        request = Action.request(
            request_id, ROLE_CHECK, CheckPayload(), command=CMD_ADD_PROCESSOR_NAME
        )
        try:
            self.writer.write_action(request)
        except IOFailure as e:
            self.diagnostics.log_fatal(request_id, "Error writing check request: %s", e)

        try:
            reply = self.reader.read_action()
        except EndOfStream:
            self.diagnostics.log_fatal(request_id, "Unexpected EOL waiting for check response")
        except IOFailure as e:
            self.diagnostics.log_fatal(request_id, "Unexpected error waiting for check response: %s", e)
        except MalformedEnvelope as e:
            self.diagnostics.log_fatal(request_id, "Malformed check response: %s", e)

        if reply.role != ROLE_CHECK:
            self.diagnostics.log_fatal(
                request_id, "Expected a %s response, but got role %r", ROLE_CHECK, reply.role
            )

        try:
            checked = reply.payload_as(CheckPayload)
        except MalformedEnvelope as e:
            self.diagnostics.log_fatal(request_id, "Malformed check response: %s", e)

        try:
            validate_discovery(self.config.expect, checked.processors)
        except ValidationFailure as e:
            self.diagnostics.log_fatal(request_id, "Check failed, %s", e)

        success_id = self.state.next_id()
        try:
            self.writer.write_action(
                Action.event(success_id, ROLE_CHECK_SUCCESS, SuccessPayload(success=True))
            )
        except IOFailure as e:
            self.diagnostics.log_fatal(success_id, "Error writing check success: %s", e)

        self.diagnostics.log(
            success_id, "Check succeeded, discovered: %s", ", ".join(checked.processors)
        )
