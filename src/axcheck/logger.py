from __future__ import annotations

import json
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional, TextIO


def _default_stream() -> TextIO:
    return sys.stderr


@dataclass
class Diagnostics:
    """
    Structured diagnostics sink (JSON Lines).

    Discipline:
    - fixed fields (ts, source, level, message)
    - `id` only when the message concerns a specific Action
    - one record per line, written to stderr (stdout belongs to the wire)
    - optional append-only mirror at `log_path`
    """
    source: str
    stream: TextIO = field(default_factory=_default_stream)
    log_path: Optional[Path] = None

    def log(self, correlation_id: Optional[int], fmt: str, *args: Any) -> None:
        self._emit("info", correlation_id, fmt, args)

    def log_fatal(self, correlation_id: Optional[int], fmt: str, *args: Any) -> NoReturn:
        self._emit("fatal", correlation_id, fmt, args)
        sys.exit(1)

    def _emit(self, level: str, correlation_id: Optional[int], fmt: str, args: tuple) -> None:
        record: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime()),
            "source": self.source,
            "level": level,
        }
        if correlation_id is not None:
            record["id"] = correlation_id
        record["message"] = fmt % args if args else fmt

        line = json.dumps(record, ensure_ascii=False) + "\n"
        self.stream.write(line)
        self.stream.flush()

        if self.log_path is not None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.log_path.open("a", encoding="utf-8") as f:
                f.write(line)
