from __future__ import annotations

# ---- Environment bootstrap (MUST be first) ----
from dotenv import load_dotenv

# Load .env once at process start
load_dotenv()

# ---- CLI / driver imports ----
import os
from pathlib import Path
from typing import Optional

import typer

from .config import load_config
from .driver import ModeDriver
from .errors import ConfigurationError, IOFailure
from .logger import Diagnostics
from .streams import StreamReader, StreamWriter, open_input, open_output


app = typer.Typer(add_completion=False, help="approx pipeline conformance probe")


@app.callback(invoke_without_command=True)
def main(
    mode: Optional[str] = typer.Option(None, help="tick/produce, collect/consume or check (env MODE)"),
    speed: Optional[str] = typer.Option(None, help="untethered, fast, moderate or slow (env SPEED)"),
    expect: Optional[str] = typer.Option(None, help="Comma-separated processor names (env EXPECT)"),
    ins: Optional[str] = typer.Option(None, help="Input stream, '-' for stdin (env INS)"),
    outs: Optional[str] = typer.Option(None, help="Output stream, '-' for stdout (env OUTS)"),
    log_path: Optional[Path] = typer.Option(None, help="Mirror diagnostics to this JSONL file (env LOG_PATH)"),
    source: str = typer.Option("approx_check", help="Source name stamped on diagnostics"),
    max_ticks: Optional[int] = typer.Option(None, min=1, help="Stop tick mode after N ticks"),
):
    """
    Run one probe node: produce ticks, forward records, or check processor discovery.
    """
    env_log_path = os.getenv("LOG_PATH")
    diagnostics = Diagnostics(
        source=source,
        log_path=log_path or (Path(env_log_path) if env_log_path else None),
    )

    try:
        cfg = load_config(
            mode=mode,
            speed=speed,
            expect=expect,
            inputs=ins,
            outputs=outs,
            log_path=log_path,
            source=source,
        )
    except ConfigurationError as e:
        diagnostics.log_fatal(None, "Invalid configuration: %s", e)

    diagnostics.log_path = cfg.log_path

    try:
        reader = StreamReader(open_input(cfg.input))
        writer = StreamWriter(open_output(cfg.output))
    except IOFailure as e:
        diagnostics.log_fatal(None, "Cannot open streams: %s", e)

    ModeDriver(cfg, reader, writer, diagnostics).run(max_ticks=max_ticks)


if __name__ == "__main__":
    app()
