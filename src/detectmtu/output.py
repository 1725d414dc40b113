# src/detectmtu/output.py
from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .core import Result


@dataclass(frozen=True)
class OutputMode:
    print_json: bool
    verbose: bool = False

    @property
    def machine(self) -> bool:
        return bool(self.print_json)


class Logger:
    """
    Diagnostics always go to stderr and only when verbose.
    Progress goes to stderr in machine mode, so stdout can be cleanly parsed.
    """

    def __init__(self, mode: OutputMode) -> None:
        self._machine = mode.machine
        self._verbose = mode.verbose

    def log(self, msg: str) -> None:
        if self._verbose:
            print(msg, file=sys.stderr)

    def progress(self, size: int) -> None:
        stream = sys.stderr if self._machine else sys.stdout
        print(f"Try {size}", end="\r", file=stream, flush=True)


def emit_result(mode: OutputMode, result: Result) -> None:
    if not result.detected:
        print(f"Failed to detect {result.family} MTU", file=sys.stderr)
        return
    if mode.machine:
        return
    print(f"{result.family} MTU: {result.mtu}, MSS: {result.mss}")


def emit_json(mode: OutputMode, results: list[Result]) -> bool:
    """
    Returns True if it emitted output.
    """
    if not mode.print_json:
        return False

    payload = {
        r.family: {
            "endpoint": r.endpoint,
            "payload": int(r.payload),
            "mtu": int(r.mtu) if r.mtu is not None else None,
            "mss": int(r.mss) if r.mss is not None else None,
            "detected": bool(r.detected),
        }
        for r in results
    }

    print(json.dumps(payload, sort_keys=True))
    return True
