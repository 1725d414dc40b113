from __future__ import annotations

import asyncio
import contextlib
import enum
import ipaddress
import os
import re
from typing import Awaitable, Callable


class ReplyStatus(enum.Enum):
    """Classification of a single ping attempt."""

    SUCCESS = "success"
    PACKET_TOO_BIG = "packet_too_big"
    NO_REPLY = "no_reply"


class ProbeOutcome(enum.Enum):
    FITS = "fits"
    TOO_BIG = "too_big"
    INCONCLUSIVE = "inconclusive"


# iputils wording for local EMSGSIZE, ICMP "frag needed" and ICMPv6 "packet too big"
_TOO_BIG_RE = re.compile(
    r"message too long|frag(mentation)? needed|packet too big", re.IGNORECASE
)

# ping could not run at all: missing privileges, or a ping that rejects our flags
_PERMISSION_RE = re.compile(r"operation not permitted|permission denied", re.IGNORECASE)
_USAGE_RE = re.compile(r"invalid argument|usage", re.IGNORECASE)


def _is_ipv6(endpoint: str) -> bool:
    try:
        return isinstance(ipaddress.ip_address(endpoint), ipaddress.IPv6Address)
    except ValueError:
        return ":" in endpoint


def classify_reply(returncode: int, output: str) -> ReplyStatus:
    if returncode == 0:
        return ReplyStatus.SUCCESS
    if _TOO_BIG_RE.search(output):
        return ReplyStatus.PACKET_TOO_BIG
    # exit 1 means ping ran and got no answer
    if returncode != 1:
        if _PERMISSION_RE.search(output):
            raise PermissionError(f"ping failed (exit {returncode}): {output.strip()}")
        if _USAGE_RE.search(output):
            raise OSError(f"ping failed (exit {returncode}): {output.strip()}")
    return ReplyStatus.NO_REPLY


class Pinger:
    """
    Sends "don't fragment" ICMP echoes through the system ping utility.

    One instance is meant to be created per run and reused for every probe.
    Probes are awaited one at a time, so no locking is done here.
    """

    def __init__(
        self,
        ping_bin: str = "ping",
        *,
        timeout: float = 2.0,
        ttl: int = 64,
        attempts: int = 3,
        backoff: float = 2.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.ping_bin = ping_bin
        self.timeout = timeout
        self.ttl = ttl
        self.attempts = attempts
        self.backoff = backoff
        self._sleep = sleep

    def build_cmd(self, endpoint: str, size: int) -> list[str]:
        cmd = [
            self.ping_bin,
            "-n",
            "-c",
            "1",
            "-M",
            "do",
            "-t",
            str(self.ttl),
            "-p",
            "00",
            "-s",
            str(size),
            "-W",
            str(max(1, int(round(self.timeout)))),
        ]
        if _is_ipv6(endpoint):
            cmd.insert(1, "-6")
        return cmd + [endpoint]

    async def ping_once(self, endpoint: str, size: int) -> ReplyStatus:
        if size < 1:
            raise ValueError(f"payload size must be positive, got {size}")

        proc = await asyncio.create_subprocess_exec(
            *self.build_cmd(endpoint, size),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            env={**os.environ, "LC_ALL": "C"},
        )
        try:
            out, _ = await asyncio.wait_for(proc.communicate(), timeout=self.timeout + 1)
        except asyncio.TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            return ReplyStatus.NO_REPLY

        return classify_reply(proc.returncode, out.decode(errors="replace"))

    async def probe(self, endpoint: str, size: int) -> ProbeOutcome:
        """
        Probe one payload size, retrying lost or ambiguous attempts.

        SUCCESS and PACKET_TOO_BIG are final; anything else is retried after
        a fixed backoff until the attempts are used up.
        """
        for _ in range(self.attempts):
            status = await self.ping_once(endpoint, size)
            if status is ReplyStatus.SUCCESS:
                return ProbeOutcome.FITS
            if status is ReplyStatus.PACKET_TOO_BIG:
                return ProbeOutcome.TOO_BIG
            await self._sleep(self.backoff)

        return ProbeOutcome.INCONCLUSIVE
