from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .output import Logger, OutputMode, emit_json, emit_result
from .probe import Pinger
from .search import Prober, binary_search_payload

ETHERNET_MTU = 1500
ICMP_HEADER = 8
TCP_HEADER = 20


@dataclass(frozen=True)
class ProbeTarget:
    family: str  # "v4" | "v6"
    endpoint: str
    ip_header: int
    icmp_header: int = ICMP_HEADER
    tcp_header: int = TCP_HEADER

    @property
    def max_payload(self) -> int:
        return ETHERNET_MTU - self.ip_header - self.icmp_header

    def mtu(self, payload: int) -> int:
        return payload + self.ip_header + self.icmp_header

    def mss(self, mtu: int) -> int:
        return mtu - self.ip_header - self.tcp_header


V4_TARGET = ProbeTarget(family="v4", endpoint="1.1.1.1", ip_header=20)
V6_TARGET = ProbeTarget(family="v6", endpoint="2606:4700:4700::1111", ip_header=40)


@dataclass(frozen=True)
class Result:
    family: str
    endpoint: str
    payload: int
    mtu: Optional[int]
    mss: Optional[int]

    @property
    def detected(self) -> bool:
        return self.mtu is not None


async def detect_mtu(
    target: ProbeTarget,
    prober: Prober,
    log: Optional[Callable[[str], None]] = None,
    on_try: Optional[Callable[[int], None]] = None,
) -> Result:
    log = log or (lambda _msg: None)
    log(
        f"[detectmtu] {target.family}: probing {target.endpoint} "
        f"(payload 1..{target.max_payload})"
    )

    payload = await binary_search_payload(
        prober,
        target.endpoint,
        1,
        target.max_payload,
        on_try=on_try,
        on_outcome=lambda size, outcome: log(
            f"[detectmtu] {target.family}:  - {size}: {outcome.value}"
        ),
    )

    if payload == 0:
        log(f"[detectmtu] {target.family}: detection failed")
        return Result(target.family, target.endpoint, 0, None, None)

    mtu = target.mtu(payload)
    log(f"[detectmtu] {target.family}: largest payload {payload}, MTU {mtu}")
    return Result(target.family, target.endpoint, payload, mtu, target.mss(mtu))


async def run_detectmtu(args, pinger: Optional[Prober] = None) -> int:
    mode = OutputMode(
        print_json=bool(getattr(args, "print_json", False)),
        verbose=bool(getattr(args, "verbose", False)),
    )
    logger = Logger(mode)

    if pinger is None:
        pinger = Pinger(getattr(args, "ping_bin", None) or "ping")

    # v4 runs to completion before v6 starts
    results: list[Result] = []
    for target in (V4_TARGET, V6_TARGET):
        result = await detect_mtu(
            target, pinger, log=logger.log, on_try=logger.progress
        )
        emit_result(mode, result)
        results.append(result)

    emit_json(mode, results)
    return 0
