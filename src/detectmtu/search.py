from __future__ import annotations

from typing import Awaitable, Callable, Optional, Protocol

from .probe import ProbeOutcome


class Prober(Protocol):
    def probe(self, endpoint: str, size: int) -> Awaitable[ProbeOutcome]: ...


async def binary_search_payload(
    prober: Prober,
    endpoint: str,
    lo: int,
    hi: int,
    on_try: Optional[Callable[[int], None]] = None,
    on_outcome: Optional[Callable[[int, ProbeOutcome], None]] = None,
) -> int:
    """
    Largest payload in [lo, hi] that fits, or 0 if it could not be determined.

    Any inconclusive probe aborts the whole search.
    """
    if lo < 1:
        raise ValueError(f"lower bound must be >= 1, got {lo}")
    if hi < lo:
        raise ValueError(f"upper bound {hi} is below lower bound {lo}")

    hi += 1  # exclusive upper bound

    while lo < hi:
        mid = lo + (hi - lo) // 2
        if on_try:
            on_try(mid)

        outcome = await prober.probe(endpoint, mid)
        if on_outcome:
            on_outcome(mid, outcome)

        if outcome is ProbeOutcome.INCONCLUSIVE:
            return 0
        if outcome is ProbeOutcome.FITS:
            lo = mid + 1
        else:
            hi = mid

    return lo - 1
