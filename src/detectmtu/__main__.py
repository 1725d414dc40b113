from __future__ import annotations

import asyncio

from .cli import build_parser
from .core import run_detectmtu


def main() -> int:
    args = build_parser().parse_args()
    return asyncio.run(run_detectmtu(args))


if __name__ == "__main__":
    raise SystemExit(main())
