from __future__ import annotations

import argparse
import os


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="detectmtu",
        description="Detect the IPv4 and IPv6 path MTU towards fixed public endpoints.",
    )

    ap.add_argument(
        "--ping-bin",
        default=os.environ.get("DETECTMTU_PING", "ping"),
        help="ping executable to use (default: $DETECTMTU_PING or ping).",
    )
    ap.add_argument(
        "--verbose",
        action="store_true",
        help="Log every probe and its outcome to stderr.",
    )

    # --- Machine-readable output mode ---
    ap.add_argument(
        "--print-json",
        action="store_true",
        help="Print a JSON object with the detected values (stdout) for automation.",
    )

    return ap
