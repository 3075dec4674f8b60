"""Command line entry: start one thread, then wait for it or leave it running."""

from __future__ import annotations

import argparse
import threading
from typing import List, Optional


def _report(value: int) -> None:
    print(f"Function : {value}", flush=True)


def main(argv: Optional[List[str]] = None) -> int:
    """Print from the main thread and a worker thread; join the worker unless detached."""
    parser = argparse.ArgumentParser(
        prog="threadlab", description="Run a function on a separate thread."
    )
    parser.add_argument("value", nargs="?", type=int, default=10, help="value the thread prints")
    parser.add_argument(
        "--detach",
        action="store_true",
        help="do not wait for the thread before finishing",
    )
    args = parser.parse_args(argv)

    print("Main", flush=True)
    worker = threading.Thread(target=_report, args=(args.value,), daemon=args.detach)
    worker.start()
    if not args.detach:
        worker.join()
    print("Done", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())