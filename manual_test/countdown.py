#!/usr/bin/env python3
"""Counts down, writes to both streams, then exits with the given code."""

import sys
import time


def main() -> int:
    start = int(sys.argv[1]) if len(sys.argv) > 1 else 5
    code = int(sys.argv[2]) if len(sys.argv) > 2 else 0
    for n in range(start, 0, -1):
        print(f"{n}...", flush=True)
        if n % 2 == 0:
            print(f"stderr tick {n}", file=sys.stderr, flush=True)
        time.sleep(1)
    print(f"done, exiting with {code}", flush=True)
    return code


if __name__ == "__main__":
    sys.exit(main())
