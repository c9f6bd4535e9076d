#!/usr/bin/env python3
"""Endless coloured output; prints a readiness marker first."""

import itertools
import random
import time

COLORS = {
    "red": "\033[91m",
    "green": "\033[92m",
    "yellow": "\033[93m",
    "blue": "\033[94m",
    "magenta": "\033[95m",
    "cyan": "\033[96m",
}
RESET = "\033[0m"


def main() -> None:
    print("warming up...", flush=True)
    time.sleep(2)
    print("colors ready", flush=True)
    for n in itertools.count(1):
        name = random.choice(list(COLORS))
        print(f"{COLORS[name]}message #{n} in {name}{RESET}", flush=True)
        time.sleep(0.5)


if __name__ == "__main__":
    main()
