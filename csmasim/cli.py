"""Interactive command that picks and runs a CSMA variant."""

from __future__ import annotations

import argparse
import random
import sys

from csmasim.protocols import non_persistent, one_persistent, p_persistent


def _ask(prompt: str) -> str:
    print(prompt, end="", flush=True)
    return sys.stdin.readline().strip()


def main(argv: list[str] | None = None) -> int:
    """Ask for a CSMA variant on standard input and run it."""
    parser = argparse.ArgumentParser(prog="csmasim", description="CSMA simulator")
    parser.add_argument(
        "--delay", type=float, default=1.0, help="seconds to pause between time steps"
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)

    print("Select CSMA Implementation:")
    print("1. One Persistent CSMA")
    print("2. Non-Persistent CSMA")
    print("3. P-Persistent CSMA")
    try:
        choice = int(_ask("Enter your choice (1-3): "))
    except ValueError:
        choice = 0

    if choice == 1:
        print("Running One Persistent CSMA")
        one_persistent(rng, delay=args.delay)
    elif choice == 2:
        print("Running Non-Persistent CSMA")
        non_persistent(rng, delay=args.delay)
    elif choice == 3:
        try:
            probability = float(_ask("Enter p value (0.0-1.0): "))
        except ValueError:
            print("Invalid p value! Exiting...")
            return 0
        print(f"Running P-Persistent CSMA with p = {probability:.2f}")
        p_persistent(probability, rng, delay=args.delay)
    else:
        print("Invalid choice! Exiting...")
    return 0


if __name__ == "__main__":
    sys.exit(main())