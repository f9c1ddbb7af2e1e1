"""Command loop: read protocol lines, apply them, yield output lines.

Usage:
    icpc-scoreboard < commands.txt
    icpc-scoreboard --input commands.txt --log-level DEBUG
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, Iterator

from .contest import apply_command, default_state
from .parser import parse_command_line
from .types import ContestState
from .validation import InputSanitizer

logger = logging.getLogger(__name__)


def run_commands(lines: Iterable[str], state: ContestState | None = None) -> Iterator[str]:
    """Apply each line in order and yield the resulting output lines.

    Malformed lines are logged and skipped. Stops after END.
    """
    state = state if state is not None else default_state()
    for lineno, raw in enumerate(lines, start=1):
        try:
            cmd = parse_command_line(raw)
            if cmd is None:
                continue
            validated = InputSanitizer.validate_and_sanitize_cmd(cmd)
        except ValueError as e:
            logger.warning(f"Skipping line {lineno}: {e}")
            continue
        outcome = apply_command(state, validated.to_payload())
        yield from outcome.lines
        if outcome.terminal:
            break


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="ICPC scoreboard with freeze and scroll")
    parser.add_argument("--input", help="command file (default: stdin)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="diagnostics level on stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.input:
        with open(args.input, encoding="utf-8") as fh:
            for out in run_commands(fh):
                print(out)
    else:
        for out in run_commands(sys.stdin):
            print(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
