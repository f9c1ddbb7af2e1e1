"""Line protocol tokenizer.

Turns one whitespace-separated command line into a command dict for
apply_command(). Keyword tokens (DURATION, PROBLEM, BY, WITH, AT, AND) are
positional markers and are checked, not interpreted.

    ADDTEAM <name>
    START DURATION <n> PROBLEM <n>
    SUBMIT [PROBLEM] <problem> BY <team> WITH <verdict> AT <time>
    FLUSH | FREEZE | SCROLL | END
    QUERY_RANKING <team>
    QUERY_SUBMISSION <team> WITH PROBLEM=<p|ALL> AND STATUS=<verdict|ALL>
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

WILDCARD = "ALL"


def _expect(tokens: List[str], index: int, keyword: str) -> None:
    if len(tokens) <= index or tokens[index] != keyword:
        raise ValueError(f"{tokens[0]}: expected {keyword} at position {index}")


def _arg(tokens: List[str], index: int) -> str:
    if len(tokens) <= index:
        raise ValueError(f"{tokens[0]}: missing argument at position {index}")
    return tokens[index]


def _int_arg(tokens: List[str], index: int) -> int:
    raw = _arg(tokens, index)
    try:
        return int(raw, 10)
    except ValueError:
        raise ValueError(f"{tokens[0]}: expected an integer, got {raw!r}") from None


def _filter_value(token: str, key: str) -> Optional[str]:
    prefix = f"{key}="
    if not token.startswith(prefix):
        raise ValueError(f"QUERY_SUBMISSION: expected {prefix}<value>, got {token!r}")
    value = token[len(prefix):]
    return None if value == WILDCARD else value


def parse_command_line(line: str) -> Optional[Dict[str, Any]]:
    """Parse one input line; blank lines give None.

    Raises:
        ValueError: on a malformed line or an unknown verb
    """
    tokens = line.split()
    if not tokens:
        return None
    verb = tokens[0]

    if verb == "ADDTEAM":
        return {"type": verb, "team": _arg(tokens, 1)}

    if verb == "START":
        _expect(tokens, 1, "DURATION")
        _expect(tokens, 3, "PROBLEM")
        return {
            "type": verb,
            "duration": _int_arg(tokens, 2),
            "problemCount": _int_arg(tokens, 4),
        }

    if verb == "SUBMIT":
        # Accept the long form "SUBMIT PROBLEM <p> BY ..." as well.
        if len(tokens) == 9 and tokens[1] == "PROBLEM":
            tokens = [verb] + tokens[2:]
        _expect(tokens, 2, "BY")
        _expect(tokens, 4, "WITH")
        _expect(tokens, 6, "AT")
        return {
            "type": verb,
            "problem": _arg(tokens, 1),
            "team": _arg(tokens, 3),
            "verdict": _arg(tokens, 5),
            "time": _int_arg(tokens, 7),
        }

    if verb in ("FLUSH", "FREEZE", "SCROLL", "END"):
        return {"type": verb}

    if verb == "QUERY_RANKING":
        return {"type": verb, "team": _arg(tokens, 1)}

    if verb == "QUERY_SUBMISSION":
        _expect(tokens, 2, "WITH")
        _expect(tokens, 4, "AND")
        return {
            "type": verb,
            "team": _arg(tokens, 1),
            "problem": _filter_value(_arg(tokens, 3), "PROBLEM"),
            "verdict": _filter_value(_arg(tokens, 5), "STATUS"),
        }

    raise ValueError(f"Unknown command: {verb}")
