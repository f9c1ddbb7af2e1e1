"""Core contest state transitions (pure logic, no I/O).

This module implements the ICPC scoreboard state machine: team registration,
submission ingestion, ranking snapshots and the freeze/scroll reveal.
Handlers never print; they return the protocol lines for the caller to emit.

Architecture:
- State is a single ContestState object (see types.py) passed to every handler
- Commands are plain dicts with a 'type' field (ADDTEAM, SUBMIT, SCROLL, etc.)
- apply_command() takes (state, cmd), mutates state and returns CommandOutcome
- Domain failures are reported as ValidationError on the outcome, never raised

Freeze regime:
- FREEZE records the boundary = time of the latest ingested submission (0 if none)
- While frozen, submissions after the boundary on unsolved problems are hidden
- SCROLL reveals hidden problems, reports teams that moved up, and unfreezes

Ranking snapshots:
- FLUSH and SCROLL recompute the ranking; QUERY_RANKING reads the last snapshot
- Before the first snapshot, teams rank in plain name order
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from .problem_status import ACCEPTED, UNATTEMPTED_TOKEN
from .ranking import (
    RankingEntry,
    compute_ranking,
    lexicographic_order,
    rank_of,
    team_order,
)
from .types import ContestState, Team

logger = logging.getLogger(__name__)

INFO = "[Info]"
ERROR = "[Error]"
WARNING = "[Warning]"

NOT_FOUND_LINE = "Cannot find any submission."
FROZEN_RANKING_WARNING = (
    f"{WARNING}Scoreboard is frozen. The ranking may be inaccurate until it were scrolled."
)


@dataclass
class ValidationError:
    """Represents a recoverable command rejection (pure core)."""

    kind: str
    message: str | None = None

    def line(self) -> str:
        return f"{ERROR}{self.message}"


@dataclass
class CommandOutcome:
    """Result of applying a core command."""

    state: ContestState
    lines: List[str] = field(default_factory=list)
    error: ValidationError | None = None
    terminal: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def default_state() -> ContestState:
    """Create a fresh, not yet started contest with no teams."""
    return ContestState()


def problem_labels(problem_count: int) -> List[str]:
    """Column labels for the scoreboard: 'A', 'B', ... one per declared problem."""
    return [chr(ord("A") + i) for i in range(problem_count)]


def format_scoreboard(state: ContestState, ranking: Sequence[RankingEntry]) -> List[str]:
    """Render one line per team: name, rank, solved, penalty, then a token per problem."""
    labels = problem_labels(state.problem_count)
    lines: List[str] = []
    for pos, entry in enumerate(ranking, start=1):
        team = state.teams[entry.team_name]
        tokens = []
        for label in labels:
            status = team.problems.get(label)
            tokens.append(status.display_token() if status is not None else UNATTEMPTED_TOKEN)
        parts = [entry.team_name, str(pos), str(entry.solved_count), str(entry.total_penalty), *tokens]
        lines.append(" ".join(parts))
    return lines


def _reject(state: ContestState, kind: str, message: str) -> CommandOutcome:
    error = ValidationError(kind=kind, message=message)
    logger.debug(f"Command rejected: {kind}")
    return CommandOutcome(state=state, lines=[error.line()], error=error)


def _flush(state: ContestState) -> tuple[RankingEntry, ...]:
    ranking = compute_ranking(state.teams.values())
    state.last_ranking = ranking
    return ranking


def _handle_add_team(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    name = cmd["team"]
    if state.started:
        return _reject(state, "competition_already_started", "Add failed: competition has started.")
    if name in state.teams:
        return _reject(state, "duplicate_team", "Add failed: duplicated team name.")
    state.teams[name] = Team(name=name)
    return CommandOutcome(state=state, lines=[f"{INFO}Add successfully."])


def _handle_start(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    if state.started:
        return _reject(state, "competition_already_started", "Start failed: competition has started.")
    state.started = True
    state.duration = int(cmd.get("duration") or 0)
    state.problem_count = int(cmd.get("problemCount") or 0)
    logger.debug(
        f"Competition started: duration={state.duration} problems={state.problem_count} "
        f"teams={len(state.teams)}"
    )
    return CommandOutcome(state=state, lines=[f"{INFO}Competition starts."])


def _handle_submit(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    """Ingest one submission; success produces no output line.

    A submission naming an unregistered team never registers it implicitly:
    it is rejected with "[Error]Submit failed: cannot find the team." and
    nothing is recorded. Teams only come from ADDTEAM before START.
    """
    team = state.teams.get(cmd["team"])
    if team is None:
        return _reject(state, "team_not_found", "Submit failed: cannot find the team.")
    submission = state.ledger.record(
        problem=cmd["problem"],
        team=team.name,
        verdict=cmd["verdict"],
        time=int(cmd["time"]),
        team_submissions=team.submissions,
    )
    team.status_for(submission.problem).apply_submission(
        submission.verdict,
        submission.time,
        state.frozen,
        state.freeze_boundary,
    )
    return CommandOutcome(state=state)


def _handle_flush(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    _flush(state)
    return CommandOutcome(state=state, lines=[f"{INFO}Flush scoreboard."])


def _handle_freeze(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    if state.frozen:
        return _reject(state, "already_frozen", "Freeze failed: scoreboard has been frozen.")
    last = state.ledger.last
    state.frozen = True
    state.freeze_boundary = last.time if last is not None else 0
    logger.debug(f"Scoreboard frozen at boundary {state.freeze_boundary}")
    return CommandOutcome(state=state, lines=[f"{INFO}Freeze scoreboard."])


def _reveal_hidden(state: ContestState) -> int:
    """Resolve every hidden problem from the team's own submissions; return how many were solved."""
    boundary = state.freeze_boundary if state.freeze_boundary is not None else 0
    revealed_solves = 0
    for team in state.teams.values():
        for problem, status in team.problems.items():
            if not status.hidden:
                continue
            if not status.solved:
                # Arrival order matters: the first Accepted after the boundary wins.
                for submission in team.submissions:
                    if (
                        submission.problem == problem
                        and submission.time > boundary
                        and submission.verdict == ACCEPTED
                    ):
                        status.mark_solved(submission.time)
                        revealed_solves += 1
                        break
            status.hidden = False
    return revealed_solves


def _rank_changes(
    old_order: Sequence[str], new_ranking: Sequence[RankingEntry]
) -> List[str]:
    """One line per team that moved up: mover, team at its new position in the old order, solved, penalty."""
    old_pos_by_name = {name: pos for pos, name in enumerate(old_order)}
    lines: List[str] = []
    for i, entry in enumerate(new_ranking):
        old_pos = old_pos_by_name[entry.team_name]
        if i < old_pos:
            displaced = old_order[i]
            lines.append(
                f"{entry.team_name} {displaced} {entry.solved_count} {entry.total_penalty}"
            )
    return lines


def _handle_scroll(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    if not state.frozen:
        return _reject(state, "not_frozen", "Scroll failed: scoreboard has not been frozen.")

    lines = [f"{INFO}Scroll scoreboard."]

    old_ranking = _flush(state)
    lines.extend(format_scoreboard(state, old_ranking))
    old_order = team_order(old_ranking)

    revealed = _reveal_hidden(state)
    logger.debug(f"Scroll revealed {revealed} hidden solve(s)")

    new_ranking = _flush(state)
    lines.extend(_rank_changes(old_order, new_ranking))
    lines.extend(format_scoreboard(state, new_ranking))

    state.frozen = False
    state.freeze_boundary = None
    return CommandOutcome(state=state, lines=lines)


def _handle_query_ranking(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    name = cmd["team"]
    if name not in state.teams:
        return _reject(state, "team_not_found", "Query ranking failed: cannot find the team.")
    lines = [f"{INFO}Complete query ranking."]
    if state.frozen:
        lines.append(FROZEN_RANKING_WARNING)
    lines.append(f"{name} NOW AT RANKING {query_rank(state, name)}")
    return CommandOutcome(state=state, lines=lines)


def query_rank(state: ContestState, team_name: str) -> int:
    """1-based rank of a registered team according to the latest snapshot.

    Before any snapshot exists, rank is the team's position in name order.
    Teams registered after the snapshot was taken follow all snapshot teams,
    in name order.
    """
    if state.last_ranking is None:
        return lexicographic_order(state.teams).index(team_name) + 1
    pos = rank_of(state.last_ranking, team_name)
    if pos is not None:
        return pos
    ranked = set(team_order(state.last_ranking))
    late = lexicographic_order(name for name in state.teams if name not in ranked)
    return len(state.last_ranking) + late.index(team_name) + 1


def _handle_query_submission(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    name = cmd["team"]
    if name not in state.teams:
        return _reject(state, "team_not_found", "Query submission failed: cannot find the team.")
    found = state.ledger.find_latest_matching(
        name, problem=cmd.get("problem"), verdict=cmd.get("verdict")
    )
    lines = [f"{INFO}Complete query submission."]
    lines.append(found.describe() if found is not None else NOT_FOUND_LINE)
    return CommandOutcome(state=state, lines=lines)


def _handle_end(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    state.ended = True
    return CommandOutcome(state=state, lines=[f"{INFO}Competition ends."], terminal=True)


_HANDLERS: Dict[str, Callable[[ContestState, Dict[str, Any]], CommandOutcome]] = {
    "ADDTEAM": _handle_add_team,
    "START": _handle_start,
    "SUBMIT": _handle_submit,
    "FLUSH": _handle_flush,
    "FREEZE": _handle_freeze,
    "SCROLL": _handle_scroll,
    "QUERY_RANKING": _handle_query_ranking,
    "QUERY_SUBMISSION": _handle_query_submission,
    "END": _handle_end,
}


def apply_command(state: ContestState, cmd: Dict[str, Any]) -> CommandOutcome:
    """Apply a contest command to in-memory state.

    Args:
        state: Current contest state (mutated in place)
        cmd: Command dict with 'type' field and command-specific params

    Returns:
        CommandOutcome with the same state, protocol lines to emit, the
        rejection if any, and whether the command ends the run

    Raises:
        ValueError: for a command type the dispatcher does not know
    """
    ctype = cmd.get("type")
    handler = _HANDLERS.get(ctype)
    if handler is None:
        raise ValueError(f"Unknown command type: {ctype}")
    return handler(state, cmd)
