"""Type definitions for contest state and commands."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, TypedDict

from .ledger import Submission, SubmissionLedger
from .problem_status import ProblemStatus


@dataclass
class Team:
    """A registered team: per-problem status plus its own submissions in arrival order."""

    name: str
    problems: Dict[str, ProblemStatus] = field(default_factory=dict)
    submissions: List[Submission] = field(default_factory=list)

    def status_for(self, problem: str) -> ProblemStatus:
        status = self.problems.get(problem)
        if status is None:
            status = ProblemStatus()
            self.problems[problem] = status
        return status

    def visible_statuses(self) -> List[ProblemStatus]:
        return [status for status in self.problems.values() if status.counts_in_ranking]

    def solved_count(self) -> int:
        return len(self.visible_statuses())

    def total_penalty(self) -> int:
        return sum(status.penalty() for status in self.visible_statuses())

    def solve_times(self) -> Tuple[int, ...]:
        """Visible solve times, most recent first."""
        times = [status.solved_at for status in self.visible_statuses() if status.solved_at is not None]
        return tuple(sorted(times, reverse=True))


@dataclass
class ContestState:
    """
    Whole-run contest state, threaded explicitly through every command handler.

    Lifecycle:
    - started: set once by START
    - frozen: toggled by FREEZE / SCROLL
    - ended: set once by END (terminal)
    """

    teams: Dict[str, Team] = field(default_factory=dict)
    ledger: SubmissionLedger = field(default_factory=SubmissionLedger)

    started: bool = False
    ended: bool = False
    frozen: bool = False
    freeze_boundary: Optional[int] = None

    duration: int = 0
    problem_count: int = 0

    # Ranking snapshot from the latest FLUSH/SCROLL; None until the first one.
    last_ranking: Optional[tuple] = None


class CommandPayload(TypedDict, total=False):
    """
    TypedDict for command payloads sent to apply_command().

    Fields vary by command type.
    """
    # Common
    type: str

    # ADDTEAM / SUBMIT / QUERY_RANKING / QUERY_SUBMISSION
    team: str

    # START
    duration: int
    problemCount: int

    # SUBMIT / QUERY_SUBMISSION (None means ALL for queries)
    problem: Optional[str]
    verdict: Optional[str]
    time: int


# Type alias mirroring the plain-dict command usage in contest.py
CmdDict = CommandPayload
