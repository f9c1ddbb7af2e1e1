"""Append-only submission ledger.

Every submission gets a sequence id at ingestion (1, 2, 3, ...). Ids are never
reused and the global list is never re-sorted, so reverse iteration is the
same as reverse-chronological arrival order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass(frozen=True)
class Submission:
    sequence_id: int
    problem: str
    team: str
    verdict: str
    time: int

    def describe(self) -> str:
        return f"{self.team} {self.problem} {self.verdict} {self.time}"


@dataclass
class SubmissionLedger:
    """Global, ID-ordered record of every submission."""

    entries: List[Submission] = field(default_factory=list)
    next_id: int = 1

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Submission]:
        return iter(self.entries)

    @property
    def last(self) -> Optional[Submission]:
        return self.entries[-1] if self.entries else None

    def record(
        self,
        problem: str,
        team: str,
        verdict: str,
        time: int,
        team_submissions: List[Submission] | None = None,
    ) -> Submission:
        """Append a submission and return it with its freshly assigned id.

        When given, ``team_submissions`` (the owning team's own list) gets the
        same submission appended, so both orders stay identical.
        """
        submission = Submission(
            sequence_id=self.next_id,
            problem=problem,
            team=team,
            verdict=verdict,
            time=time,
        )
        self.next_id += 1
        self.entries.append(submission)
        if team_submissions is not None:
            team_submissions.append(submission)
        return submission

    def find_latest_matching(
        self,
        team: str,
        problem: str | None = None,
        verdict: str | None = None,
    ) -> Optional[Submission]:
        """Most recent submission of ``team`` matching both filters.

        ``None`` for ``problem`` or ``verdict`` is a wildcard.
        """
        for submission in reversed(self.entries):
            if submission.team != team:
                continue
            if problem is not None and submission.problem != problem:
                continue
            if verdict is not None and submission.verdict != verdict:
                continue
            return submission
        return None
