"""ICPC ranking engine.

Ranking is a snapshot: it is computed wholesale from the currently visible
problem statuses and never patched incrementally. Callers decide when to
recompute (FLUSH, SCROLL).

Comparator, in order:
- more solved problems first
- smaller total penalty first
- descending solve-time lists compared position by position up to the shorter
  length; the smaller value at the first difference wins
- team name ascending
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Sequence

from .types import Team


@dataclass(frozen=True)
class RankingEntry:
    team_name: str
    solved_count: int
    total_penalty: int
    solve_times: tuple[int, ...]


def _entry_for(team: Team) -> RankingEntry:
    return RankingEntry(
        team_name=team.name,
        solved_count=team.solved_count(),
        total_penalty=team.total_penalty(),
        solve_times=team.solve_times(),
    )


def compare_entries(a: RankingEntry, b: RankingEntry) -> int:
    """Negative if ``a`` ranks above ``b``, positive if below, 0 only for the same team."""
    if a.solved_count != b.solved_count:
        return -1 if a.solved_count > b.solved_count else 1
    if a.total_penalty != b.total_penalty:
        return -1 if a.total_penalty < b.total_penalty else 1
    for mine, theirs in zip(a.solve_times, b.solve_times):
        if mine != theirs:
            return -1 if mine < theirs else 1
    if a.team_name == b.team_name:
        return 0
    return -1 if a.team_name < b.team_name else 1


def compute_ranking(teams: Iterable[Team]) -> tuple[RankingEntry, ...]:
    entries = [_entry_for(team) for team in teams]
    entries.sort(key=cmp_to_key(compare_entries))
    return tuple(entries)


def lexicographic_order(names: Iterable[str]) -> list[str]:
    """Fallback order used before any ranking snapshot exists."""
    return sorted(names)


def team_order(ranking: Sequence[RankingEntry]) -> list[str]:
    return [entry.team_name for entry in ranking]


def rank_of(ranking: Sequence[RankingEntry], team_name: str) -> int | None:
    """1-based position of ``team_name`` in ``ranking``, or None if absent."""
    for pos, entry in enumerate(ranking, start=1):
        if entry.team_name == team_name:
            return pos
    return None
