from __future__ import annotations

from icpc_core import ProblemStatus, RankingEntry, Team, compare_entries, compute_ranking
from icpc_core.ranking import lexicographic_order, rank_of


def _team(name, solves=(), wrong=None, hidden=()):
    """Build a team whose problems are solved at the given times."""
    wrong = wrong or {}
    team = Team(name=name)
    for idx, solved_at in enumerate(solves):
        label = chr(ord("A") + idx)
        team.problems[label] = ProblemStatus(
            attempts_visible=wrong.get(label, 0),
            solved=True,
            solved_at=solved_at,
            hidden=label in hidden,
        )
    return team


def _names(ranking):
    return [entry.team_name for entry in ranking]


def test_more_solves_rank_first():
    ranking = compute_ranking([_team("a", solves=(100,)), _team("b", solves=(200, 250))])
    assert _names(ranking) == ["b", "a"]
    assert ranking[0].solved_count == 2
    assert ranking[0].total_penalty == 450


def test_lower_penalty_wins_on_equal_solves():
    ranking = compute_ranking(
        [_team("a", solves=(50,), wrong={"A": 1}), _team("b", solves=(60,))]
    )
    # a: 50 + 20, b: 60
    assert _names(ranking) == ["b", "a"]


def test_solve_time_lists_break_penalty_ties():
    # Both teams: 2 solved, penalty 40; descending lists [25,15] vs [30,10].
    a = _team("A", solves=(25, 15))
    b = _team("B", solves=(10, 30))
    ranking = compute_ranking([b, a])
    assert ranking[0].solve_times == (25, 15)
    assert ranking[1].solve_times == (30, 10)
    assert _names(ranking) == ["A", "B"]


def test_name_is_final_tiebreak():
    ranking = compute_ranking([_team("zeta"), _team("alpha"), _team("mid")])
    assert _names(ranking) == ["alpha", "mid", "zeta"]


def test_hidden_solves_are_excluded():
    ranking = compute_ranking([_team("a", solves=(10, 20), hidden=("B",)), _team("b", solves=(5,))])
    by_name = {entry.team_name: entry for entry in ranking}
    assert by_name["a"].solved_count == 1
    assert by_name["a"].total_penalty == 10
    assert by_name["a"].solve_times == (10,)
    assert _names(ranking) == ["b", "a"]


def test_compare_entries_prefix_equal_lists_fall_through_to_name():
    short = RankingEntry(team_name="b", solved_count=1, total_penalty=10, solve_times=(10,))
    longer = RankingEntry(team_name="a", solved_count=1, total_penalty=10, solve_times=(10, 3))
    assert compare_entries(longer, short) < 0
    assert compare_entries(short, longer) > 0
    assert compare_entries(short, short) == 0


def test_ranking_is_deterministic():
    teams = [
        _team("c", solves=(30, 10)),
        _team("a", solves=(25, 15)),
        _team("b", solves=(40,)),
        _team("d"),
    ]
    assert compute_ranking(teams) == compute_ranking(list(reversed(teams)))


def test_rank_of_and_lexicographic_fallback():
    ranking = compute_ranking([_team("x", solves=(1,)), _team("y")])
    assert rank_of(ranking, "x") == 1
    assert rank_of(ranking, "y") == 2
    assert rank_of(ranking, "z") is None
    assert lexicographic_order({"zeta", "alpha"}) == ["alpha", "zeta"]
