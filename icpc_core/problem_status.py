"""Per-team, per-problem solve state under the freeze regime.

One ``ProblemStatus`` exists for each team/problem pair with at least one
submission. Wrong attempts are split at the freeze boundary:

- attempts_visible: counted while results were still shown
- attempts_hidden: counted while the problem was hidden

An Accepted verdict that arrives while the problem is hidden does not mark it
solved; the reveal step in ``contest`` finds it later from the team's own
submission list. Once solved, a status never changes again.
"""
from __future__ import annotations

from dataclasses import dataclass

ACCEPTED = "Accepted"
PENALTY_PER_REJECTION = 20
UNATTEMPTED_TOKEN = "."


@dataclass
class ProblemStatus:
    attempts_visible: int = 0
    attempts_hidden: int = 0
    solved: bool = False
    solved_at: int | None = None
    hidden: bool = False

    def apply_submission(
        self,
        verdict: str,
        time: int,
        frozen: bool,
        freeze_boundary: int | None,
    ) -> None:
        if self.solved:
            return
        is_accepted = verdict == ACCEPTED
        if frozen and freeze_boundary is not None and time > freeze_boundary:
            self.hidden = True
            if not is_accepted:
                self.attempts_hidden += 1
            return
        if is_accepted:
            self.solved = True
            self.solved_at = time
        else:
            self.attempts_visible += 1

    def mark_solved(self, time: int) -> None:
        self.solved = True
        self.solved_at = time

    @property
    def counts_in_ranking(self) -> bool:
        return self.solved and not self.hidden

    def penalty(self) -> int:
        if not self.solved or self.solved_at is None:
            return 0
        return PENALTY_PER_REJECTION * self.attempts_visible + self.solved_at

    def display_token(self) -> str:
        # Hidden problems always show the slash form, "0/2" included.
        if self.hidden:
            return f"{self.attempts_visible}/{self.attempts_hidden}"
        if self.solved:
            return "+" if self.attempts_visible == 0 else f"+{self.attempts_visible}"
        if self.attempts_visible == 0:
            return UNATTEMPTED_TOKEN
        return f"-{self.attempts_visible}"
