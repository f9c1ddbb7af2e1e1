from .contest import (
    CommandOutcome,
    ValidationError,
    apply_command,
    default_state,
    format_scoreboard,
    problem_labels,
    query_rank,
)
from .ledger import Submission, SubmissionLedger
from .parser import parse_command_line
from .problem_status import ACCEPTED, ProblemStatus
from .ranking import RankingEntry, compare_entries, compute_ranking
from .runner import run_commands
from .types import CommandPayload, ContestState, Team
from .validation import ContestLimits, InputSanitizer, ValidatedCmd

__all__ = [
    "ACCEPTED",
    "CommandOutcome",
    "CommandPayload",
    "ContestLimits",
    "ContestState",
    "InputSanitizer",
    "ProblemStatus",
    "RankingEntry",
    "Submission",
    "SubmissionLedger",
    "Team",
    "ValidatedCmd",
    "ValidationError",
    "apply_command",
    "compare_entries",
    "compute_ranking",
    "default_state",
    "format_scoreboard",
    "parse_command_line",
    "problem_labels",
    "query_rank",
    "run_commands",
]
