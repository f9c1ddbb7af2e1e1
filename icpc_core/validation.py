"""
Input validation schemas using Pydantic v2
Validates all command types before they reach the contest core
"""

import logging
from typing import Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)


class ContestLimits:
    """Structural bounds and vocabularies accepted at the command boundary"""

    # Problems are labelled with single letters A-Z
    MAX_PROBLEMS = 26

    VERDICTS = frozenset(
        {
            "Accepted",
            "Wrong_Answer",
            "Runtime_Error",
            "Time_Limit_Exceed",
        }
    )

    COMMAND_TYPES = frozenset(
        {
            "ADDTEAM",
            "START",
            "SUBMIT",
            "FLUSH",
            "FREEZE",
            "SCROLL",
            "QUERY_RANKING",
            "QUERY_SUBMISSION",
            "END",
        }
    )

    # Commands and the fields they cannot do without
    REQUIRED_FIELDS = {
        "ADDTEAM": ("team",),
        "START": ("duration", "problemCount"),
        "SUBMIT": ("problem", "team", "verdict", "time"),
        "QUERY_RANKING": ("team",),
        "QUERY_SUBMISSION": ("team",),
    }


class ValidatedCmd(BaseModel):
    """Typed command with per-type required fields"""

    type: str = Field(..., min_length=1, max_length=50, description="Command type")

    team: Optional[str] = Field(None, min_length=1, description="Team name")

    # START fields
    duration: Optional[int] = Field(None, ge=0, description="Contest duration")
    problemCount: Optional[int] = Field(
        None, ge=1, le=ContestLimits.MAX_PROBLEMS, description="Problem count (1-26)"
    )

    # SUBMIT / QUERY_SUBMISSION fields (None on a query means ALL)
    problem: Optional[str] = Field(
        None, min_length=1, max_length=1, description="Problem label (A-Z)"
    )
    verdict: Optional[str] = Field(None, min_length=1, description="Judge verdict")
    time: Optional[int] = Field(None, ge=0, description="Submission time")

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate command type is one of allowed types"""
        if v not in ContestLimits.COMMAND_TYPES:
            raise ValueError(f"type must be one of {sorted(ContestLimits.COMMAND_TYPES)}, got {v}")
        return v

    @field_validator("team")
    @classmethod
    def validate_team_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if any(ch.isspace() for ch in v):
            raise ValueError("team name cannot contain whitespace")
        return v

    @field_validator("problem")
    @classmethod
    def validate_problem(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not ("A" <= v <= "Z"):
            raise ValueError(f"problem must be a letter A-Z, got {v}")
        return v

    @model_validator(mode="after")
    def validate_command_fields(self) -> Self:
        """Validate required fields based on command type"""
        for name in ContestLimits.REQUIRED_FIELDS.get(self.type, ()):
            if getattr(self, name) is None:
                raise ValueError(f"{self.type} requires {name}")

        # Only judged submissions carry a real verdict; a query's STATUS
        # filter may name anything and simply matches nothing.
        if self.type == "SUBMIT" and self.verdict not in ContestLimits.VERDICTS:
            raise ValueError(
                f"verdict must be one of {sorted(ContestLimits.VERDICTS)}, got {self.verdict}"
            )
        return self

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict:
        """Plain command dict for apply_command(); keeps None filters on queries."""
        payload = self.model_dump(exclude_none=True)
        if self.type == "QUERY_SUBMISSION":
            payload.setdefault("problem", None)
            payload.setdefault("verdict", None)
        return payload


class InputSanitizer:
    """Utility class for input sanitization"""

    @staticmethod
    def sanitize_string(value: str, max_length: int = 255) -> str:
        """Sanitize string input"""
        if not isinstance(value, str):
            return str(value)[:max_length]

        # Strip whitespace
        value = value.strip()

        # Limit length
        value = value[:max_length]

        # Remove null bytes
        value = value.replace("\0", "")

        return value

    @staticmethod
    def validate_and_sanitize_cmd(cmd_dict: dict) -> ValidatedCmd:
        """
        Validate and sanitize command dictionary

        Returns:
            ValidatedCmd: Validated command object

        Raises:
            ValueError: If validation fails
        """
        cleaned = dict(cmd_dict)
        if isinstance(cleaned.get("team"), str):
            team = cleaned["team"]
            # Names are not length-capped; only surrounding whitespace and NULs go.
            cleaned["team"] = InputSanitizer.sanitize_string(team, max_length=len(team))
        try:
            return ValidatedCmd(**cleaned)
        except ValidationError as e:
            logger.warning(f"Command validation failed: {e}")
            raise ValueError(f"Invalid command: {str(e)}") from e


# ==================== EXPORT ====================

__all__ = [
    "ContestLimits",
    "ValidatedCmd",
    "InputSanitizer",
]
