"""Error codes, verdicts and the exception raised when an illegal meld is applied."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .meld import MeldType


class ErrorCode(str, Enum):
    # sizing
    MELD_TOO_SMALL = "MELD_TOO_SMALL"
    # composition
    MELD_INVALID = "MELD_INVALID"
    SET_RANK_MISMATCH = "SET_RANK_MISMATCH"
    RUN_MIXED_SUITS = "RUN_MIXED_SUITS"
    RUN_CONTAINS_THREE = "RUN_CONTAINS_THREE"
    RUN_9_AT_ENDPOINT = "RUN_9_AT_ENDPOINT"
    RUN_ACE_USED_LOW = "RUN_ACE_USED_LOW"
    # wild quantity
    TOO_MANY_WILDS_IN_MELD = "TOO_MANY_WILDS_IN_MELD"
    # wild position
    INSUFFICIENT_NATURALS_BEFORE_WILD = "INSUFFICIENT_NATURALS_BEFORE_WILD"
    MELD_STARTS_WITH_WILD = "MELD_STARTS_WITH_WILD"
    WILD_STREAK_TOO_LONG = "WILD_STREAK_TOO_LONG"
    # sequencing
    RUN_INVALID_SEQUENCE = "RUN_INVALID_SEQUENCE"
    RUN_WILD_SUBSTITUTION_INVALID = "RUN_WILD_SUBSTITUTION_INVALID"
    # mutation
    CANNOT_ADD_TO_WILD_CANASTA = "CANNOT_ADD_TO_WILD_CANASTA"
    WILD_ADDED_AFTER_CANASTA = "WILD_ADDED_AFTER_CANASTA"
    RUN_DIRECTION_CHANGED = "RUN_DIRECTION_CHANGED"
    RUN_PREPEND_FORBIDDEN = "RUN_PREPEND_FORBIDDEN"


@dataclass(frozen=True)
class Verdict:
    valid: bool
    error_code: Optional[ErrorCode] = None
    detail: Optional[str] = None
    meld_type: Optional["MeldType"] = None

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls, detail: Optional[str] = None, meld_type: Optional["MeldType"] = None) -> "Verdict":
        return cls(True, None, detail, meld_type)

    @classmethod
    def fail(cls, code: ErrorCode, detail: Optional[str] = None) -> "Verdict":
        return cls(False, code, detail)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "error_code": None if self.error_code is None else self.error_code.value,
            "detail": self.detail,
            "meld_type": None if self.meld_type is None else self.meld_type.value,
        }


OK = Verdict.ok()


class IllegalMeldError(ValueError):
    def __init__(self, verdict: Verdict):
        code = verdict.error_code.value if verdict.error_code else "UNKNOWN"
        message = f"illegal meld: {code}"
        if verdict.detail:
            message = f"{message}: {verdict.detail}"
        super().__init__(message)
        self.verdict = verdict
        self.code = verdict.error_code
