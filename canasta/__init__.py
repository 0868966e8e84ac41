"""Bulgarian Canasta meld rule engine package."""

from .cards import Card, Suit, is_black_special, is_red_special, is_wild, playable_cards
from .errors import ErrorCode, IllegalMeldError, Verdict
from .meld import Direction, Meld, MeldType, build_metadata, extend, infer_type, is_locked, run_direction
from .rules import Ruleset
from .engine import add_to_meld, create_meld, is_legal_addition, is_legal_meld
from .validation import can_add_to_meld_enhanced, validate_meld

__all__ = [
    "Card",
    "Suit",
    "is_wild",
    "is_red_special",
    "is_black_special",
    "playable_cards",
    "ErrorCode",
    "IllegalMeldError",
    "Verdict",
    "Direction",
    "Meld",
    "MeldType",
    "build_metadata",
    "extend",
    "infer_type",
    "is_locked",
    "run_direction",
    "Ruleset",
    "add_to_meld",
    "create_meld",
    "is_legal_addition",
    "is_legal_meld",
    "can_add_to_meld_enhanced",
    "validate_meld",
]
