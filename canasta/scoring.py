from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from .cards import Card
from .meld import is_all_wild, is_canasta, wilds_of
from .rules import DEFAULT_RULES, Ruleset


class CanastaKind(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    WILD = "wild"


def canasta_kind(cards: Sequence[Card], rules: Ruleset | None = None) -> Optional[CanastaKind]:
    if not is_canasta(cards, rules):
        return None
    if is_all_wild(cards):
        return CanastaKind.WILD
    if wilds_of(cards):
        return CanastaKind.DIRTY
    return CanastaKind.CLEAN


def wild_canasta_points(cards: Sequence[Card], rules: Ruleset | None = None) -> Optional[int]:
    """Bonus for a canasta made only of wild cards, ``None`` for any other meld.

    Purely a lookup: it never decides whether the meld is legal.
    """
    rules = rules or DEFAULT_RULES
    if canasta_kind(cards, rules) != CanastaKind.WILD:
        return None
    jokers = sum(1 for card in cards if card.is_joker)
    deuces = len(cards) - jokers
    if jokers > deuces:
        return rules.joker_wild_canasta_points
    return rules.deuce_wild_canasta_points
