from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .cards import ACE, KING, Card, is_wild
from .rules import DEFAULT_RULES, Ruleset


class MeldType(str, Enum):
    SET = "set"
    RUN = "run"
    WILD = "wild"
    MIXED = "mixed"
    NONE = "none"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"
    NONE = "none"


def naturals_of(cards: Iterable[Card]) -> List[Card]:
    return [card for card in cards if not is_wild(card)]


def wilds_of(cards: Iterable[Card]) -> List[Card]:
    return [card for card in cards if is_wild(card)]


def is_all_wild(cards: Sequence[Card]) -> bool:
    return bool(cards) and all(is_wild(card) for card in cards)


def is_canasta(cards: Sequence[Card], rules: Ruleset | None = None) -> bool:
    return len(cards) >= (rules or DEFAULT_RULES).canasta_size


def run_rank(card: Card) -> int:
    """Rank of a natural inside a run; the Ace only ever sits above the King."""
    return KING + 1 if card.rank == ACE else card.rank


def infer_type(cards: Sequence[Card]) -> MeldType:
    if not cards:
        return MeldType.NONE
    naturals = naturals_of(cards)
    if not naturals:
        return MeldType.WILD
    if len({card.rank for card in naturals}) == 1:
        return MeldType.SET
    if len({card.suit for card in naturals}) == 1:
        return MeldType.RUN
    return MeldType.MIXED


def run_direction(cards: Sequence[Card]) -> Direction:
    """Growth direction of a run, read from its natural cards.

    A minimum natural rank of 4-8 always means ``UP``, even when the top
    natural would also allow a downward run. Only when that fails does a top
    natural of 10 or above (an Ace counts as 14) mean ``DOWN``.
    """
    naturals = naturals_of(cards)
    if len(naturals) < 2:
        return Direction.UNKNOWN
    ranks = [run_rank(card) for card in naturals]
    min_rank, max_rank = min(ranks), max(ranks)
    if 4 <= min_rank <= 8:
        return Direction.UP
    if max_rank >= 10:
        return Direction.DOWN
    return Direction.UNKNOWN


def is_valid_run_start(card: Card) -> bool:
    if is_wild(card) or card.rank in (3, 9):
        return False
    return 4 <= card.rank <= 8 or card.rank >= 10 or card.rank == ACE


def expected_direction(start_rank: int) -> Direction:
    if 4 <= start_rank <= 8:
        return Direction.UP
    if start_rank >= 10 or start_rank == ACE:
        return Direction.DOWN
    return Direction.NONE


def sort_run_cards(cards: Sequence[Card], direction: Direction = Direction.UP) -> List[Card]:
    """Naturals ordered along the run's direction, wilds appended after them."""
    naturals = sorted(naturals_of(cards), key=run_rank, reverse=direction == Direction.DOWN)
    return naturals + wilds_of(cards)


@dataclass(frozen=True)
class Meld:
    meld_id: str
    cards: Tuple[Card, ...]
    meld_type: MeldType
    direction: Direction
    team: Optional[str]
    is_canasta: bool

    @property
    def naturals(self) -> List[Card]:
        return naturals_of(self.cards)

    @property
    def wilds(self) -> List[Card]:
        return wilds_of(self.cards)

    @property
    def is_locked(self) -> bool:
        return is_locked(self)

    def __len__(self) -> int:
        return len(self.cards)


def _new_meld_id() -> str:
    return f"meld_{uuid.uuid4().hex[:12]}"


def build_metadata(
    cards: Iterable[Card],
    meld_id: Optional[str] = None,
    team: Optional[str] = None,
    rules: Ruleset | None = None,
) -> Meld:
    card_tuple = tuple(cards)
    meld_type = infer_type(card_tuple)
    direction = run_direction(card_tuple) if meld_type == MeldType.RUN else Direction.NONE
    return Meld(
        meld_id=meld_id or _new_meld_id(),
        cards=card_tuple,
        meld_type=meld_type,
        direction=direction,
        team=team,
        is_canasta=is_canasta(card_tuple, rules),
    )


def extend(meld: Meld, new_cards: Iterable[Card], rules: Ruleset | None = None) -> Meld:
    """Snapshot of ``meld`` with ``new_cards`` appended. Legality is not checked here.

    A run keeps the direction it already grows in.
    """
    updated = build_metadata(meld.cards + tuple(new_cards), meld.meld_id, meld.team, rules)
    if (
        meld.meld_type == MeldType.RUN
        and updated.meld_type == MeldType.RUN
        and meld.direction in (Direction.UP, Direction.DOWN)
    ):
        return replace(updated, direction=meld.direction)
    return updated


def is_locked(meld: Meld) -> bool:
    return meld.is_canasta and is_all_wild(meld.cards)
