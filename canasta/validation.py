"""Structural meld rules for Bulgarian Canasta.

Every check returns a :class:`~canasta.errors.Verdict`; nothing here raises on
a rule violation. Cards are taken in table order, which matters: the anchor and
wild-streak rules read the sequence left to right.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .cards import ACE, KING, Card, is_black_special, is_red_special, is_wild
from .errors import OK, ErrorCode, Verdict
from .meld import (
    Direction,
    Meld,
    MeldType,
    infer_type,
    is_all_wild,
    is_canasta,
    naturals_of,
    run_direction,
    run_rank,
    wilds_of,
)
from .rules import DEFAULT_RULES, Ruleset

logger = logging.getLogger(__name__)

MeldLike = Union[Meld, Sequence[Card]]


def _reject(code: ErrorCode, detail: str) -> Verdict:
    logger.debug("meld rejected: %s (%s)", code.value, detail)
    return Verdict.fail(code, detail)


def _cards_of(existing: MeldLike) -> List[Card]:
    if isinstance(existing, Meld):
        return list(existing.cards)
    return list(existing)


# --- wild positions -------------------------------------------------------------


def validate_wild_start_position(cards: Sequence[Card]) -> Verdict:
    if not cards or is_all_wild(cards):
        return OK
    if is_wild(cards[0]):
        return _reject(ErrorCode.MELD_STARTS_WITH_WILD, "a meld must start with a natural card")
    return OK


def validate_consecutive_wilds(cards: Sequence[Card]) -> Verdict:
    """Each streak of wilds must be shorter than the naturals right before it.

    The naturals are counted backward from the start of the streak and the
    count stops at the previous wild, so naturals already backing an earlier
    streak never back a later one.
    """
    if is_all_wild(cards):
        return OK
    idx = 0
    while idx < len(cards):
        if not is_wild(cards[idx]):
            idx += 1
            continue
        start = idx
        while idx < len(cards) and is_wild(cards[idx]):
            idx += 1
        streak = idx - start
        preceding = 0
        back = start - 1
        while back >= 0 and not is_wild(cards[back]):
            preceding += 1
            back -= 1
        if streak >= preceding:
            return _reject(
                ErrorCode.WILD_STREAK_TOO_LONG,
                f"{streak} consecutive wild card(s) at position {start + 1} "
                f"need more than {preceding} natural card(s) before them",
            )
    return OK


def validate_team_anchor(cards: Sequence[Card], first_meld: bool, rules: Ruleset | None = None) -> Verdict:
    """Leading naturals demanded by the team's meld phase.

    ``first_meld`` is the caller's statement that this is the first meld its
    team puts down; it cannot be read off the cards.
    """
    rules = rules or DEFAULT_RULES
    if is_all_wild(cards):
        return OK
    required = rules.leading_naturals(first_meld)
    first_wild = next((idx for idx, card in enumerate(cards) if is_wild(card)), None)
    if first_wild is not None and first_wild < required:
        phase = "the first meld of a team" if first_meld else "a meld"
        return _reject(
            ErrorCode.INSUFFICIENT_NATURALS_BEFORE_WILD,
            f"{phase} needs {required} natural cards before any wild card, found {first_wild}",
        )
    return OK


def validate_wild_positions(
    cards: Sequence[Card], *, first_meld: bool, rules: Ruleset | None = None
) -> Verdict:
    for verdict in (
        validate_wild_start_position(cards),
        validate_consecutive_wilds(cards),
        validate_team_anchor(cards, first_meld, rules),
    ):
        if not verdict.valid:
            return verdict
    return OK


# --- sets and runs --------------------------------------------------------------


def _check_counts(cards: Sequence[Card], rules: Ruleset) -> Optional[Verdict]:
    if len(cards) < rules.min_meld_size:
        return _reject(ErrorCode.MELD_TOO_SMALL, f"a meld needs at least {rules.min_meld_size} cards")
    wild_count = len(wilds_of(cards))
    if wild_count > rules.max_wilds and not is_all_wild(cards):
        return _reject(
            ErrorCode.TOO_MANY_WILDS_IN_MELD,
            f"{wild_count} wild cards, at most {rules.max_wilds} allowed",
        )
    natural_count = len(cards) - wild_count
    if natural_count < rules.min_naturals:
        return _reject(
            ErrorCode.INSUFFICIENT_NATURALS_BEFORE_WILD,
            f"{natural_count} natural card(s), at least {rules.min_naturals} needed",
        )
    return None


def validate_set(cards: Sequence[Card], *, first_meld: bool, rules: Ruleset | None = None) -> Verdict:
    rules = rules or DEFAULT_RULES
    failure = _check_counts(cards, rules)
    if failure is not None:
        return failure
    ranks = {card.rank for card in naturals_of(cards)}
    if len(ranks) > 1:
        return _reject(ErrorCode.SET_RANK_MISMATCH, "natural cards of a set must share one rank")
    positions = validate_wild_positions(cards, first_meld=first_meld, rules=rules)
    if not positions.valid:
        return positions
    return Verdict.ok("valid set", MeldType.SET)


def validate_run(cards: Sequence[Card], *, first_meld: bool, rules: Ruleset | None = None) -> Verdict:
    rules = rules or DEFAULT_RULES
    failure = _check_counts(cards, rules)
    if failure is not None:
        return failure
    naturals = naturals_of(cards)
    if len({card.suit for card in naturals}) > 1:
        return _reject(ErrorCode.RUN_MIXED_SUITS, "natural cards of a run must share one suit")
    if any(card.rank == 3 for card in naturals):
        return _reject(ErrorCode.RUN_CONTAINS_THREE, "threes cannot be part of a run")

    ranks = sorted(run_rank(card) for card in naturals)
    if ranks[0] == 9 or ranks[-1] == 9:
        return _reject(ErrorCode.RUN_9_AT_ENDPOINT, "a 9 cannot start or end a run")
    if any(card.rank == ACE for card in naturals) and not any(card.rank == KING for card in naturals):
        return _reject(ErrorCode.RUN_ACE_USED_LOW, "an Ace can only follow a King")

    positions = validate_wild_positions(cards, first_meld=first_meld, rules=rules)
    if not positions.valid:
        return positions

    if len(set(ranks)) != len(ranks):
        return _reject(ErrorCode.RUN_INVALID_SEQUENCE, "a run cannot repeat a rank")
    span = ranks[-1] - ranks[0] + 1
    if len(cards) < span:
        return _reject(
            ErrorCode.RUN_INVALID_SEQUENCE,
            f"{span - len(naturals)} gap(s) in the run but only {len(cards) - len(naturals)} wild card(s)",
        )
    gaps = span - len(naturals)
    wild_count = len(cards) - len(naturals)
    if wild_count > gaps:
        return _reject(
            ErrorCode.RUN_WILD_SUBSTITUTION_INVALID,
            f"{wild_count} wild card(s) for {gaps} gap(s) in the run",
        )
    return Verdict.ok("valid run", MeldType.RUN)


def validate_meld(
    cards: Sequence[Card],
    intended: Optional[MeldType] = None,
    *,
    first_meld: bool,
    rules: Ruleset | None = None,
) -> Verdict:
    """Top-level check for a brand-new meld.

    ``first_meld`` says whether the team has melded yet and picks the anchor
    of leading natural cards.

    With ``intended`` set to ``MeldType.SET`` or ``MeldType.RUN`` only that
    shape is tried. Otherwise the set rules run first, then the run rules, and
    when both fail the run's verdict is reported for cards whose naturals look
    like a run, the set's verdict for everything else.
    """
    rules = rules or DEFAULT_RULES
    if intended not in (None, MeldType.SET, MeldType.RUN):
        raise ValueError(f"intended meld type must be set or run, not {intended!r}")
    if len(cards) < rules.min_meld_size:
        return _reject(ErrorCode.MELD_TOO_SMALL, f"a meld needs at least {rules.min_meld_size} cards")
    if any(is_red_special(card) for card in cards):
        return _reject(ErrorCode.MELD_INVALID, "red threes cannot be melded")
    if any(is_black_special(card) for card in cards):
        return _reject(ErrorCode.MELD_INVALID, "black threes cannot be melded")
    if is_all_wild(cards):
        return Verdict.ok("valid wild meld", MeldType.WILD)

    if intended == MeldType.SET:
        return validate_set(cards, first_meld=first_meld, rules=rules)
    if intended == MeldType.RUN:
        return validate_run(cards, first_meld=first_meld, rules=rules)

    set_verdict = validate_set(cards, first_meld=first_meld, rules=rules)
    if set_verdict.valid:
        return set_verdict
    run_verdict = validate_run(cards, first_meld=first_meld, rules=rules)
    if run_verdict.valid:
        return run_verdict
    return run_verdict if infer_type(cards) == MeldType.RUN else set_verdict


# --- additions to existing melds ------------------------------------------------


def validate_wild_canasta(new_cards: Sequence[Card], existing: MeldLike, rules: Ruleset | None = None) -> Verdict:
    cards = _cards_of(existing)
    if is_canasta(cards, rules) and is_all_wild(cards):
        return _reject(ErrorCode.CANNOT_ADD_TO_WILD_CANASTA, "a wild canasta is closed to additions")
    return OK


def can_extend_run_end(new_card: Card, existing_naturals: Sequence[Card], direction: Direction) -> bool:
    naturals = naturals_of(existing_naturals)
    if not naturals:
        return False
    if direction == Direction.UP:
        top = max(run_rank(card) for card in naturals)
        return is_wild(new_card) or run_rank(new_card) == top + 1
    if direction == Direction.DOWN:
        bottom = min(run_rank(card) for card in naturals)
        if bottom == 2:
            return False
        return is_wild(new_card) or run_rank(new_card) == bottom - 1
    return False


def validate_run_direction(new_cards: Sequence[Card], existing: MeldLike, direction: Direction) -> Verdict:
    """Additions to a run keep its direction and only grow it at the far end.

    All-wild additions carry no direction of their own; their placement is
    settled when the combined run is revalidated.
    """
    new_naturals = naturals_of(new_cards)
    if new_naturals:
        added_direction = run_direction(new_cards)
        if (
            direction in (Direction.UP, Direction.DOWN)
            and added_direction in (Direction.UP, Direction.DOWN)
            and added_direction != direction
        ):
            return _reject(
                ErrorCode.RUN_DIRECTION_CHANGED,
                f"run goes {direction.value}, added cards go {added_direction.value}",
            )

    existing_naturals = naturals_of(_cards_of(existing))
    if not existing_naturals or not new_naturals:
        return OK
    ranks = [run_rank(card) for card in existing_naturals]
    if direction == Direction.UP:
        top = max(ranks)
        if any(run_rank(card) <= top for card in new_naturals):
            return _reject(ErrorCode.RUN_PREPEND_FORBIDDEN, "an upward run only grows above its highest card")
    elif direction == Direction.DOWN:
        bottom = min(ranks)
        if any(run_rank(card) >= bottom for card in new_naturals):
            return _reject(ErrorCode.RUN_PREPEND_FORBIDDEN, "a downward run only grows below its lowest card")
    return OK


def validate_addition_to_canasta(
    new_cards: Sequence[Card], existing_canasta: MeldLike, rules: Ruleset | None = None
) -> Verdict:
    cards = _cards_of(existing_canasta)
    if not is_canasta(cards, rules):
        return OK
    if is_all_wild(cards):
        return _reject(ErrorCode.CANNOT_ADD_TO_WILD_CANASTA, "a wild canasta is closed to additions")
    if any(is_wild(card) for card in new_cards):
        return _reject(ErrorCode.WILD_ADDED_AFTER_CANASTA, "a completed canasta only accepts natural cards")
    return OK


def can_add_to_meld_enhanced(
    new_cards: Sequence[Card],
    meld: Optional[Meld],
    *,
    first_meld: Optional[bool] = None,
    rules: Ruleset | None = None,
) -> Verdict:
    """Whether ``new_cards`` may be laid down, on ``meld`` or as a new meld.

    ``first_meld`` must be given for a new meld and is ignored for an addition.

    Checks run in order and the first failure is returned: the wild canasta
    block, the canasta addition rule, the run direction and append rule, and
    finally the full rules over the combined cards.
    """
    new_cards = list(new_cards)
    if meld is None:
        if first_meld is None:
            raise ValueError("first_meld is required when laying down a new meld")
        return validate_meld(new_cards, first_meld=first_meld, rules=rules)

    verdict = validate_wild_canasta(new_cards, meld, rules)
    if not verdict.valid:
        return verdict
    if meld.is_canasta:
        verdict = validate_addition_to_canasta(new_cards, meld, rules)
        if not verdict.valid:
            return verdict
    if meld.meld_type == MeldType.RUN:
        verdict = validate_run_direction(new_cards, meld, meld.direction)
        if not verdict.valid:
            return verdict

    intended = meld.meld_type if meld.meld_type in (MeldType.SET, MeldType.RUN) else None
    return validate_meld(list(meld.cards) + new_cards, intended=intended, first_meld=False, rules=rules)
