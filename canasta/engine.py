from __future__ import annotations

import logging
from typing import Iterable, Optional

from .cards import Card
from .errors import IllegalMeldError, Verdict
from .meld import Meld, MeldType, build_metadata, extend
from .rules import Ruleset
from .validation import can_add_to_meld_enhanced, validate_meld

logger = logging.getLogger(__name__)


def is_legal_meld(
    cards: Iterable[Card],
    *,
    first_meld: bool,
    intended: Optional[MeldType] = None,
    rules: Ruleset | None = None,
) -> Verdict:
    return validate_meld(list(cards), intended=intended, first_meld=first_meld, rules=rules)


def is_legal_addition(meld: Meld, new_cards: Iterable[Card], rules: Ruleset | None = None) -> Verdict:
    return can_add_to_meld_enhanced(list(new_cards), meld, rules=rules)


def create_meld(
    cards: Iterable[Card],
    meld_id: Optional[str] = None,
    team: Optional[str] = None,
    *,
    first_meld: bool,
    intended: Optional[MeldType] = None,
    rules: Ruleset | None = None,
) -> Meld:
    cards = list(cards)
    verdict = is_legal_meld(cards, first_meld=first_meld, intended=intended, rules=rules)
    if not verdict.valid:
        raise IllegalMeldError(verdict)
    meld = build_metadata(cards, meld_id, team, rules)
    logger.debug("created %s meld %s with %d cards", meld.meld_type.value, meld.meld_id, len(meld))
    return meld


def add_to_meld(meld: Meld, new_cards: Iterable[Card], rules: Ruleset | None = None) -> Meld:
    new_cards = list(new_cards)
    verdict = is_legal_addition(meld, new_cards, rules=rules)
    if not verdict.valid:
        raise IllegalMeldError(verdict)
    updated = extend(meld, new_cards, rules)
    if updated.is_canasta and not meld.is_canasta:
        logger.info("meld %s became a canasta", meld.meld_id)
    return updated
