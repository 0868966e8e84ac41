from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Sequence

if TYPE_CHECKING:
    from .rules import Ruleset

JOKER_RANK = 0
ACE = 1
KING = 13
RANKS = range(ACE, KING + 1)

_RANK_TOKENS = {1: "A", 11: "J", 12: "Q", 13: "K"}
_RANK_NAMES = ["", "Ace", "2", "3", "4", "5", "6", "7", "8", "9", "10", "Jack", "Queen", "King"]


class Suit(str, Enum):
    HEART = "HEART"
    DIAMOND = "DIAMOND"
    CLUB = "CLUB"
    SPADE = "SPADE"
    JOKER = "JOKER"


STANDARD_SUITS = (Suit.HEART, Suit.DIAMOND, Suit.CLUB, Suit.SPADE)
RED_SUITS = frozenset({Suit.HEART, Suit.DIAMOND})
BLACK_SUITS = frozenset({Suit.CLUB, Suit.SPADE})


@dataclass(frozen=True)
class Card:
    rank: int
    suit: Suit

    @property
    def is_joker(self) -> bool:
        return self.suit == Suit.JOKER

    @property
    def is_wild(self) -> bool:
        return is_wild(self)

    def label(self) -> str:
        return card_label(self)

    @classmethod
    def joker(cls) -> "Card":
        return cls(JOKER_RANK, Suit.JOKER)


def is_wild(card: Card) -> bool:
    return card.suit == Suit.JOKER or card.rank == 2


def is_red_special(card: Card) -> bool:
    return card.rank == 3 and card.suit in RED_SUITS


def is_black_special(card: Card) -> bool:
    return card.rank == 3 and card.suit in BLACK_SUITS


def is_special(card: Card) -> bool:
    return is_red_special(card) or is_black_special(card)


def playable_cards(cards: Iterable[Card]) -> List[Card]:
    """Drop the red and black threes; they never enter a meld."""
    return [card for card in cards if not is_special(card)]


def rank_name(rank: int) -> str:
    if rank == JOKER_RANK:
        return "Joker"
    if 0 < rank < len(_RANK_NAMES):
        return _RANK_NAMES[rank]
    return f"Rank {rank}"


def card_label(card: Card) -> str:
    if card.suit == Suit.JOKER:
        return "JK"
    return f"{_RANK_TOKENS.get(card.rank, str(card.rank))}{card.suit.value[0]}"


def parse_card(token: str) -> Card:
    """Parse the short text form used by ``card_label``: ``10H``, ``QS``, ``AD``, ``JK``."""
    text = token.strip().upper()
    if text in ("JK", "JOKER"):
        return Card.joker()
    if len(text) < 2:
        raise ValueError(f"unrecognised card {token!r}")
    rank_text, suit_text = text[:-1], text[-1]
    suit = next((s for s in STANDARD_SUITS if s.value[0] == suit_text), None)
    if suit is None:
        raise ValueError(f"unrecognised suit in card {token!r}")
    by_token = {v: k for k, v in _RANK_TOKENS.items()}
    if rank_text in by_token:
        rank = by_token[rank_text]
    elif rank_text.isdigit() and 2 <= int(rank_text) <= 10:
        rank = int(rank_text)
    else:
        raise ValueError(f"unrecognised rank in card {token!r}")
    return Card(rank, suit)


def parse_cards(text: str | Sequence[str]) -> List[Card]:
    tokens = text.split() if isinstance(text, str) else list(text)
    return [parse_card(token) for token in tokens]


def iter_full_deck(rules: "Ruleset | None" = None) -> Iterable[Card]:
    decks = 2 if rules is None else rules.decks
    num_jokers = 6 if rules is None else rules.num_jokers
    for _ in range(decks):
        for suit in STANDARD_SUITS:
            for rank in RANKS:
                yield Card(rank, suit)
    for _ in range(num_jokers):
        yield Card.joker()
