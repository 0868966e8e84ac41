from dataclasses import dataclass


@dataclass(frozen=True)
class Ruleset:
    decks: int = 2
    num_jokers: int = 6
    min_meld_size: int = 3
    max_wilds: int = 3
    min_naturals: int = 2
    canasta_size: int = 7
    first_meld_leading_naturals: int = 3
    later_meld_leading_naturals: int = 2
    joker_wild_canasta_points: int = 1000
    deuce_wild_canasta_points: int = 2000

    def deck_size(self) -> int:
        return self.decks * 52 + self.num_jokers

    def leading_naturals(self, first_meld: bool) -> int:
        if first_meld:
            return self.first_meld_leading_naturals
        return self.later_meld_leading_naturals


DEFAULT_RULES = Ruleset()
