from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .cards import card_label, parse_cards
from .errors import Verdict
from .meld import Meld, MeldType, build_metadata, extend
from .scoring import canasta_kind, wild_canasta_points
from .validation import can_add_to_meld_enhanced, validate_meld


def _describe_meld(meld: Meld) -> List[str]:
    lines = [
        "Cards: " + " ".join(card_label(card) for card in meld.cards),
        f"Type: {meld.meld_type.value}",
        f"Direction: {meld.direction.value}",
        f"Canasta: {'yes' if meld.is_canasta else 'no'}",
    ]
    kind = canasta_kind(meld.cards)
    if kind is not None:
        lines.append(f"Canasta kind: {kind.value}")
    points = wild_canasta_points(meld.cards)
    if points is not None:
        lines.append(f"Wild canasta bonus: {points}")
    return lines


def _report(verdict: Verdict, meld: Optional[Meld]) -> int:
    if verdict.valid:
        print("VALID" + (f" ({verdict.detail})" if verdict.detail else ""))
        if meld is not None:
            for line in _describe_meld(meld):
                print(line)
        return 0
    print(f"INVALID {verdict.error_code.value}: {verdict.detail}")
    return 1


def _cmd_validate(args: argparse.Namespace) -> int:
    cards = parse_cards(args.cards)
    intended = MeldType(args.intended) if args.intended else None
    verdict = validate_meld(cards, intended=intended, first_meld=args.first_meld)
    return _report(verdict, build_metadata(cards, "cli") if verdict.valid else None)


def _cmd_add(args: argparse.Namespace) -> int:
    meld = build_metadata(parse_cards(args.meld), "cli")
    new_cards = parse_cards(args.cards)
    verdict = can_add_to_meld_enhanced(new_cards, meld)
    return _report(verdict, extend(meld, new_cards) if verdict.valid else None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check Bulgarian Canasta melds against the table rules.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every rule decision.")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Check a new meld, e.g. 4S 5S JK 7S.")
    validate.add_argument("cards", nargs="+", help="Cards in table order (10H, QS, AD, 2C, JK).")
    validate.add_argument("--first-meld", action="store_true", help="Apply the first-meld-of-team anchor.")
    validate.add_argument("--as", dest="intended", choices=[MeldType.SET.value, MeldType.RUN.value])
    validate.set_defaults(handler=_cmd_validate)

    add = sub.add_parser("add", help="Check an addition to an existing meld.")
    add.add_argument("--meld", required=True, help='Existing meld, e.g. "4S 5S 6S".')
    add.add_argument("cards", nargs="+", help="Cards to append.")
    add.set_defaults(handler=_cmd_add)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return args.handler(args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    sys.exit(main())
