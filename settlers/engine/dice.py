"""Dice and development-card suppliers.

Both are zero-argument callables so tests can plug in fixed sequences.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Iterator

from ..models import player

DiceSource = Callable[[], int]
CardSource = Callable[[], player.DevCardType]


def make_dice(
    number_of_dice: int = 2, sides: int = 6, rng: random.Random | None = None
) -> DiceSource:
    """Return a supplier that sums *number_of_dice* rolls of a *sides*-sided die."""
    rng = rng or random.Random()

    def roll() -> int:
        return sum(rng.randint(1, sides) for _ in range(number_of_dice))

    return roll


def make_card_deck(rng: random.Random | None = None) -> CardSource:
    """Return a supplier that draws from a shuffled standard deck.

    Raises:
        IndexError: When drawing from an exhausted deck.
    """
    rng = rng or random.Random()
    deck: list[player.DevCardType] = []
    for card_type, count in player.DEV_CARD_COUNTS.items():
        deck.extend([card_type] * count)
    rng.shuffle(deck)

    def draw() -> player.DevCardType:
        if not deck:
            raise IndexError('No development cards remaining in the deck.')
        return deck.pop()

    return draw


def fixed_sequence(values: Iterable[int]) -> DiceSource:
    """Return a dice supplier that replays *values* in order.

    Raises:
        IndexError: When the sequence is exhausted.
    """
    it: Iterator[int] = iter(values)

    def roll() -> int:
        value = next(it, None)
        if value is None:
            raise IndexError('Dice sequence exhausted.')
        return value

    return roll
