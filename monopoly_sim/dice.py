"""
Two six-sided dice driven by an injected random stream.
"""

import random
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DiceRoll:
    die1: int
    die2: int

    @property
    def total(self) -> int:
        return self.die1 + self.die2

    @property
    def is_doubles(self) -> bool:
        return self.die1 == self.die2


class Dice:
    """
    A pair of dice.

    Pass either an existing `random.Random` or a seed. The same seed always
    yields the same sequence of rolls.
    """

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else random.Random(seed)
        self.last_roll: Optional[DiceRoll] = None

    def roll(self) -> DiceRoll:
        """Roll both dice."""
        self.last_roll = DiceRoll(self.rng.randint(1, 6), self.rng.randint(1, 6))
        return self.last_roll
