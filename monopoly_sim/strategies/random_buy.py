"""Strategy that flips a coin on every purchase."""

import random
from typing import Optional

from monopoly_sim.strategies.base import BuyDecisionContext, Strategy


class RandomStrategy(Strategy):
    """
    Buys with a fixed probability.

    Each instance owns its own random stream so games stay reproducible and
    independent of one another.
    """

    def __init__(
        self,
        buy_probability: float = 0.5,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.buy_probability = buy_probability
        self.rng = rng if rng is not None else random.Random(seed)

    def should_buy(self, context: BuyDecisionContext) -> bool:
        if context.money_after_purchase < 0:
            return False
        return self.rng.random() < self.buy_probability

    def __repr__(self) -> str:
        return f"RandomStrategy(buy_probability={self.buy_probability})"
