"""Strategy that chases colour-group monopolies."""

from monopoly_sim.strategies.base import BuildDecisionContext, BuyDecisionContext, Strategy

BUY_SCORE_THRESHOLD = 50


class MonopolyFirstStrategy(Strategy):
    """
    Prefers properties that complete or extend its own sets.

    Scoring:
        +50 when it already owns one property of the set, +100 for two;
        +200 when this purchase completes the set;
        +80 when an opponent holds two of the set (blocking), if enabled.
    The score drops to zero when the purchase would leave less than
    `min_cash_reserve`. Buys at a score of 50 or more.
    """

    def __init__(self, block_opponent_monopoly: bool = True, min_cash_reserve: int = 300):
        self.block_opponent_monopoly = block_opponent_monopoly
        self.min_cash_reserve = min_cash_reserve

    def score(self, context: BuyDecisionContext) -> int:
        group = context.group
        owned = context.count_owned_in_color_group(group)

        score = 0
        if owned == 1:
            score += 50
        elif owned == 2:
            score += 100

        if owned + 1 == context.group_size(group):
            score += 200

        if self.block_opponent_monopoly and context.max_other_player_count_in_color_group(group) >= 2:
            score += 80

        if context.money_after_purchase < self.min_cash_reserve:
            score = 0
        return score

    def should_buy(self, context: BuyDecisionContext) -> bool:
        return self.score(context) >= BUY_SCORE_THRESHOLD

    def should_build(self, context: BuildDecisionContext) -> bool:
        return context.money_after_build >= self.min_cash_reserve

    def __repr__(self) -> str:
        return (
            f"MonopolyFirstStrategy(block_opponent_monopoly={self.block_opponent_monopoly}, "
            f"min_cash_reserve={self.min_cash_reserve})"
        )
