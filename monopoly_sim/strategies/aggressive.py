"""Strategy that buys to block opponents."""

from monopoly_sim.strategies.base import BuildDecisionContext, BuyDecisionContext, Strategy

BUY_SCORE_THRESHOLD = 40


class AggressiveStrategy(Strategy):
    """
    Buys into sets that opponents are building toward.

    Each opponent holding one property of the set adds 40, holding two adds
    100. Buys at 40 or more while keeping `min_cash_reserve`. Builds whenever
    the reserve survives the build.
    """

    def __init__(self, min_cash_reserve: int = 300):
        self.min_cash_reserve = min_cash_reserve

    def score(self, context: BuyDecisionContext) -> int:
        score = 0
        for opponent in context.other_players:
            held = opponent.count_in_group(context.group)
            if held == 1:
                score += 40
            elif held == 2:
                score += 100
        return score

    def should_buy(self, context: BuyDecisionContext) -> bool:
        if context.money_after_purchase < self.min_cash_reserve:
            return False
        return self.score(context) >= BUY_SCORE_THRESHOLD

    def should_build(self, context: BuildDecisionContext) -> bool:
        return context.money_after_build >= self.min_cash_reserve

    def __repr__(self) -> str:
        return f"AggressiveStrategy(min_cash_reserve={self.min_cash_reserve})"
