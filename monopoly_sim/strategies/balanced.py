"""Strategy that weighs several factors into one score."""

from monopoly_sim.properties import base_rent
from monopoly_sim.strategies.base import BuildDecisionContext, BuyDecisionContext, Strategy


class BalancedStrategy(Strategy):
    """
    Scores a purchase on set progress, ROI, price and rent.

    score = owned_in_group * 20 + int(roi * 100) + int((500 - price) / 10) + base_rent

    Buys when the score reaches `threshold` and at least `min_cash_reserve`
    would remain.
    """

    def __init__(self, threshold: int = 80, min_cash_reserve: int = 400):
        self.threshold = threshold
        self.min_cash_reserve = min_cash_reserve

    def score(self, context: BuyDecisionContext) -> int:
        prop = context.property
        rent = base_rent(prop)
        score = context.count_owned_in_color_group(context.group) * 20
        score += int(rent / prop.price * 100)
        score += int((500 - prop.price) / 10)
        score += rent
        return score

    def should_buy(self, context: BuyDecisionContext) -> bool:
        if context.money_after_purchase < self.min_cash_reserve:
            return False
        return self.score(context) >= self.threshold

    def should_build(self, context: BuildDecisionContext) -> bool:
        return context.money_after_build >= self.min_cash_reserve

    def __repr__(self) -> str:
        return f"BalancedStrategy(threshold={self.threshold}, min_cash_reserve={self.min_cash_reserve})"
