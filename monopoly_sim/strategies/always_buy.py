"""Strategy that buys and builds whenever it can."""

from monopoly_sim.strategies.base import BuildDecisionContext, BuyDecisionContext, Strategy


class AlwaysBuyStrategy(Strategy):
    """
    Buys every affordable property and builds whenever allowed.

    Used as the baseline when comparing strategies.
    """

    def should_buy(self, context: BuyDecisionContext) -> bool:
        return True

    def should_build(self, context: BuildDecisionContext) -> bool:
        return True
