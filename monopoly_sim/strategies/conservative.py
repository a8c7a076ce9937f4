"""Strategy that keeps a cash cushion."""

from monopoly_sim.strategies.base import BuildDecisionContext, BuyDecisionContext, Strategy


class ConservativeStrategy(Strategy):
    """Buys or builds only when at least `min_cash_reserve` remains afterwards."""

    def __init__(self, min_cash_reserve: int = 500):
        self.min_cash_reserve = min_cash_reserve

    def should_buy(self, context: BuyDecisionContext) -> bool:
        return context.money_after_purchase >= self.min_cash_reserve

    def should_build(self, context: BuildDecisionContext) -> bool:
        return context.money_after_build >= self.min_cash_reserve

    def __repr__(self) -> str:
        return f"ConservativeStrategy(min_cash_reserve={self.min_cash_reserve})"
