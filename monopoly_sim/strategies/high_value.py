"""Strategy that buys high-rent properties."""

from monopoly_sim.properties import base_rent
from monopoly_sim.strategies.base import BuyDecisionContext, Strategy


class HighValueStrategy(Strategy):
    """Buys properties whose base rent is at least `min_rent`."""

    def __init__(self, min_rent: int = 20, min_cash_reserve: int = 100):
        self.min_rent = min_rent
        self.min_cash_reserve = min_cash_reserve

    def should_buy(self, context: BuyDecisionContext) -> bool:
        return (
            base_rent(context.property) >= self.min_rent
            and context.money_after_purchase >= self.min_cash_reserve
        )

    def __repr__(self) -> str:
        return f"HighValueStrategy(min_rent={self.min_rent}, min_cash_reserve={self.min_cash_reserve})"
