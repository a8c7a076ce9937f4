"""Strategy that buys on return on investment."""

from monopoly_sim.properties import base_rent
from monopoly_sim.strategies.base import BuyDecisionContext, Strategy


class ROIStrategy(Strategy):
    """Buys when base rent / price reaches `min_roi` and the cash reserve holds."""

    def __init__(self, min_roi: float = 0.15, min_cash_reserve: int = 300):
        self.min_roi = min_roi
        self.min_cash_reserve = min_cash_reserve

    def should_buy(self, context: BuyDecisionContext) -> bool:
        prop = context.property
        roi = base_rent(prop) / prop.price
        return roi >= self.min_roi and context.money_after_purchase >= self.min_cash_reserve

    def __repr__(self) -> str:
        return f"ROIStrategy(min_roi={self.min_roi}, min_cash_reserve={self.min_cash_reserve})"
