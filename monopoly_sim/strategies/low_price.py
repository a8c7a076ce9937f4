"""Strategy that collects cheap properties."""

from monopoly_sim.strategies.base import BuyDecisionContext, Strategy


class LowPriceStrategy(Strategy):
    """Buys properties priced at or below `max_price`."""

    def __init__(self, max_price: int = 200, min_cash_reserve: int = 200):
        self.max_price = max_price
        self.min_cash_reserve = min_cash_reserve

    def should_buy(self, context: BuyDecisionContext) -> bool:
        return (
            context.property.price <= self.max_price
            and context.money_after_purchase >= self.min_cash_reserve
        )

    def __repr__(self) -> str:
        return f"LowPriceStrategy(max_price={self.max_price}, min_cash_reserve={self.min_cash_reserve})"
