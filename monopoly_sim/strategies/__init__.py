"""Built-in purchase/build strategies."""

from monopoly_sim.strategies.aggressive import AggressiveStrategy
from monopoly_sim.strategies.always_buy import AlwaysBuyStrategy
from monopoly_sim.strategies.balanced import BalancedStrategy
from monopoly_sim.strategies.base import BuildDecisionContext, BuyDecisionContext, Strategy
from monopoly_sim.strategies.conservative import ConservativeStrategy
from monopoly_sim.strategies.high_value import HighValueStrategy
from monopoly_sim.strategies.low_price import LowPriceStrategy
from monopoly_sim.strategies.monopoly_first import MonopolyFirstStrategy
from monopoly_sim.strategies.random_buy import RandomStrategy
from monopoly_sim.strategies.registry import (
    StrategyMetadata,
    StrategyRegistry,
    create_default_registry,
)
from monopoly_sim.strategies.roi import ROIStrategy

__all__ = [
    "Strategy",
    "BuyDecisionContext",
    "BuildDecisionContext",
    "AlwaysBuyStrategy",
    "RandomStrategy",
    "ConservativeStrategy",
    "MonopolyFirstStrategy",
    "ROIStrategy",
    "LowPriceStrategy",
    "HighValueStrategy",
    "BalancedStrategy",
    "AggressiveStrategy",
    "StrategyMetadata",
    "StrategyRegistry",
    "create_default_registry",
]
