"""
Strategy catalogue.

A StrategyRegistry maps short ids (used on the command line) to metadata and
a factory. Parameters are validated with pydantic before a strategy is built,
so the engine only ever receives ready-to-use Strategy instances.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from monopoly_sim.exceptions import ConfigError
from monopoly_sim.strategies.aggressive import AggressiveStrategy
from monopoly_sim.strategies.always_buy import AlwaysBuyStrategy
from monopoly_sim.strategies.balanced import BalancedStrategy
from monopoly_sim.strategies.base import Strategy
from monopoly_sim.strategies.conservative import ConservativeStrategy
from monopoly_sim.strategies.high_value import HighValueStrategy
from monopoly_sim.strategies.low_price import LowPriceStrategy
from monopoly_sim.strategies.monopoly_first import MonopolyFirstStrategy
from monopoly_sim.strategies.random_buy import RandomStrategy
from monopoly_sim.strategies.roi import ROIStrategy

logger = logging.getLogger(__name__)


class StrategyParams(BaseModel):
    """Base for strategy parameter models. Accepts snake_case or camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


class NoParams(StrategyParams):
    pass


class RandomParams(StrategyParams):
    buy_probability: float = Field(default=0.5, ge=0.0, le=1.0, alias="buyProbability")


class ConservativeParams(StrategyParams):
    min_cash_reserve: int = Field(default=500, ge=0, alias="minCashReserve")


class MonopolyFirstParams(StrategyParams):
    block_opponent_monopoly: bool = Field(default=True, alias="blockOpponentMonopoly")
    min_cash_reserve: int = Field(default=300, ge=0, alias="minCashReserve")


class ROIParams(StrategyParams):
    min_roi: float = Field(default=0.15, ge=0.0, alias="minROI")
    min_cash_reserve: int = Field(default=300, ge=0, alias="minCashReserve")


class LowPriceParams(StrategyParams):
    max_price: int = Field(default=200, gt=0, alias="maxPrice")
    min_cash_reserve: int = Field(default=200, ge=0, alias="minCashReserve")


class HighValueParams(StrategyParams):
    min_rent: int = Field(default=20, ge=0, alias="minRent")
    min_cash_reserve: int = Field(default=100, ge=0, alias="minCashReserve")


class BalancedParams(StrategyParams):
    threshold: int = Field(default=80, ge=0)
    min_cash_reserve: int = Field(default=400, ge=0, alias="minCashReserve")


class AggressiveParams(StrategyParams):
    min_cash_reserve: int = Field(default=300, ge=0, alias="minCashReserve")


StrategyFactory = Callable[[Any, Optional[random.Random]], Strategy]


@dataclass(frozen=True)
class StrategyMetadata:
    """
    Registry entry for one strategy.

    Attributes:
        id: Short id used on the command line.
        display_name: Human readable name.
        description: One-line summary.
        details: Longer explanation, including parameters.
        factory: Builds the strategy from validated params and an optional RNG.
        params_model: Pydantic model validating the strategy's parameters.
    """

    id: str
    display_name: str
    description: str
    details: str
    factory: StrategyFactory
    params_model: Type[StrategyParams] = NoParams


class StrategyRegistry:
    """An explicit, instance-scoped catalogue of strategies."""

    def __init__(self):
        self._strategies: Dict[str, StrategyMetadata] = {}

    def register(self, metadata: StrategyMetadata) -> None:
        if metadata.id in self._strategies:
            raise ConfigError(f"Strategy '{metadata.id}' is already registered")
        self._strategies[metadata.id] = metadata

    def get_metadata(self, strategy_id: str) -> StrategyMetadata:
        try:
            return self._strategies[strategy_id]
        except KeyError:
            raise ConfigError(
                f"Unknown strategy '{strategy_id}'. Available: {', '.join(self.ids())}"
            ) from None

    def list_all(self) -> List[StrategyMetadata]:
        """All registered strategies in registration order."""
        return list(self._strategies.values())

    def ids(self) -> List[str]:
        return list(self._strategies)

    def __contains__(self, strategy_id: str) -> bool:
        return strategy_id in self._strategies

    def default_parameters(self, strategy_id: str) -> Dict[str, Any]:
        """Default parameter values keyed by their camelCase names."""
        model = self.get_metadata(strategy_id).params_model
        return model().model_dump(by_alias=True)

    def validate_parameters(self, strategy_id: str, params: Optional[Mapping[str, Any]] = None) -> StrategyParams:
        metadata = self.get_metadata(strategy_id)
        try:
            return metadata.params_model.model_validate(dict(params or {}))
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid parameters for strategy '{strategy_id}': {e}") from e

    def create(
        self,
        strategy_id: str,
        params: Optional[Mapping[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ) -> Strategy:
        """Build a fresh strategy instance."""
        validated = self.validate_parameters(strategy_id, params)
        strategy = self.get_metadata(strategy_id).factory(validated, rng)
        logger.debug(f"Created strategy {strategy!r} for id '{strategy_id}'")
        return strategy


def create_default_registry() -> StrategyRegistry:
    """Registry holding every built-in strategy."""
    registry = StrategyRegistry()

    registry.register(
        StrategyMetadata(
            id="always",
            display_name="Always Buy",
            description="Always buys",
            details="Buys every affordable property and builds whenever allowed. Baseline for comparisons.",
            factory=lambda p, rng: AlwaysBuyStrategy(),
        )
    )
    registry.register(
        StrategyMetadata(
            id="random",
            display_name="Random",
            description="Buys at random",
            details="Buys an affordable property with probability buyProbability (default 0.5).",
            factory=lambda p, rng: RandomStrategy(p.buy_probability, rng=rng),
            params_model=RandomParams,
        )
    )
    registry.register(
        StrategyMetadata(
            id="conservative",
            display_name="Conservative",
            description="Keeps a cash cushion",
            details="Buys or builds only if at least minCashReserve (default $500) remains afterwards.",
            factory=lambda p, rng: ConservativeStrategy(p.min_cash_reserve),
            params_model=ConservativeParams,
        )
    )
    registry.register(
        StrategyMetadata(
            id="monopoly",
            display_name="Monopoly First",
            description="Prioritises completing colour groups",
            details=(
                "Prefers properties in sets it already holds and blocks opponents one property "
                "away from a set.\n"
                "Parameters:\n"
                "- blockOpponentMonopoly: block opponent sets (default: true)\n"
                "- minCashReserve: minimum cash after buying (default: $300)"
            ),
            factory=lambda p, rng: MonopolyFirstStrategy(p.block_opponent_monopoly, p.min_cash_reserve),
            params_model=MonopolyFirstParams,
        )
    )
    registry.register(
        StrategyMetadata(
            id="roi",
            display_name="ROI",
            description="Buys on return on investment",
            details=(
                "Buys when base rent / price is at least minROI.\n"
                "Parameters:\n"
                "- minROI: minimum ROI (default: 0.15)\n"
                "- minCashReserve: minimum cash after buying (default: $300)"
            ),
            factory=lambda p, rng: ROIStrategy(p.min_roi, p.min_cash_reserve),
            params_model=ROIParams,
        )
    )
    registry.register(
        StrategyMetadata(
            id="lowprice",
            display_name="Low Price",
            description="Buys cheap properties",
            details=(
                "Buys properties priced at or below maxPrice to grow rent income early.\n"
                "Parameters:\n"
                "- maxPrice: highest price it will pay (default: $200)\n"
                "- minCashReserve: minimum cash after buying (default: $200)"
            ),
            factory=lambda p, rng: LowPriceStrategy(p.max_price, p.min_cash_reserve),
            params_model=LowPriceParams,
        )
    )
    registry.register(
        StrategyMetadata(
            id="highvalue",
            display_name="High Value",
            description="Buys high-rent properties",
            details=(
                "Buys properties whose base rent is at least minRent, even when expensive.\n"
                "Parameters:\n"
                "- minRent: minimum base rent (default: $20)\n"
                "- minCashReserve: minimum cash after buying (default: $100)"
            ),
            factory=lambda p, rng: HighValueStrategy(p.min_rent, p.min_cash_reserve),
            params_model=HighValueParams,
        )
    )
    registry.register(
        StrategyMetadata(
            id="balanced",
            display_name="Balanced",
            description="Weighs set progress, ROI, price and rent",
            details=(
                "Scores every offer and buys above a threshold.\n"
                "Parameters:\n"
                "- threshold: minimum score (default: 80)\n"
                "- minCashReserve: minimum cash after buying (default: $400)"
            ),
            factory=lambda p, rng: BalancedStrategy(p.threshold, p.min_cash_reserve),
            params_model=BalancedParams,
        )
    )
    registry.register(
        StrategyMetadata(
            id="aggressive",
            display_name="Aggressive",
            description="Buys to block opponents",
            details=(
                "Buys into sets opponents are collecting.\n"
                "Parameters:\n"
                "- minCashReserve: minimum cash after buying (default: $300)"
            ),
            factory=lambda p, rng: AggressiveStrategy(p.min_cash_reserve),
            params_model=AggressiveParams,
        )
    )
    return registry
