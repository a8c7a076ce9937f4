"""Shared test fixtures for the Monopoly simulator tests."""

from typing import List, Tuple

import pytest

from monopoly_sim import GameConfig, GameService, create_game
from monopoly_sim.dice import Dice, DiceRoll
from monopoly_sim.strategies import AlwaysBuyStrategy, Strategy


class ScriptedDice(Dice):
    """Dice that return a fixed sequence of rolls."""

    def __init__(self, rolls: List[Tuple[int, int]]):
        super().__init__(seed=0)
        self.rolls = list(rolls)

    def roll(self) -> DiceRoll:
        assert self.rolls, "ScriptedDice ran out of rolls"
        die1, die2 = self.rolls.pop(0)
        self.last_roll = DiceRoll(die1, die2)
        return self.last_roll


class NeverBuyStrategy(Strategy):
    """Declines every purchase and records each offer."""

    def __init__(self):
        self.offers = []

    def should_buy(self, context) -> bool:
        self.offers.append(context.property.name)
        return False


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def basic_game(game_config):
    """Two always-buy players with a fixed seed."""
    return create_game([("Alice", AlwaysBuyStrategy()), ("Bob", AlwaysBuyStrategy())], config=game_config)


@pytest.fixture
def three_player_game(game_config):
    """Three always-buy players with a fixed seed."""
    return create_game(
        [("Alice", AlwaysBuyStrategy()), ("Bob", AlwaysBuyStrategy()), ("Charlie", AlwaysBuyStrategy())],
        config=game_config,
    )


@pytest.fixture
def passive_game(game_config):
    """Two players that never buy anything."""
    return create_game([("Alice", NeverBuyStrategy()), ("Bob", NeverBuyStrategy())], config=game_config)


@pytest.fixture
def service():
    return GameService()


@pytest.fixture
def dice():
    """Factory for scripted dice: dice((1, 2), (3, 3))."""

    def make(*rolls):
        return ScriptedDice(list(rolls))

    return make


@pytest.fixture
def give(service):
    """Buy properties at list price for a player: give(game, player, 1, 3)."""

    def buy(game, player, *positions):
        for position in positions:
            assert service.buy_property(player, game.board.get_property_at(position), game)

    return buy


@pytest.fixture
def never_buy():
    """A fresh NeverBuyStrategy."""
    return NeverBuyStrategy()
