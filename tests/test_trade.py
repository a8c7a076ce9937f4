"""
Tests for player-to-player trades.
"""

import pytest

from monopoly_sim.events import EventType
from monopoly_sim.exceptions import InvalidActionError, ValidationError
from monopoly_sim.money import Money
from monopoly_sim.services.building import BuildingService
from monopoly_sim.services.mortgage import MortgageService
from monopoly_sim.services.trading import TradeOffer, TradingService


@pytest.fixture
def owned(basic_game, give):
    """Alice owns Mediterranean and Reading Railroad, Bob owns Baltic."""
    give(basic_game, basic_game.get_player("Alice"), 1, 5)
    give(basic_game, basic_game.get_player("Bob"), 3)
    return basic_game


def test_trade_property_for_cash(owned):
    alice = owned.get_player("Alice")
    bob = owned.get_player("Bob")
    offer = TradeOffer("Alice", "Bob", proposer_gives=[5], recipient_cash=150)

    assert TradingService().trade(owned, offer)

    assert owned.board.get_property_at(5).owner == "Bob"
    assert bob.owns(5) and not alice.owns(5)
    assert alice.money == Money(1240 + 150)
    assert bob.money == Money(1440 - 150)

    event = owned.event_log.of_type(EventType.PROPERTY_TRADED)[-1]
    assert event.player == "Alice"
    assert event.details["counterparty"] == "Bob"
    assert event.details["given"] == ["Reading Railroad"]
    assert event.details["cash_received"] == 150


def test_swap_properties(owned):
    """Swapping Mediterranean for Baltic moves both deeds."""
    alice = owned.get_player("Alice")
    bob = owned.get_player("Bob")

    assert TradingService().swap_properties(owned, "Alice", "Bob", 1, 3)

    assert owned.board.get_property_at(1).owner == "Bob"
    assert owned.board.get_property_at(3).owner == "Alice"
    assert alice.owns(3) and bob.owns(1)
    assert alice.money == Money(1240)


def test_sell_property(owned):
    bob = owned.get_player("Bob")

    assert TradingService().sell_property(owned, "Alice", "Bob", 1, 80)

    assert bob.owns(1)
    assert bob.money == Money(1360)


def test_trade_keeps_mortgage(owned):
    alice = owned.get_player("Alice")
    MortgageService().mortgage(alice, owned.board.get_property_at(5), owned)

    assert TradingService().sell_property(owned, "Alice", "Bob", 5, 10)

    assert owned.board.get_property_at(5).is_mortgaged
    assert owned.get_player("Bob").get_property(5).is_mortgaged


@pytest.mark.parametrize(
    "offer, reason",
    [
        (TradeOffer("Alice", "Alice", proposer_gives=[1]), "themselves"),
        (TradeOffer("Alice", "Bob"), "empty"),
        (TradeOffer("Alice", "Bob", proposer_cash=-5), "negative"),
        (TradeOffer("Alice", "Bob", proposer_cash=5000), "cannot afford"),
        (TradeOffer("Alice", "Bob", proposer_gives=[1, 1]), "twice"),
        (TradeOffer("Alice", "Bob", proposer_gives=[3]), "does not own"),
        (TradeOffer("Alice", "Bob", proposer_gives=[4]), "holds no property"),
    ],
)
def test_invalid_trades_change_nothing(owned, offer, reason):
    alice = owned.get_player("Alice")
    bob = owned.get_player("Bob")
    service = TradingService()

    assert reason in service.validate(owned, offer)
    assert not service.trade(owned, offer)

    assert alice.money == Money(1240)
    assert bob.money == Money(1440)
    assert owned.board.get_property_at(1).owner == "Alice"
    assert owned.board.get_property_at(3).owner == "Bob"
    assert not owned.event_log.of_type(EventType.PROPERTY_TRADED)


def test_partially_invalid_trade_is_atomic(owned):
    offer = TradeOffer("Alice", "Bob", proposer_gives=[1], recipient_gives=[3, 9])

    assert not TradingService().trade(owned, offer)

    assert owned.board.get_property_at(1).owner == "Alice"
    assert owned.board.get_property_at(3).owner == "Bob"


def test_cannot_trade_group_with_buildings(basic_game, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 1, 3)
    BuildingService().build_house(alice, basic_game.board.get_property_at(1), basic_game)

    offer = TradeOffer("Alice", "Bob", proposer_gives=[3], recipient_cash=100)

    assert "buildings" in TradingService().validate(basic_game, offer)


def test_trade_with_unknown_player(owned):
    with pytest.raises(ValidationError):
        TradingService().trade(owned, TradeOffer("Alice", "Zed", proposer_gives=[1]))


def test_trade_with_bankrupt_player(owned, service):
    service.bankrupt_player(owned.get_player("Bob"), owned)

    with pytest.raises(InvalidActionError):
        TradingService().trade(owned, TradeOffer("Alice", "Bob", proposer_cash=10))
