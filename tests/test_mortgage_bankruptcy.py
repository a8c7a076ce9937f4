"""
Tests for mortgages and bankruptcy handling.
"""

import pytest

from monopoly_sim import GameConfig, create_game
from monopoly_sim.cards import COMMUNITY_CHEST, CardDeck, get_out_of_jail_free
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import InvalidActionError
from monopoly_sim.money import Money
from monopoly_sim.services.building import BuildingService
from monopoly_sim.services.card import CardService
from monopoly_sim.services.mortgage import MortgageService
from monopoly_sim.strategies import AlwaysBuyStrategy


def test_mortgage_property(basic_game, give):
    """
    Rule: 'Unimproved properties can be mortgaged through the Bank at any time'
    """
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 5)

    assert MortgageService().mortgage(alice, basic_game.board.get_property_at(5), basic_game)

    assert basic_game.board.get_property_at(5).is_mortgaged
    assert alice.get_property(5).is_mortgaged
    assert alice.money == Money(1300 + 100)
    assert basic_game.event_log.of_type(EventType.PROPERTY_MORTGAGED)[-1].details["amount"] == 100


def test_cannot_mortgage_twice(basic_game, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 5)
    service = MortgageService()
    service.mortgage(alice, basic_game.board.get_property_at(5), basic_game)

    assert not service.mortgage(alice, basic_game.board.get_property_at(5), basic_game)
    assert alice.money == Money(1400)


def test_cannot_mortgage_others_property(basic_game, give):
    alice = basic_game.get_player("Alice")
    bob = basic_game.get_player("Bob")
    give(basic_game, alice, 5)

    assert not MortgageService().mortgage(bob, basic_game.board.get_property_at(5), basic_game)


def test_cannot_mortgage_group_with_buildings(basic_game, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 1, 3)
    BuildingService().build_house(alice, basic_game.board.get_property_at(1), basic_game)

    assert not MortgageService().mortgage(alice, basic_game.board.get_property_at(3), basic_game)
    assert not basic_game.board.get_property_at(3).is_mortgaged


def test_unmortgage_costs_ten_percent_interest(basic_game, give):
    """
    Rule: 'In order to lift the mortgage, the owner must pay the Bank the amount
    of the mortgage plus 10% interest.'
    """
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 5)
    service = MortgageService()
    service.mortgage(alice, basic_game.board.get_property_at(5), basic_game)

    assert service.unmortgage_cost(basic_game.board.get_property_at(5), basic_game) == 110
    assert service.unmortgage(alice, basic_game.board.get_property_at(5), basic_game)

    assert not basic_game.board.get_property_at(5).is_mortgaged
    assert alice.money == Money(1400 - 110)


def test_unmortgage_interest_rounds_down(basic_game, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 1)

    # Mediterranean: $30 mortgage, $3 interest
    assert MortgageService().unmortgage_cost(basic_game.board.get_property_at(1), basic_game) == 33


def test_unmortgage_without_cash(basic_game, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 5)
    service = MortgageService()
    service.mortgage(alice, basic_game.board.get_property_at(5), basic_game)
    alice.money = Money(100)

    assert not service.unmortgage(alice, basic_game.board.get_property_at(5), basic_game)
    assert basic_game.board.get_property_at(5).is_mortgaged


def test_unmortgage_requires_mortgage(basic_game, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 5)

    assert not MortgageService().unmortgage(alice, basic_game.board.get_property_at(5), basic_game)


def test_bankruptcy_returns_everything_to_bank(basic_game, service, give):
    """Properties go back unowned, unmortgaged and without buildings."""
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 1, 3, 5)
    BuildingService().build_house(alice, basic_game.board.get_property_at(1), basic_game)
    MortgageService().mortgage(alice, basic_game.board.get_property_at(5), basic_game)

    service.bankrupt_player(alice, basic_game)

    assert alice.is_bankrupt
    assert alice.properties == []
    for position in (1, 3, 5):
        prop = basic_game.board.get_property_at(position)
        assert prop.owner is None
        assert not prop.is_mortgaged
    assert basic_game.board.get_property_at(1).buildings.is_empty

    event = basic_game.event_log.of_type(EventType.PLAYER_BANKRUPTED)[-1]
    assert event.player == "Alice"
    assert event.details["released_properties"] == [
        "Mediterranean Avenue",
        "Baltic Avenue",
        "Reading Railroad",
    ]


def test_bankruptcy_returns_jail_cards(basic_game, service):
    alice = basic_game.get_player("Alice")
    jail_card = get_out_of_jail_free()
    deck = CardDeck([jail_card], COMMUNITY_CHEST)
    basic_game.community_chest_deck = deck
    CardService().draw_and_apply_card(alice, basic_game, deck)
    assert deck.size == 0

    service.bankrupt_player(alice, basic_game)

    assert alice.get_out_of_jail_free_cards == 0
    assert deck.cards == [jail_card]


def test_bankrupt_player_cannot_mortgage(basic_game, service, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 5)
    prop = basic_game.board.get_property_at(5)
    service.bankrupt_player(alice, basic_game)

    with pytest.raises(InvalidActionError):
        MortgageService().mortgage(alice, prop, basic_game)


def test_bankrupting_twice_is_refused(basic_game, service):
    alice = basic_game.get_player("Alice")
    service.bankrupt_player(alice, basic_game)

    with pytest.raises(InvalidActionError):
        service.bankrupt_player(alice, basic_game)


def test_negative_balance_is_settled_once(service):
    game = create_game(
        [("Alice", AlwaysBuyStrategy()), ("Bob", AlwaysBuyStrategy()), ("Charlie", AlwaysBuyStrategy())],
        config=GameConfig(seed=5),
    )
    game.get_player("Bob").money = Money(-1)

    assert service.settle_bankruptcies(game) == ["Bob"]
    assert service.settle_bankruptcies(game) == []
    assert [p.name for p in game.active_players] == ["Alice", "Charlie"]
