"""
Tests for turn flow, bankruptcy and game end.
"""

import pytest

from monopoly_sim import GameConfig, create_game
from monopoly_sim.cards import CHANCE, CardDeck, collect_from_each_player, move_to_position
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import InvalidActionError
from monopoly_sim.money import Money
from monopoly_sim.properties import ColorGroup
from monopoly_sim.services.building import BuildingService
from monopoly_sim.services.mortgage import MortgageService
from monopoly_sim.services.trading import TradeOffer, TradingService
from monopoly_sim.simulation import PlayerSpec, run_single_game
from monopoly_sim.strategies import AlwaysBuyStrategy


def event_types(game):
    return [e.event_type for e in game.events]


def test_turn_buys_unowned_property(basic_game, service, dice):
    alice = basic_game.get_player("Alice")

    service.execute_turn(basic_game, dice((1, 2)))

    assert alice.position.value == 3
    assert alice.money == Money(1440)
    assert basic_game.board.get_property_at(3).owner == "Alice"
    assert basic_game.turn_number == 1
    assert basic_game.current_player.name == "Bob"

    types = event_types(basic_game)
    assert types[0] == EventType.TURN_STARTED
    assert types[-1] == EventType.TURN_ENDED
    assert types.index(EventType.DICE_ROLLED) < types.index(EventType.PLAYER_MOVED)
    assert types.index(EventType.PLAYER_MOVED) < types.index(EventType.PROPERTY_PURCHASED)


def test_strategy_only_asked_for_affordable_property(passive_game, service, dice):
    alice = passive_game.get_player("Alice")
    bob = passive_game.get_player("Bob")
    alice.money = Money(50)
    rolls = dice((1, 2), (2, 4))

    service.execute_turn(passive_game, rolls)
    service.execute_turn(passive_game, rolls)

    assert alice.strategy.offers == []
    assert bob.strategy.offers == ["Oriental Avenue"]
    assert passive_game.board.get_property_at(6).owner is None


def test_rent_is_paid_to_owner(basic_game, service, dice, give):
    alice = basic_game.get_player("Alice")
    bob = basic_game.get_player("Bob")
    give(basic_game, bob, 3)

    service.execute_turn(basic_game, dice((1, 2)))

    assert alice.money == Money(1496)
    assert bob.money == Money(1444)
    rent = basic_game.event_log.of_type(EventType.RENT_PAID)[-1]
    assert rent.details["owner"] == "Bob"
    assert rent.details["amount"] == 4


def test_no_rent_on_own_property(basic_game, service, dice, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 3)

    service.execute_turn(basic_game, dice((1, 2)))

    assert alice.money == Money(1440)
    assert not basic_game.event_log.of_type(EventType.RENT_PAID)


def test_income_tax(basic_game, service, dice):
    alice = basic_game.get_player("Alice")

    service.execute_turn(basic_game, dice((1, 3)))

    assert alice.money == Money(1300)
    assert basic_game.event_log.of_type(EventType.TAX_PAID)[-1].details["amount"] == 200


def test_passing_go_collects_salary(basic_game, service, dice):
    alice = basic_game.get_player("Alice")
    alice.move_to(38)

    service.execute_turn(basic_game, dice((1, 2)))

    assert alice.position.value == 1
    # $200 salary, then Mediterranean for $60
    assert alice.money == Money(1640)
    assert basic_game.event_log.of_type(EventType.PASSED_GO)


def test_doubles_grant_extra_turn(basic_game, service, dice):
    alice = basic_game.get_player("Alice")
    rolls = dice((3, 3), (1, 2))

    service.execute_turn(basic_game, rolls)
    assert basic_game.current_player is alice
    assert alice.consecutive_doubles == 1

    service.execute_turn(basic_game, rolls)

    assert alice.position.value == 9
    assert alice.money == Money(1280)
    assert alice.consecutive_doubles == 0
    assert basic_game.current_player.name == "Bob"


def test_three_doubles_send_to_jail(basic_game, service, dice):
    """
    Rule: 'If you throw doubles three times in succession, move your token
    immediately to the space marked In Jail'
    """
    alice = basic_game.get_player("Alice")
    rolls = dice((3, 3), (5, 5), (1, 1))

    for _ in range(3):
        service.execute_turn(basic_game, rolls)

    assert alice.in_jail
    assert alice.position.value == 10
    assert alice.money == Money(1220)
    assert basic_game.turn_number == 3
    assert basic_game.event_log.of_type(EventType.THREE_CONSECUTIVE_DOUBLES)
    assert basic_game.current_player.name == "Bob"


def test_go_to_jail_space(basic_game, service, dice):
    alice = basic_game.get_player("Alice")
    alice.move_to(24)

    service.execute_turn(basic_game, dice((3, 3)))

    assert alice.in_jail
    assert alice.position.value == 10
    assert alice.consecutive_doubles == 0
    assert basic_game.current_player is alice


def test_movement_card_resolves_destination(basic_game, service, dice):
    alice = basic_game.get_player("Alice")
    basic_game.chance_deck = CardDeck([move_to_position(39, "Advance to Boardwalk")], CHANCE)

    service.execute_turn(basic_game, dice((3, 4)))

    assert alice.position.value == 39
    assert basic_game.board.get_property_at(39).owner == "Alice"
    assert alice.money == Money(1100)


def test_bankruptcy_ends_two_player_game(basic_game, service, dice, give):
    alice = basic_game.get_player("Alice")
    bob = basic_game.get_player("Bob")
    give(basic_game, bob, 5, 15, 25)
    give(basic_game, alice, 1)
    alice.money = Money(30)

    service.execute_turn(basic_game, dice((2, 3)))

    assert alice.is_bankrupt
    assert alice.properties == []
    assert basic_game.board.get_property_at(1).owner is None
    assert bob.money == Money(1000)

    assert basic_game.game_over
    assert basic_game.winner == "Bob"
    assert basic_game.event_log.frozen
    ended = basic_game.event_log.of_type(EventType.GAME_ENDED)[-1]
    assert ended.details["reason"] == "last_player_standing"
    assert ended.details["winner"] == "Bob"


def snapshot(game):
    players = [(p.money, p.position.value, p.in_jail, list(p.properties), p.is_bankrupt) for p in game.players]
    return players, game.board.properties(), len(game.events)


FINISHED_GAME_ACTIONS = {
    "mortgage": lambda s, g, alice, bob: MortgageService().mortgage(bob, g.board.get_property_at(1), g),
    "build_house": lambda s, g, alice, bob: BuildingService().build_house(bob, g.board.get_property_at(3), g),
    "trade": lambda s, g, alice, bob: TradingService().trade(g, TradeOffer("Bob", "Alice", [1], recipient_cash=100)),
    "pay_fine": lambda s, g, alice, bob: s.jail_service.pay_fine_to_exit(bob, g),
    "buy_property": lambda s, g, alice, bob: s.buy_property(alice, g.board.get_property_at(6), g),
    "move_player": lambda s, g, alice, bob: s.move_player(alice, 3, g),
    "bankrupt_player": lambda s, g, alice, bob: s.bankrupt_player(bob, g),
}


@pytest.mark.parametrize("action", sorted(FINISHED_GAME_ACTIONS))
def test_finished_game_refuses_player_actions(basic_game, service, dice, give, action):
    alice = basic_game.get_player("Alice")
    bob = basic_game.get_player("Bob")
    give(basic_game, bob, 1, 3)
    give(basic_game, alice, 5)
    bob.send_to_jail()
    service.execute_turn(basic_game, dice((1, 3)), max_turns=1)
    assert basic_game.game_over
    before = snapshot(basic_game)

    with pytest.raises(InvalidActionError, match="already over"):
        FINISHED_GAME_ACTIONS[action](service, basic_game, alice, bob)

    assert snapshot(basic_game) == before


def test_bankruptcy_cascade(three_player_game, service, dice):
    alice, bob, charlie = three_player_game.players
    three_player_game.chance_deck = CardDeck([collect_from_each_player(50)], CHANCE)
    bob.money = Money(20)
    charlie.money = Money(20)

    service.execute_turn(three_player_game, dice((3, 4)))

    assert bob.is_bankrupt and charlie.is_bankrupt
    assert alice.money == Money(1600)
    bankrupted = [e.player for e in three_player_game.event_log.of_type(EventType.PLAYER_BANKRUPTED)]
    assert bankrupted == ["Bob", "Charlie"]
    assert three_player_game.winner == "Alice"


def test_bankrupt_players_are_skipped(three_player_game, service, dice):
    bob = three_player_game.get_player("Bob")
    service.bankrupt_player(bob, three_player_game)

    service.execute_turn(three_player_game, dice((1, 3)))

    assert three_player_game.current_player.name == "Charlie"


def test_bankrupt_player_cannot_act(basic_game, service, give):
    alice = basic_game.get_player("Alice")
    service.bankrupt_player(alice, basic_game)

    with pytest.raises(InvalidActionError):
        give(basic_game, alice, 1)
    with pytest.raises(InvalidActionError):
        service.move_player(alice, 3, basic_game)


def test_turn_limit_tie_has_no_winner(passive_game, service, dice):
    rolls = dice((1, 2), (1, 2))

    service.execute_turn(passive_game, rolls, max_turns=2)
    service.execute_turn(passive_game, rolls, max_turns=2)

    assert passive_game.game_over
    assert passive_game.winner is None
    ended = passive_game.event_log.of_type(EventType.GAME_ENDED)[-1]
    assert ended.details["reason"] == "turn_limit"


def test_turn_limit_richest_player_wins(basic_game, service, dice):
    service.execute_turn(basic_game, dice((1, 3)), max_turns=1)

    assert basic_game.game_over
    assert basic_game.winner == "Bob"


def test_no_turns_after_game_over(basic_game, service, dice):
    service.execute_turn(basic_game, dice((1, 3)), max_turns=1)

    with pytest.raises(InvalidActionError):
        service.execute_turn(basic_game, dice((1, 2)))
    with pytest.raises(InvalidActionError):
        basic_game.log(EventType.TURN_STARTED)


def test_build_phase_develops_monopoly(basic_game, service, dice, give):
    alice = basic_game.get_player("Alice")
    give(basic_game, alice, 1, 3)
    alice.move_to(10)

    service.execute_turn(basic_game, dice((1, 2)))

    # 1380 after buying both browns, $140 for States Avenue, then 8 houses and 2 hotels at $50
    browns = basic_game.board.get_properties_by_color_group(ColorGroup.BROWN)
    assert all(p.buildings.has_hotel for p in browns)
    assert alice.money == Money(1380 - 140 - 500)


def test_run_game_logs_start_once(basic_game, service, dice):
    service.start_game(basic_game)
    service.start_game(basic_game)

    assert len(basic_game.event_log.of_type(EventType.GAME_STARTED)) == 1


def test_single_player_game_ends_immediately(service, dice):
    game = create_game([("Solo", AlwaysBuyStrategy())], config=GameConfig(seed=1))

    assert service.run_game(game, dice()) == "Solo"
    assert game.turn_number == 0


def test_seeded_games_are_reproducible():
    players = [PlayerSpec("Alice", "balanced"), PlayerSpec("Bob", "random"), PlayerSpec("Charlie", "aggressive")]

    first = run_single_game(1, players, seed=7, max_turns=150)
    second = run_single_game(1, players, seed=7, max_turns=150)

    assert first.winner == second.winner
    assert first.total_turns == second.total_turns
    assert [e.to_dict() for e in first.final_state.events] == [e.to_dict() for e in second.final_state.events]


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_full_game_keeps_state_consistent(seed):
    players = [
        PlayerSpec("Alice", "always"),
        PlayerSpec("Bob", "monopoly"),
        PlayerSpec("Charlie", "balanced"),
        PlayerSpec("Diana", "aggressive"),
    ]

    result = run_single_game(seed, players, seed=seed, max_turns=300)
    game = result.final_state

    assert game.game_over
    assert game.event_log.frozen
    assert game.events[-1].event_type == EventType.GAME_ENDED
    assert result.total_turns <= 300

    for player in game.players:
        if player.is_bankrupt:
            assert player.properties == []
        for prop in player.properties:
            assert game.board.get_property_at(prop.position) == prop
            assert prop.owner == player.name

    names = {p.name for p in game.active_players}
    for prop in game.board.properties():
        assert prop.owner is None or prop.owner in names

    for group in ColorGroup:
        levels = [s.buildings.level for s in game.board.get_properties_by_color_group(group)]
        assert max(levels) - min(levels) <= 1

    turns = [e.turn_number for e in game.events]
    assert turns == sorted(turns)
