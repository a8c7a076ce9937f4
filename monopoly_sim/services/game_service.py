"""
GameService runs a Monopoly game turn by turn.

Turn flow for the current player:

    TurnStarted -> roll -> (jail resolution) -> move -> resolve space
    -> settle bankruptcies -> build phase -> TurnEnded -> end check

Rule outcomes (cannot afford, rule not met) are returned as booleans or
reflected in the state. Contract violations such as acting for a bankrupt
player or playing on after the game ended raise.
"""

import logging
from typing import List, Optional

from monopoly_sim.board import AdvanceResult
from monopoly_sim.cards import CHANCE, COMMUNITY_CHEST
from monopoly_sim.dice import Dice, DiceRoll
from monopoly_sim.events import EventType
from monopoly_sim.exceptions import InvalidActionError
from monopoly_sim.game import GameState
from monopoly_sim.player import Player
from monopoly_sim.properties import (
    MAX_HOUSES,
    Property,
    StreetProperty,
    with_owner,
    without_owner,
)
from monopoly_sim.services.building import BuildingService
from monopoly_sim.services.card import CardService
from monopoly_sim.services.jail import JailService
from monopoly_sim.services.monopoly import MonopolyChecker
from monopoly_sim.services.rent import RentCalculator
from monopoly_sim.spaces import SpaceType
from monopoly_sim.strategies.base import BuildDecisionContext, BuyDecisionContext

logger = logging.getLogger(__name__)

MAX_CONSECUTIVE_DOUBLES = 3


class GameService:
    """
    Orchestrates the rule services to play a game.

    The service holds no game state of its own, so one instance can drive
    any number of games, one after another or from different threads.
    """

    def __init__(
        self,
        jail_service: Optional[JailService] = None,
        card_service: Optional[CardService] = None,
        building_service: Optional[BuildingService] = None,
        monopoly_checker: Optional[MonopolyChecker] = None,
        rent_calculator: Optional[RentCalculator] = None,
    ):
        self.monopoly_checker = monopoly_checker or MonopolyChecker()
        self.jail_service = jail_service or JailService()
        self.card_service = card_service or CardService(self.jail_service)
        self.building_service = building_service or BuildingService(self.monopoly_checker)
        self.rent_calculator = rent_calculator

    # --- game lifecycle -------------------------------------------------------

    def start_game(self, game_state: GameState) -> None:
        """Log GameStarted once."""
        if game_state.event_log.of_type(EventType.GAME_STARTED):
            return
        game_state.log(
            EventType.GAME_STARTED,
            players=[p.name for p in game_state.players],
            strategies=[p.strategy.name for p in game_state.players],
            starting_cash=game_state.config.starting_cash,
        )
        logger.info(f"Game started with players {[p.name for p in game_state.players]}")

    def run_game(self, game_state: GameState, dice: Dice, max_turns: Optional[int] = None) -> Optional[str]:
        """
        Play turns until one player is left or the turn cutoff is reached.

        Args:
            game_state: A fresh game.
            dice: The game's own dice.
            max_turns: Cutoff; falls back to `game_state.config.max_turns`.

        Returns:
            The winner's name, or None when the cutoff ends in a tie.
        """
        if max_turns is None:
            max_turns = game_state.config.max_turns
        self.start_game(game_state)
        self.check_game_end(game_state, max_turns)
        while not game_state.game_over:
            self.execute_turn(game_state, dice, max_turns)
        return game_state.winner

    def execute_turn(self, game_state: GameState, dice: Dice, max_turns: Optional[int] = None) -> None:
        """Play one turn for the current player and hand over if it is done."""
        if game_state.game_over:
            raise InvalidActionError("The game is already over")

        player = game_state.require_active(game_state.current_player)
        game_state.turn_number += 1
        game_state.log(EventType.TURN_STARTED, player, position=player.position.value, money=player.money.amount)

        extra_turn = self._play_turn(player, game_state, dice)

        if not player.is_bankrupt:
            self._offer_builds(player, game_state)

        game_state.log(EventType.TURN_ENDED, player, money=player.money.amount, extra_turn=extra_turn)

        self.check_game_end(game_state, max_turns)
        if game_state.game_over:
            return
        if not (extra_turn and not player.is_bankrupt):
            self.advance_to_next_player(game_state)

    def _play_turn(self, player: Player, game_state: GameState, dice: Dice) -> bool:
        """Roll, move and resolve. Returns True if the player rolls again."""
        if player.in_jail and player.get_out_of_jail_free_cards > 0:
            self.jail_service.use_get_out_of_jail_free_card(player, game_state)

        roll = dice.roll()
        game_state.log(
            EventType.DICE_ROLLED,
            player,
            die1=roll.die1,
            die2=roll.die2,
            total=roll.total,
            is_doubles=roll.is_doubles,
        )

        if player.in_jail:
            if roll.is_doubles:
                game_state.log(EventType.DOUBLES_ROLLED, player, in_jail=True)
            player.consecutive_doubles = 0
            if not self.jail_service.attempt_exit_with_doubles(player, roll.die1, roll.die2, game_state):
                return False
            self._move_and_resolve(player, roll, game_state)
            return roll.is_doubles and not player.is_bankrupt

        if roll.is_doubles:
            player.consecutive_doubles += 1
            game_state.log(EventType.DOUBLES_ROLLED, player, count=player.consecutive_doubles)
            if player.consecutive_doubles >= MAX_CONSECUTIVE_DOUBLES:
                game_state.log(EventType.THREE_CONSECUTIVE_DOUBLES, player)
                self.jail_service.send_to_jail(player, game_state)
                return False
        else:
            player.consecutive_doubles = 0

        self._move_and_resolve(player, roll, game_state)
        return roll.is_doubles and not player.is_bankrupt

    def _move_and_resolve(self, player: Player, roll: DiceRoll, game_state: GameState) -> None:
        self.move_player(player, roll.total, game_state)
        self.resolve_space(player, game_state, roll.total)
        self.settle_bankruptcies(game_state)

    def check_game_end(self, game_state: GameState, max_turns: Optional[int] = None) -> bool:
        """
        End the game when at most one player is left, or when the turn cutoff
        is reached. Under the cutoff the player with strictly the highest
        total assets wins; a tie leaves no winner.
        """
        if game_state.game_over:
            return True

        active = game_state.active_players
        if len(active) <= 1:
            winner = active[0].name if active else None
            self._end_game(game_state, winner, "last_player_standing")
            return True

        if max_turns is not None and game_state.turn_number >= max_turns:
            self._end_game(game_state, self._richest(active), "turn_limit")
            return True
        return False

    @staticmethod
    def _richest(players: List[Player]) -> Optional[str]:
        ranked = sorted(players, key=lambda p: p.total_assets(), reverse=True)
        if len(ranked) > 1 and ranked[0].total_assets() == ranked[1].total_assets():
            return None
        return ranked[0].name

    def _end_game(self, game_state: GameState, winner: Optional[str], reason: str) -> None:
        game_state.game_over = True
        game_state.winner = winner
        game_state.log(
            EventType.GAME_ENDED,
            winner,
            winner=winner,
            total_turns=game_state.turn_number,
            reason=reason,
            final_assets={p.name: p.total_assets().amount for p in game_state.players},
        )
        game_state.event_log.freeze()
        logger.info(f"Game ended after {game_state.turn_number} turns ({reason}), winner: {winner}")

    def advance_to_next_player(self, game_state: GameState) -> Player:
        """Hand the turn to the next player still in the game."""
        count = len(game_state.players)
        index = game_state.current_player_index
        for _ in range(count):
            index = (index + 1) % count
            if not game_state.players[index].is_bankrupt:
                break
        game_state.current_player_index = index
        return game_state.current_player

    # --- movement and spaces --------------------------------------------------

    def move_player(self, player: Player, steps: int, game_state: GameState) -> AdvanceResult:
        """Advance the player, paying the GO salary when position 0 is crossed or reached."""
        game_state.require_active(player)
        start = player.position.value
        result = player.advance(steps, game_state.config.go_salary)
        game_state.log(
            EventType.PLAYER_MOVED,
            player,
            from_position=start,
            to_position=result.new_position.value,
            steps=steps,
            passed_go=result.passed_go,
        )
        if result.passed_go:
            game_state.log(EventType.PASSED_GO, player, amount=game_state.config.go_salary)
        return result

    def resolve_space(self, player: Player, game_state: GameState, dice_total: int) -> None:
        """Apply the effect of the space the player is standing on."""
        space = game_state.board.get_space(player.position.value)
        space_type = space.space_type

        if space.is_purchasable:
            prop = game_state.board.get_property_at(space.position)
            if prop.owner is None:
                self.offer_purchase(player, prop, game_state)
            elif prop.owner != player.name:
                self.pay_rent(player, prop, game_state, dice_total)

        elif space_type == SpaceType.TAX:
            self.pay_tax(player, space.amount, game_state)

        elif space_type in (SpaceType.CHANCE, SpaceType.COMMUNITY_CHEST):
            deck_name = CHANCE if space_type == SpaceType.CHANCE else COMMUNITY_CHEST
            before = player.position.value
            self.card_service.draw_and_apply_card(player, game_state, game_state.deck(deck_name))
            if player.position.value != before and not player.in_jail:
                self.resolve_space(player, game_state, dice_total)

        elif space_type == SpaceType.GO_TO_JAIL:
            self.jail_service.send_to_jail(player, game_state)

    # --- money ------------------------------------------------------------------

    def offer_purchase(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """Ask the player's strategy whether to buy an affordable unowned property."""
        if not player.can_afford(prop.price):
            return False
        context = BuyDecisionContext(
            property=prop,
            player_name=player.name,
            player_money=player.money.amount,
            owned_properties=player.properties,
            board=game_state.board,
            all_players=list(game_state.players),
            current_turn=game_state.turn_number,
        )
        if not player.strategy.should_buy(context):
            logger.debug(f"{player.name} declined {prop.name}")
            return False
        return self.buy_property(player, prop, game_state)

    def buy_property(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """Buy an unowned property from the bank at list price."""
        game_state.require_active(player)
        current = game_state.board.get_property_at(prop.position)
        if current is None or current.owner is not None or not player.can_afford(current.price):
            return False

        player.pay(current.price)
        owned = with_owner(current, player.name)
        player.acquire_property(owned)
        game_state.board.update_property(owned)

        game_state.log(EventType.PROPERTY_PURCHASED, player, property=owned.name, position=owned.position, price=owned.price)
        logger.debug(f"{player.name} bought {owned.name} for ${owned.price}")
        return True

    def pay_rent(self, payer: Player, prop: Property, game_state: GameState, dice_total: int = 0) -> int:
        """Charge the rent due on `prop` to `payer`. Returns the amount paid."""
        game_state.require_active(payer)
        current = game_state.board.get_property_at(prop.position)
        if current is None or current.owner is None or current.owner == payer.name:
            return 0
        owner = game_state.get_player(current.owner)

        calculator = self.rent_calculator or RentCalculator(game_state.config.double_rent_on_monopoly)
        rent = calculator.calculate_rent(current, game_state.board, dice_total)
        if rent <= 0:
            return 0

        payer.pay(rent)
        owner.receive(rent)
        game_state.log(EventType.RENT_PAID, payer, owner=owner.name, property=current.name, amount=rent)
        logger.debug(f"{payer.name} paid ${rent} rent to {owner.name} for {current.name}")
        return rent

    def pay_tax(self, player: Player, amount: int, game_state: GameState) -> None:
        """Pay a tax to the bank."""
        game_state.require_active(player)
        player.pay(amount)
        game_state.log(EventType.TAX_PAID, player, amount=amount)

    # --- bankruptcy -------------------------------------------------------------

    def settle_bankruptcies(self, game_state: GameState) -> List[str]:
        """Bankrupt every player left with a negative balance."""
        bankrupted = []
        for player in game_state.players:
            if not player.is_bankrupt and player.money.is_negative:
                self.bankrupt_player(player, game_state)
                bankrupted.append(player.name)
        return bankrupted

    def bankrupt_player(self, player: Player, game_state: GameState) -> None:
        """Remove the player from the game and hand all their property back to the bank."""
        game_state.require_active(player)
        game_state.return_all_jail_cards(player)
        final_money = player.money.amount
        released = player.go_bankrupt()
        for prop in released:
            game_state.board.update_property(without_owner(prop))

        game_state.log(
            EventType.PLAYER_BANKRUPTED,
            player,
            money=final_money,
            released_properties=[p.name for p in released],
        )
        logger.info(f"{player.name} went bankrupt on turn {game_state.turn_number} (${final_money})")

    # --- building ---------------------------------------------------------------

    def _offer_builds(self, player: Player, game_state: GameState) -> None:
        """Let a building-capable strategy develop each completed colour group evenly."""
        for group in self.monopoly_checker.monopolies_of(player):
            while True:
                streets = sorted(
                    game_state.board.get_properties_by_color_group(group),
                    key=lambda s: (s.buildings.level, s.position),
                )
                target = self._next_build(player, streets, game_state)
                if target is None:
                    break
                street, hotel = target
                context = BuildDecisionContext(
                    property=street,
                    player_name=player.name,
                    player_money=player.money.amount,
                    cost=street.hotel_cost if hotel else street.house_cost,
                    building_hotel=hotel,
                    owned_properties=player.properties,
                    board=game_state.board,
                    current_turn=game_state.turn_number,
                )
                if not player.strategy.should_build(context):
                    break
                if hotel:
                    built = self.building_service.build_hotel(player, street, game_state)
                else:
                    built = self.building_service.build_house(player, street, game_state)
                if not built:
                    break

    def _next_build(self, player: Player, streets: List[StreetProperty], game_state: GameState):
        for street in streets:
            if street.buildings.house_count == MAX_HOUSES:
                if self.building_service.can_build_hotel(player, street, game_state):
                    return street, True
            elif self.building_service.can_build_house(player, street, game_state):
                return street, False
        return None
