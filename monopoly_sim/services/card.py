"""
Chance and Community Chest card effects.
"""

import logging
from typing import Optional

from monopoly_sim.board import BOARD_SIZE
from monopoly_sim.cards import Card, CardDeck, CardType
from monopoly_sim.events import EventType
from monopoly_sim.game import GameState
from monopoly_sim.player import Player
from monopoly_sim.properties import buildings_of
from monopoly_sim.services.jail import JailService

logger = logging.getLogger(__name__)


class CardService:
    """Draws a card and applies its effect to the drawer and the table."""

    def __init__(self, jail_service: Optional[JailService] = None):
        self.jail_service = jail_service or JailService()

    def draw_and_apply_card(self, player: Player, game_state: GameState, deck: CardDeck) -> CardDeck:
        """
        Draw the top card of `deck` and apply it.

        Payments may leave balances negative; bankruptcy is settled by the
        game service afterwards. Returns the deck after the draw.
        """
        game_state.require_active(player)
        card = deck.draw()
        game_state.log(
            EventType.CARD_DRAWN,
            player,
            deck=deck.name,
            card_type=card.card_type.value,
            description=card.description,
        )
        logger.debug(f"{player.name} drew {card!r} from {deck.name}")
        self.apply_card(card, player, game_state, deck)
        return deck

    def apply_card(self, card: Card, player: Player, game_state: GameState, deck: CardDeck) -> None:
        card_type = card.card_type

        if card_type == CardType.GET_OUT_OF_JAIL_FREE:
            player.add_jail_card()
            game_state.hold_jail_card(player, card, deck.name)

        elif card_type == CardType.ADVANCE_TO_GO:
            self._move_to(player, 0, game_state)

        elif card_type == CardType.GO_TO_JAIL:
            self.jail_service.send_to_jail(player, game_state)

        elif card_type == CardType.MOVE_TO_POSITION:
            self._move_to(player, card.position, game_state)

        elif card_type == CardType.COLLECT_MONEY:
            player.receive(card.amount)

        elif card_type == CardType.PAY_MONEY:
            player.pay(card.amount)

        elif card_type == CardType.COLLECT_FROM_EACH_PLAYER:
            for other in game_state.other_active_players(player):
                other.pay(card.amount)
                player.receive(card.amount)

        elif card_type == CardType.PAY_EACH_PLAYER:
            for other in game_state.other_active_players(player):
                player.pay(card.amount)
                other.receive(card.amount)

        elif card_type == CardType.PAY_REPAIRS:
            player.pay(self.repair_cost(player, card))

        else:
            raise ValueError(f"Unhandled card type: {card_type}")

    @staticmethod
    def repair_cost(player: Player, card: Card) -> int:
        houses = sum(buildings_of(p).house_count for p in player.properties)
        hotels = sum(1 for p in player.properties if buildings_of(p).has_hotel)
        return houses * card.per_house + hotels * card.per_hotel

    @staticmethod
    def _move_to(player: Player, target: int, game_state: GameState) -> None:
        """Move forward to `target`, paying the GO bonus when the move wraps or ends on GO."""
        start = player.position.value
        steps = (target - start) % BOARD_SIZE
        if target == 0 and steps == 0:
            steps = BOARD_SIZE
        result = player.advance(steps, game_state.config.go_salary)
        game_state.log(
            EventType.PLAYER_MOVED,
            player,
            from_position=start,
            to_position=result.new_position.value,
            passed_go=result.passed_go,
        )
        if result.passed_go:
            game_state.log(EventType.PASSED_GO, player, amount=game_state.config.go_salary)
