"""
Player-to-player trades.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from monopoly_sim.events import EventType
from monopoly_sim.game import GameState
from monopoly_sim.player import Player
from monopoly_sim.properties import Property, StreetProperty, with_owner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradeOffer:
    """
    A proposed exchange between two players.

    Attributes:
        proposer: Name of the player making the offer.
        recipient: Name of the other party.
        proposer_gives: Board positions of properties moving proposer -> recipient.
        recipient_gives: Board positions of properties moving recipient -> proposer.
        proposer_cash: Cash paid by the proposer to the recipient.
        recipient_cash: Cash paid by the recipient to the proposer.
    """

    proposer: str
    recipient: str
    proposer_gives: List[int] = field(default_factory=list)
    recipient_gives: List[int] = field(default_factory=list)
    proposer_cash: int = 0
    recipient_cash: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.proposer_gives or self.recipient_gives or self.proposer_cash or self.recipient_cash)


class TradingService:
    """
    Validates and executes trades.

    A trade is checked in full before anything moves, then both legs are
    applied together, so a rejected trade leaves every player and the board
    untouched.
    """

    def validate(self, game_state: GameState, offer: TradeOffer) -> Optional[str]:
        """Return the reason the trade cannot happen, or None if it can."""
        proposer = game_state.require_active(game_state.get_player(offer.proposer))
        recipient = game_state.require_active(game_state.get_player(offer.recipient))

        if proposer is recipient:
            return "a player cannot trade with themselves"
        if offer.is_empty:
            return "the trade is empty"
        if offer.proposer_cash < 0 or offer.recipient_cash < 0:
            return "cash amounts must not be negative"
        if not proposer.can_afford(offer.proposer_cash):
            return f"{proposer.name} cannot afford ${offer.proposer_cash}"
        if not recipient.can_afford(offer.recipient_cash):
            return f"{recipient.name} cannot afford ${offer.recipient_cash}"
        if len(set(offer.proposer_gives)) != len(offer.proposer_gives) or len(set(offer.recipient_gives)) != len(
            offer.recipient_gives
        ):
            return "a property is listed twice"

        for giver, positions in ((proposer, offer.proposer_gives), (recipient, offer.recipient_gives)):
            for position in positions:
                reason = self._transfer_problem(game_state, giver, position)
                if reason:
                    return reason
        return None

    def _transfer_problem(self, game_state: GameState, giver: Player, position: int) -> Optional[str]:
        prop = game_state.board.get_property_at(position)
        if prop is None:
            return f"position {position} holds no property"
        if prop.owner != giver.name or not giver.owns(position):
            return f"{giver.name} does not own {prop.name}"
        if isinstance(prop, StreetProperty):
            group = game_state.board.get_properties_by_color_group(prop.color_group)
            if any(not p.buildings.is_empty for p in group):
                return f"{prop.name}'s colour group still has buildings"
        return None

    def trade(self, game_state: GameState, offer: TradeOffer) -> bool:
        """Execute the trade if it is valid. Returns True on success."""
        reason = self.validate(game_state, offer)
        if reason:
            logger.debug(f"Trade {offer.proposer} -> {offer.recipient} rejected: {reason}")
            return False

        proposer = game_state.get_player(offer.proposer)
        recipient = game_state.get_player(offer.recipient)

        moved_to_recipient = [self._move(game_state, proposer, recipient, pos) for pos in offer.proposer_gives]
        moved_to_proposer = [self._move(game_state, recipient, proposer, pos) for pos in offer.recipient_gives]

        if offer.proposer_cash:
            proposer.pay(offer.proposer_cash)
            recipient.receive(offer.proposer_cash)
        if offer.recipient_cash:
            recipient.pay(offer.recipient_cash)
            proposer.receive(offer.recipient_cash)

        game_state.log(
            EventType.PROPERTY_TRADED,
            proposer,
            counterparty=recipient.name,
            given=[p.name for p in moved_to_recipient],
            received=[p.name for p in moved_to_proposer],
            cash_given=offer.proposer_cash,
            cash_received=offer.recipient_cash,
        )
        logger.info(f"Trade executed between {proposer.name} and {recipient.name}")
        return True

    @staticmethod
    def _move(game_state: GameState, giver: Player, receiver: Player, position: int) -> Property:
        prop = giver.remove_property(position)
        moved = with_owner(prop, receiver.name)
        receiver.acquire_property(moved)
        game_state.board.update_property(moved)
        return moved

    def swap_properties(self, game_state: GameState, first: str, second: str, first_position: int, second_position: int) -> bool:
        """Exchange one property for another with no cash involved."""
        return self.trade(
            game_state,
            TradeOffer(first, second, proposer_gives=[first_position], recipient_gives=[second_position]),
        )

    def sell_property(self, game_state: GameState, seller: str, buyer: str, position: int, price: int) -> bool:
        """Sell one property to another player for an agreed price."""
        return self.trade(
            game_state,
            TradeOffer(seller, buyer, proposer_gives=[position], recipient_cash=price),
        )
