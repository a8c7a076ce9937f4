"""
Mortgaging and unmortgaging properties.
"""

import logging

from monopoly_sim.events import EventType
from monopoly_sim.game import GameState
from monopoly_sim.player import Player
from monopoly_sim.properties import Property, StreetProperty, mortgage_value, with_mortgage

logger = logging.getLogger(__name__)


class MortgageService:
    """Raises cash against owned properties and pays it back with interest."""

    def _owned(self, player: Player, prop: Property, game_state: GameState):
        current = game_state.board.get_property_at(prop.position)
        if current is None or current.owner != player.name or not player.owns(current.position):
            return None
        return current

    def unmortgage_cost(self, prop: Property, game_state: GameState) -> int:
        """Mortgage value plus interest, rounded down."""
        value = mortgage_value(prop)
        return value + int(value * game_state.config.mortgage_interest_rate)

    def mortgage(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """
        Mortgage a property for half its price.

        Streets with houses or a hotel, and streets whose colour group still
        has buildings anywhere, cannot be mortgaged.
        """
        game_state.require_active(player)
        current = self._owned(player, prop, game_state)
        if current is None or current.is_mortgaged:
            return False
        if isinstance(current, StreetProperty):
            group = game_state.board.get_properties_by_color_group(current.color_group)
            if any(not p.buildings.is_empty for p in group):
                return False

        value = mortgage_value(current)
        updated = with_mortgage(current, True)
        player.receive(value)
        player.update_property(updated)
        game_state.board.update_property(updated)

        game_state.log(EventType.PROPERTY_MORTGAGED, player, property=current.name, position=current.position, amount=value)
        logger.debug(f"{player.name} mortgaged {current.name} for ${value}")
        return True

    def unmortgage(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """Lift a mortgage by paying its value plus interest."""
        game_state.require_active(player)
        current = self._owned(player, prop, game_state)
        if current is None or not current.is_mortgaged:
            return False
        cost = self.unmortgage_cost(current, game_state)
        if not player.can_afford(cost):
            return False

        updated = with_mortgage(current, False)
        player.pay(cost)
        player.update_property(updated)
        game_state.board.update_property(updated)

        game_state.log(EventType.PROPERTY_UNMORTGAGED, player, property=current.name, position=current.position, amount=cost)
        logger.debug(f"{player.name} unmortgaged {current.name} for ${cost}")
        return True
