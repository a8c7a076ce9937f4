"""
Houses and hotels.
"""

import logging
from typing import Optional

from monopoly_sim.events import EventType
from monopoly_sim.game import GameState
from monopoly_sim.player import Player
from monopoly_sim.properties import MAX_HOUSES, Buildings, Property, StreetProperty
from monopoly_sim.services.monopoly import MonopolyChecker

logger = logging.getLogger(__name__)


class BuildingService:
    """
    Builds and sells houses and hotels.

    Every operation returns True on success and False when a rule forbids it;
    nothing changes on failure. The even-building rule compares building
    levels across the colour group, with a hotel counting as level 5.
    """

    def __init__(self, monopoly_checker: Optional[MonopolyChecker] = None):
        self.monopoly_checker = monopoly_checker or MonopolyChecker()

    # --- checks --------------------------------------------------------------

    def _owned_street(self, player: Player, prop: Property, game_state: GameState):
        """Current board record of `prop` if it is a street owned by `player`."""
        current = game_state.board.get_property_at(prop.position)
        if not isinstance(current, StreetProperty):
            return None
        if current.owner != player.name or not player.owns(current.position):
            return None
        return current

    def _can_develop(self, player: Player, street: StreetProperty, game_state: GameState) -> bool:
        if not self.monopoly_checker.has_monopoly(player, street.color_group):
            return False
        group = game_state.board.get_properties_by_color_group(street.color_group)
        return not any(p.is_mortgaged for p in group)

    def _builds_evenly(self, street: StreetProperty, new_level: int, game_state: GameState) -> bool:
        others = [
            p
            for p in game_state.board.get_properties_by_color_group(street.color_group)
            if p.position != street.position
        ]
        min_level = min((p.buildings.level for p in others), default=0)
        return new_level <= min_level + 1

    def can_build_house(self, player: Player, prop: Property, game_state: GameState) -> bool:
        street = self._owned_street(player, prop, game_state)
        if street is None or not self._can_develop(player, street, game_state):
            return False
        if street.buildings.has_hotel or street.buildings.house_count >= MAX_HOUSES:
            return False
        if not player.can_afford(street.house_cost):
            return False
        return self._builds_evenly(street, street.buildings.house_count + 1, game_state)

    def can_build_hotel(self, player: Player, prop: Property, game_state: GameState) -> bool:
        street = self._owned_street(player, prop, game_state)
        if street is None or not self._can_develop(player, street, game_state):
            return False
        if street.buildings.has_hotel or street.buildings.house_count != MAX_HOUSES:
            return False
        if not player.can_afford(street.hotel_cost):
            return False
        return self._builds_evenly(street, MAX_HOUSES + 1, game_state)

    # --- operations ----------------------------------------------------------

    def build_house(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """Add one house to a street in a colour group the player monopolises."""
        game_state.require_active(player)
        if not self.can_build_house(player, prop, game_state):
            return False

        street = game_state.board.get_property_at(prop.position)
        updated = street.with_buildings(Buildings(house_count=street.buildings.house_count + 1))
        player.pay(street.house_cost)
        self._store(player, updated, game_state)

        game_state.log(
            EventType.HOUSE_BUILT,
            player,
            property=updated.name,
            position=updated.position,
            house_count=updated.buildings.house_count,
            cost=street.house_cost,
        )
        logger.debug(f"{player.name} built a house on {updated.name} ({updated.buildings.house_count})")
        return True

    def build_hotel(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """Replace four houses with a hotel."""
        game_state.require_active(player)
        if not self.can_build_hotel(player, prop, game_state):
            return False

        street = game_state.board.get_property_at(prop.position)
        updated = street.with_buildings(Buildings(house_count=0, has_hotel=True))
        player.pay(street.hotel_cost)
        self._store(player, updated, game_state)

        game_state.log(
            EventType.HOTEL_BUILT,
            player,
            property=updated.name,
            position=updated.position,
            cost=street.hotel_cost,
        )
        logger.debug(f"{player.name} built a hotel on {updated.name}")
        return True

    def sell_house(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """Sell one house back to the bank for half its cost."""
        game_state.require_active(player)
        street = self._owned_street(player, prop, game_state)
        if street is None or street.buildings.has_hotel or street.buildings.house_count == 0:
            return False

        refund = street.house_cost // 2
        updated = street.with_buildings(Buildings(house_count=street.buildings.house_count - 1))
        player.receive(refund)
        self._store(player, updated, game_state)

        game_state.log(
            EventType.HOUSE_SOLD,
            player,
            property=updated.name,
            position=updated.position,
            house_count=updated.buildings.house_count,
            refund=refund,
        )
        return True

    def sell_hotel(self, player: Player, prop: Property, game_state: GameState) -> bool:
        """Sell a hotel for half its cost; the street goes back to four houses."""
        game_state.require_active(player)
        street = self._owned_street(player, prop, game_state)
        if street is None or not street.buildings.has_hotel:
            return False

        refund = street.hotel_cost // 2
        updated = street.with_buildings(Buildings(house_count=MAX_HOUSES))
        player.receive(refund)
        self._store(player, updated, game_state)

        game_state.log(
            EventType.HOTEL_SOLD,
            player,
            property=updated.name,
            position=updated.position,
            refund=refund,
        )
        return True

    @staticmethod
    def _store(player: Player, updated: StreetProperty, game_state: GameState) -> None:
        player.update_property(updated)
        game_state.board.update_property(updated)
