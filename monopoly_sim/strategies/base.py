"""Base class and decision contexts for purchase/build strategies."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Union

from monopoly_sim.properties import ColorGroup, Property, StreetProperty, group_key

if TYPE_CHECKING:
    from monopoly_sim.board import Board
    from monopoly_sim.player import Player


@dataclass(frozen=True)
class BuyDecisionContext:
    """
    Everything a strategy may look at when offered an unowned property.

    Attributes:
        property: The property the player landed on.
        player_name: Name of the deciding player.
        player_money: The deciding player's cash.
        owned_properties: Properties the deciding player already owns.
        board: The game board (read only).
        all_players: Every player in the game, bankrupt ones included.
        current_turn: The game's turn number.
    """

    property: Property
    player_name: str
    player_money: int
    owned_properties: List[Property]
    board: "Board"
    all_players: List["Player"]
    current_turn: int

    @property
    def other_players(self) -> List["Player"]:
        """Opponents still in the game."""
        return [p for p in self.all_players if p.name != self.player_name and not p.is_bankrupt]

    @property
    def money_after_purchase(self) -> int:
        return self.player_money - self.property.price

    @property
    def group(self) -> Union[ColorGroup, str]:
        return group_key(self.property)

    def count_owned_in_color_group(self, group: Union[ColorGroup, str]) -> int:
        return sum(1 for p in self.owned_properties if group_key(p) == group)

    def max_other_player_count_in_color_group(self, group: Union[ColorGroup, str]) -> int:
        return max((p.count_in_group(group) for p in self.other_players), default=0)

    def group_size(self, group: Union[ColorGroup, str]) -> int:
        """Number of board properties in the group."""
        return sum(1 for p in self.board.properties() if group_key(p) == group)


@dataclass(frozen=True)
class BuildDecisionContext:
    """
    Offered to building-capable strategies when a house or hotel can be built.

    Attributes:
        property: The street that would receive the building.
        player_name: Name of the deciding player.
        player_money: The deciding player's cash.
        cost: Price of the house or hotel on offer.
        building_hotel: True when the offer is a hotel rather than a house.
        owned_properties: Properties the deciding player already owns.
        board: The game board (read only).
        current_turn: The game's turn number.
    """

    property: StreetProperty
    player_name: str
    player_money: int
    cost: int
    building_hotel: bool
    owned_properties: List[Property]
    board: "Board"
    current_turn: int

    @property
    def money_after_build(self) -> int:
        return self.player_money - self.cost


class Strategy(ABC):
    """
    Abstract base class for purchase/build strategies.

    All strategies must implement `should_buy`. Strategies that want houses
    and hotels override `should_build`; the default never builds.
    """

    @abstractmethod
    def should_buy(self, context: BuyDecisionContext) -> bool:
        """
        Decide whether to buy the property described by `context`.

        Only called when the player can afford the price.
        """
        pass

    def should_build(self, context: BuildDecisionContext) -> bool:
        return False

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
