"""
Player state and management.
"""

from typing import TYPE_CHECKING, Dict, List, Optional, Union

from monopoly_sim.board import AdvanceResult, BoardPosition
from monopoly_sim.money import GO_BONUS, INITIAL_AMOUNT, Money
from monopoly_sim.properties import ColorGroup, Property, group_key

if TYPE_CHECKING:
    from monopoly_sim.strategies.base import Strategy

JAIL_POSITION = 10


class Player:
    """
    Mutable state of one player in one game.

    Players are identified by name. Their state is only changed by the rule
    services and the game service; strategies receive read-only views through
    decision contexts.
    """

    def __init__(
        self,
        name: str,
        strategy: "Strategy",
        money: Union[Money, int] = INITIAL_AMOUNT,
    ):
        self.name = name
        self.strategy = strategy
        self.money = money if isinstance(money, Money) else Money(money)
        self.position = BoardPosition(0)
        self.is_bankrupt = False
        self._properties: Dict[int, Property] = {}
        self.in_jail = False
        self.jail_turns = 0
        self.get_out_of_jail_free_cards = 0
        self.consecutive_doubles = 0

    # --- money ---------------------------------------------------------------

    def receive(self, amount: Union[Money, int]) -> None:
        self.money = self.money + amount

    def pay(self, amount: Union[Money, int]) -> None:
        """Debit `amount`. The balance may go negative."""
        self.money = self.money - amount

    def can_afford(self, amount: Union[Money, int]) -> bool:
        return self.money.can_afford(amount)

    # --- movement ------------------------------------------------------------

    def move_to(self, position: Union[BoardPosition, int]) -> None:
        self.position = position if isinstance(position, BoardPosition) else BoardPosition(position)

    def advance(self, steps: int, go_bonus: Union[Money, int] = GO_BONUS) -> AdvanceResult:
        """Move forward and collect the GO bonus when position 0 is crossed or reached."""
        result = self.position.advance(steps)
        self.position = result.new_position
        if result.passed_go:
            self.receive(go_bonus)
        return result

    # --- properties ----------------------------------------------------------

    @property
    def properties(self) -> List[Property]:
        """Owned properties in board order."""
        return [self._properties[pos] for pos in sorted(self._properties)]

    def owns(self, position: int) -> bool:
        return position in self._properties

    def get_property(self, position: int) -> Optional[Property]:
        return self._properties.get(position)

    def acquire_property(self, prop: Property) -> None:
        self._properties[prop.position] = prop

    def update_property(self, prop: Property) -> None:
        """Refresh the player's copy of a property it already owns."""
        if prop.position in self._properties:
            self._properties[prop.position] = prop

    def remove_property(self, position: int) -> Optional[Property]:
        return self._properties.pop(position, None)

    def count_in_group(self, key: Union[ColorGroup, str]) -> int:
        return sum(1 for p in self._properties.values() if group_key(p) == key)

    # --- jail ----------------------------------------------------------------

    def send_to_jail(self, jail_position: int = JAIL_POSITION) -> None:
        self.position = BoardPosition(jail_position)
        self.in_jail = True
        self.jail_turns = 0
        self.consecutive_doubles = 0

    def release_from_jail(self) -> None:
        self.in_jail = False
        self.jail_turns = 0

    def increment_jail_turns(self) -> int:
        self.jail_turns += 1
        return self.jail_turns

    def add_jail_card(self) -> None:
        self.get_out_of_jail_free_cards += 1

    def use_jail_card(self) -> bool:
        if self.get_out_of_jail_free_cards < 1:
            return False
        self.get_out_of_jail_free_cards -= 1
        return True

    # --- lifecycle -----------------------------------------------------------

    def go_bankrupt(self) -> List[Property]:
        """Mark bankrupt and drop every holding. Returns the released properties."""
        released = self.properties
        self._properties.clear()
        self.is_bankrupt = True
        self.in_jail = False
        self.jail_turns = 0
        self.get_out_of_jail_free_cards = 0
        self.consecutive_doubles = 0
        return released

    def total_assets(self) -> Money:
        """Cash plus the purchase price of every owned property."""
        return self.money + sum(p.price for p in self._properties.values())

    def __repr__(self) -> str:
        return (
            f"Player(name='{self.name}', money={self.money!r}, "
            f"position={self.position.value}, bankrupt={self.is_bankrupt})"
        )
