"""
Board space definitions and types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SpaceType(Enum):
    """Types of spaces on the board."""

    GO = "go"
    PROPERTY = "property"
    RAILROAD = "railroad"
    UTILITY = "utility"
    TAX = "tax"
    CHANCE = "chance"
    COMMUNITY_CHEST = "community_chest"
    JAIL = "jail"
    GO_TO_JAIL = "go_to_jail"
    FREE_PARKING = "free_parking"


PURCHASABLE_TYPES = frozenset({SpaceType.PROPERTY, SpaceType.RAILROAD, SpaceType.UTILITY})


@dataclass(frozen=True)
class Space:
    """
    A single square of the board.

    Spaces never change once the board is built. The mutable ownership and
    building state of purchasable squares lives in the board's property map.
    """

    name: str
    position: int
    space_type: SpaceType
    amount: Optional[int] = None  # TAX only

    @property
    def is_purchasable(self) -> bool:
        return self.space_type in PURCHASABLE_TYPES

    def __repr__(self) -> str:
        return f"Space(name='{self.name}', position={self.position}, type={self.space_type.value})"


def go_space(position: int = 0) -> Space:
    return Space("GO", position, SpaceType.GO)


def property_space(name: str, position: int) -> Space:
    return Space(name, position, SpaceType.PROPERTY)


def railroad_space(name: str, position: int) -> Space:
    return Space(name, position, SpaceType.RAILROAD)


def utility_space(name: str, position: int) -> Space:
    return Space(name, position, SpaceType.UTILITY)


def tax_space(name: str, position: int, amount: int) -> Space:
    return Space(name, position, SpaceType.TAX, amount)


def chance_space(position: int) -> Space:
    return Space("Chance", position, SpaceType.CHANCE)


def community_chest_space(position: int) -> Space:
    return Space("Community Chest", position, SpaceType.COMMUNITY_CHEST)


def jail_space(position: int = 10) -> Space:
    return Space("Jail / Just Visiting", position, SpaceType.JAIL)


def go_to_jail_space(position: int = 30) -> Space:
    return Space("Go To Jail", position, SpaceType.GO_TO_JAIL)


def free_parking_space(position: int = 20) -> Space:
    return Space("Free Parking", position, SpaceType.FREE_PARKING)
