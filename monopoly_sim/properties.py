"""
Purchasable property variants.

A property is one of three frozen records (StreetProperty, Railroad,
Utility). They share the fields name, position, price, owner and
is_mortgaged but do not inherit from each other; state changes produce a new
record through the helpers at the bottom of this module.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from monopoly_sim.exceptions import ValidationError


class ColorGroup(Enum):
    """Street colour groups."""

    BROWN = "brown"
    LIGHT_BLUE = "light_blue"
    PINK = "pink"
    ORANGE = "orange"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    DARK_BLUE = "dark_blue"

    @property
    def size(self) -> int:
        """Number of streets needed for a monopoly."""
        return GROUP_SIZES[self]


GROUP_SIZES = {
    ColorGroup.BROWN: 2,
    ColorGroup.LIGHT_BLUE: 3,
    ColorGroup.PINK: 3,
    ColorGroup.ORANGE: 3,
    ColorGroup.RED: 3,
    ColorGroup.YELLOW: 3,
    ColorGroup.GREEN: 3,
    ColorGroup.DARK_BLUE: 2,
}

MAX_HOUSES = 4
HOTEL_LEVEL = 5


@dataclass(frozen=True)
class RentTable:
    """Street rent for each building level."""

    base: int
    one_house: int
    two_houses: int
    three_houses: int
    four_houses: int
    hotel: int

    def for_buildings(self, buildings: "Buildings") -> int:
        if buildings.has_hotel:
            return self.hotel
        return (
            self.base,
            self.one_house,
            self.two_houses,
            self.three_houses,
            self.four_houses,
        )[buildings.house_count]


@dataclass(frozen=True)
class Buildings:
    """Houses or a hotel on a street. Never both."""

    house_count: int = 0
    has_hotel: bool = False

    def __post_init__(self):
        if not 0 <= self.house_count <= MAX_HOUSES:
            raise ValidationError(f"House count must be 0-{MAX_HOUSES}, got {self.house_count}")
        if self.has_hotel and self.house_count > 0:
            raise ValidationError("A street cannot hold houses and a hotel at once")

    @property
    def level(self) -> int:
        """Building level used by the even-building rule (hotel counts as 5)."""
        return HOTEL_LEVEL if self.has_hotel else self.house_count

    @property
    def is_empty(self) -> bool:
        return self.house_count == 0 and not self.has_hotel


NO_BUILDINGS = Buildings()


@dataclass(frozen=True)
class StreetProperty:
    """A coloured street that can be improved with houses and a hotel."""

    name: str
    position: int
    price: int
    color_group: ColorGroup
    rent: RentTable
    house_cost: int
    hotel_cost: int
    owner: Optional[str] = None
    is_mortgaged: bool = False
    buildings: Buildings = NO_BUILDINGS

    def with_buildings(self, buildings: Buildings) -> "StreetProperty":
        return replace(self, buildings=buildings)


@dataclass(frozen=True)
class Railroad:
    """A railroad. Rent depends on how many railroads the owner holds."""

    name: str
    position: int
    price: int = 200
    owner: Optional[str] = None
    is_mortgaged: bool = False


@dataclass(frozen=True)
class Utility:
    """A utility. Rent is a multiple of the dice total."""

    name: str
    position: int
    price: int = 150
    owner: Optional[str] = None
    is_mortgaged: bool = False


Property = Union[StreetProperty, Railroad, Utility]

RAILROAD_BASE_RENT = 25


def with_owner(prop: Property, owner: str) -> Property:
    """Return the property owned by `owner`, keeping its buildings and mortgage."""
    return replace(prop, owner=owner)


def without_owner(prop: Property) -> Property:
    """Return the property as the bank holds it: unowned, unmortgaged, unbuilt."""
    if isinstance(prop, StreetProperty):
        return replace(prop, owner=None, is_mortgaged=False, buildings=NO_BUILDINGS)
    return replace(prop, owner=None, is_mortgaged=False)


def with_mortgage(prop: Property, mortgaged: bool) -> Property:
    return replace(prop, is_mortgaged=mortgaged)


def mortgage_value(prop: Property) -> int:
    return prop.price // 2


def buildings_of(prop: Property) -> Buildings:
    """Buildings on a street; railroads and utilities never carry any."""
    return prop.buildings if isinstance(prop, StreetProperty) else NO_BUILDINGS


def base_rent(prop: Property) -> int:
    """
    Unimproved rent used by purchase heuristics.

    Utilities have no fixed rent (it depends on the dice) so they report 0.
    """
    if isinstance(prop, StreetProperty):
        return prop.rent.base
    if isinstance(prop, Railroad):
        return RAILROAD_BASE_RENT
    return 0


def group_key(prop: Property) -> Union[ColorGroup, str]:
    """
    Grouping used when counting "same set" holdings.

    Streets group by colour; railroads and utilities each form one set.
    """
    if isinstance(prop, StreetProperty):
        return prop.color_group
    if isinstance(prop, Railroad):
        return "railroad"
    return "utility"
