"""
Board layout, positions and property lookup.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Optional

from monopoly_sim.exceptions import ValidationError
from monopoly_sim.properties import (
    ColorGroup,
    Property,
    Railroad,
    RentTable,
    StreetProperty,
    Utility,
)
from monopoly_sim.spaces import (
    Space,
    chance_space,
    community_chest_space,
    free_parking_space,
    go_space,
    go_to_jail_space,
    jail_space,
    property_space,
    railroad_space,
    tax_space,
    utility_space,
)

BOARD_SIZE = 40


class AdvanceResult(NamedTuple):
    new_position: "BoardPosition"
    passed_go: bool


@dataclass(frozen=True)
class BoardPosition:
    """A square index in [0, 39]."""

    value: int = 0

    def __post_init__(self):
        if not 0 <= self.value < BOARD_SIZE:
            raise ValidationError(f"Board position must be 0-{BOARD_SIZE - 1}, got {self.value}")

    def advance(self, steps: int) -> AdvanceResult:
        """
        Move forward `steps` squares, wrapping at GO.

        passed_go is True when the move crosses or lands on position 0.
        """
        total = self.value + steps
        return AdvanceResult(BoardPosition(total % BOARD_SIZE), total >= BOARD_SIZE)

    def __int__(self) -> int:
        return self.value


class Board:
    """
    The Monopoly board: 40 fixed spaces plus the current state of every
    purchasable property, keyed by position.
    """

    def __init__(self, spaces: Iterable[Space], properties: Iterable[Property]):
        self.spaces: List[Space] = list(spaces)
        if len(self.spaces) != BOARD_SIZE:
            raise ValidationError(f"A board needs exactly {BOARD_SIZE} spaces, got {len(self.spaces)}")
        for index, space in enumerate(self.spaces):
            if space.position != index:
                raise ValidationError(
                    f"Space '{space.name}' is listed at index {index} but claims position {space.position}"
                )

        self._properties: Dict[int, Property] = {}
        for prop in properties:
            if prop.position in self._properties:
                raise ValidationError(f"Two properties defined at position {prop.position}")
            if not self.get_space(prop.position).is_purchasable:
                raise ValidationError(f"Position {prop.position} is not a purchasable space")
            self._properties[prop.position] = prop

        missing = [s.position for s in self.spaces if s.is_purchasable and s.position not in self._properties]
        if missing:
            raise ValidationError(f"No property defined for purchasable positions {missing}")

    def get_space(self, position: int) -> Space:
        """Get the space at the given position."""
        if not 0 <= position < BOARD_SIZE:
            raise ValidationError(f"Board position must be 0-{BOARD_SIZE - 1}, got {position}")
        return self.spaces[position]

    def get_property_at(self, position: int) -> Optional[Property]:
        """Get the current state of the property at `position`, or None."""
        self.get_space(position)
        return self._properties.get(position)

    def update_property(self, prop: Property) -> None:
        """Replace the stored property at `prop.position`."""
        if prop.position not in self._properties:
            raise ValidationError(f"No property at position {prop.position}")
        self._properties[prop.position] = prop

    def get_properties_by_color_group(self, color_group: ColorGroup) -> List[StreetProperty]:
        """Get every street in a colour group, in board order."""
        return [
            p
            for p in self.properties()
            if isinstance(p, StreetProperty) and p.color_group == color_group
        ]

    def properties(self) -> List[Property]:
        return [self._properties[pos] for pos in sorted(self._properties)]

    def railroads(self) -> List[Railroad]:
        return [p for p in self.properties() if isinstance(p, Railroad)]

    def utilities(self) -> List[Utility]:
        return [p for p in self.properties() if isinstance(p, Utility)]

    def properties_owned_by(self, owner: str) -> List[Property]:
        return [p for p in self.properties() if p.owner == owner]

    def copy(self) -> "Board":
        """Independent board with the same layout and current property state."""
        return Board(self.spaces, self._properties.values())

    def __repr__(self) -> str:
        return f"Board(spaces={len(self.spaces)}, properties={len(self._properties)})"


def _street(name, position, price, group, rents, house_cost) -> StreetProperty:
    return StreetProperty(
        name=name,
        position=position,
        price=price,
        color_group=group,
        rent=RentTable(*rents),
        house_cost=house_cost,
        hotel_cost=house_cost,
    )


def create_standard_board() -> Board:
    """Create the standard 40-space US Monopoly board with unowned properties."""
    spaces = [
        # Bottom row (0-10)
        go_space(0),
        property_space("Mediterranean Avenue", 1),
        community_chest_space(2),
        property_space("Baltic Avenue", 3),
        tax_space("Income Tax", 4, 200),
        railroad_space("Reading Railroad", 5),
        property_space("Oriental Avenue", 6),
        chance_space(7),
        property_space("Vermont Avenue", 8),
        property_space("Connecticut Avenue", 9),
        jail_space(10),
        # Left side (11-20)
        property_space("St. Charles Place", 11),
        utility_space("Electric Company", 12),
        property_space("States Avenue", 13),
        property_space("Virginia Avenue", 14),
        railroad_space("Pennsylvania Railroad", 15),
        property_space("St. James Place", 16),
        community_chest_space(17),
        property_space("Tennessee Avenue", 18),
        property_space("New York Avenue", 19),
        free_parking_space(20),
        # Top row (21-30)
        property_space("Kentucky Avenue", 21),
        chance_space(22),
        property_space("Indiana Avenue", 23),
        property_space("Illinois Avenue", 24),
        railroad_space("B. & O. Railroad", 25),
        property_space("Atlantic Avenue", 26),
        property_space("Ventnor Avenue", 27),
        utility_space("Water Works", 28),
        property_space("Marvin Gardens", 29),
        go_to_jail_space(30),
        # Right side (31-39)
        property_space("Pacific Avenue", 31),
        property_space("North Carolina Avenue", 32),
        community_chest_space(33),
        property_space("Pennsylvania Avenue", 34),
        railroad_space("Short Line", 35),
        chance_space(36),
        property_space("Park Place", 37),
        tax_space("Luxury Tax", 38, 100),
        property_space("Boardwalk", 39),
    ]

    brown, light_blue, pink, orange = (
        ColorGroup.BROWN,
        ColorGroup.LIGHT_BLUE,
        ColorGroup.PINK,
        ColorGroup.ORANGE,
    )
    red, yellow, green, dark_blue = (
        ColorGroup.RED,
        ColorGroup.YELLOW,
        ColorGroup.GREEN,
        ColorGroup.DARK_BLUE,
    )
    properties: List[Property] = [
        _street("Mediterranean Avenue", 1, 60, brown, (2, 10, 30, 90, 160, 250), 50),
        _street("Baltic Avenue", 3, 60, brown, (4, 20, 60, 180, 320, 450), 50),
        Railroad("Reading Railroad", 5),
        _street("Oriental Avenue", 6, 100, light_blue, (6, 30, 90, 270, 400, 550), 50),
        _street("Vermont Avenue", 8, 100, light_blue, (6, 30, 90, 270, 400, 550), 50),
        _street("Connecticut Avenue", 9, 120, light_blue, (8, 40, 100, 300, 450, 600), 50),
        _street("St. Charles Place", 11, 140, pink, (10, 50, 150, 450, 625, 750), 100),
        Utility("Electric Company", 12),
        _street("States Avenue", 13, 140, pink, (10, 50, 150, 450, 625, 750), 100),
        _street("Virginia Avenue", 14, 160, pink, (12, 60, 180, 500, 700, 900), 100),
        Railroad("Pennsylvania Railroad", 15),
        _street("St. James Place", 16, 180, orange, (14, 70, 200, 550, 750, 950), 100),
        _street("Tennessee Avenue", 18, 180, orange, (14, 70, 200, 550, 750, 950), 100),
        _street("New York Avenue", 19, 200, orange, (16, 80, 220, 600, 800, 1000), 100),
        _street("Kentucky Avenue", 21, 220, red, (18, 90, 250, 700, 875, 1050), 150),
        _street("Indiana Avenue", 23, 220, red, (18, 90, 250, 700, 875, 1050), 150),
        _street("Illinois Avenue", 24, 240, red, (20, 100, 300, 750, 925, 1100), 150),
        Railroad("B. & O. Railroad", 25),
        _street("Atlantic Avenue", 26, 260, yellow, (22, 110, 330, 800, 975, 1150), 150),
        _street("Ventnor Avenue", 27, 260, yellow, (22, 110, 330, 800, 975, 1150), 150),
        Utility("Water Works", 28),
        _street("Marvin Gardens", 29, 280, yellow, (24, 120, 360, 850, 1025, 1200), 150),
        _street("Pacific Avenue", 31, 300, green, (26, 130, 390, 900, 1100, 1275), 200),
        _street("North Carolina Avenue", 32, 300, green, (26, 130, 390, 900, 1100, 1275), 200),
        _street("Pennsylvania Avenue", 34, 320, green, (28, 150, 450, 1000, 1200, 1400), 200),
        Railroad("Short Line", 35),
        _street("Park Place", 37, 350, dark_blue, (35, 175, 500, 1100, 1300, 1500), 200),
        _street("Boardwalk", 39, 400, dark_blue, (50, 200, 600, 1400, 1700, 2000), 200),
    ]
    return Board(spaces, properties)
