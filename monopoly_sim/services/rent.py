"""Rent calculation for streets, railroads and utilities."""

from monopoly_sim.board import Board
from monopoly_sim.properties import (
    RAILROAD_BASE_RENT,
    Property,
    Railroad,
    StreetProperty,
    Utility,
)


class RentCalculator:
    """
    Computes the rent owed on landing.

    Args:
        double_rent_on_monopoly: Unimproved streets in a fully owned colour
            group charge twice their base rent.
    """

    def __init__(self, double_rent_on_monopoly: bool = True):
        self.double_rent_on_monopoly = double_rent_on_monopoly

    def calculate_rent(self, prop: Property, board: Board, dice_total: int = 0) -> int:
        """
        Rent for landing on `prop`.

        Unowned and mortgaged properties charge nothing.
        """
        if prop.owner is None or prop.is_mortgaged:
            return 0

        if isinstance(prop, StreetProperty):
            return self._street_rent(prop, board)
        if isinstance(prop, Railroad):
            held = sum(1 for r in board.railroads() if r.owner == prop.owner)
            return RAILROAD_BASE_RENT * (2 ** (held - 1))
        if isinstance(prop, Utility):
            held = sum(1 for u in board.utilities() if u.owner == prop.owner)
            multiplier = 4 if held == 1 else 10
            return dice_total * multiplier
        raise TypeError(f"Unknown property type: {type(prop).__name__}")

    def _street_rent(self, prop: StreetProperty, board: Board) -> int:
        if not prop.buildings.is_empty:
            return prop.rent.for_buildings(prop.buildings)

        group = board.get_properties_by_color_group(prop.color_group)
        owns_group = all(p.owner == prop.owner for p in group)
        if self.double_rent_on_monopoly and owns_group:
            return prop.rent.base * 2
        return prop.rent.base
