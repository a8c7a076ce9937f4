"""
Game configuration settings.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Rule knobs for a single Monopoly game."""

    starting_cash: int = 1500
    go_salary: int = 200
    jail_fine: int = 50
    jail_position: int = 10
    max_jail_turns: int = 3
    mortgage_interest_rate: float = 0.10

    # Unimproved streets in a completed colour group charge double base rent
    double_rent_on_monopoly: bool = True

    max_turns: Optional[int] = None
    seed: Optional[int] = None
