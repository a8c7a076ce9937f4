"""
Money value type.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, order=True)
class Money:
    """
    An integer amount of currency.

    Balances may go negative while a payment is being settled; the game
    service turns a negative balance into bankruptcy, so nothing here clamps.
    """

    amount: int = 0

    def __add__(self, other: Union["Money", int]) -> "Money":
        return Money(self.amount + _amount_of(other))

    def __sub__(self, other: Union["Money", int]) -> "Money":
        return Money(self.amount - _amount_of(other))

    def __mul__(self, factor: int) -> "Money":
        return Money(self.amount * factor)

    def __int__(self) -> int:
        return self.amount

    def can_afford(self, cost: Union["Money", int]) -> bool:
        """Return True if this balance covers `cost`."""
        return self.amount >= _amount_of(cost)

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def __repr__(self) -> str:
        return f"${self.amount}"


def _amount_of(value: Union[Money, int]) -> int:
    return value.amount if isinstance(value, Money) else int(value)


INITIAL_AMOUNT = Money(1500)
GO_BONUS = Money(200)
