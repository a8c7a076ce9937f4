"""
Chance and Community Chest card system.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from monopoly_sim.exceptions import ValidationError

CHANCE = "chance"
COMMUNITY_CHEST = "community_chest"


class CardType(Enum):
    """Types of card effects."""

    GET_OUT_OF_JAIL_FREE = "get_out_of_jail_free"
    ADVANCE_TO_GO = "advance_to_go"
    GO_TO_JAIL = "go_to_jail"
    MOVE_TO_POSITION = "move_to_position"
    COLLECT_MONEY = "collect_money"
    PAY_MONEY = "pay_money"
    COLLECT_FROM_EACH_PLAYER = "collect_from_each_player"
    PAY_EACH_PLAYER = "pay_each_player"
    PAY_REPAIRS = "pay_repairs"


@dataclass(frozen=True)
class Card:
    """Represents a Chance or Community Chest card."""

    card_type: CardType
    description: str = ""
    position: Optional[int] = None  # MOVE_TO_POSITION
    amount: int = 0  # money cards
    per_house: int = 0  # PAY_REPAIRS
    per_hotel: int = 0  # PAY_REPAIRS

    def __repr__(self) -> str:
        return f"Card('{self.description or self.card_type.value}')"


def get_out_of_jail_free(description: str = "Get Out of Jail Free") -> Card:
    return Card(CardType.GET_OUT_OF_JAIL_FREE, description)


def advance_to_go(description: str = "Advance to Go (Collect $200)") -> Card:
    return Card(CardType.ADVANCE_TO_GO, description)


def go_to_jail(description: str = "Go to Jail") -> Card:
    return Card(CardType.GO_TO_JAIL, description)


def move_to_position(position: int, description: str = "") -> Card:
    return Card(CardType.MOVE_TO_POSITION, description, position=position)


def collect_money(amount: int, description: str = "") -> Card:
    return Card(CardType.COLLECT_MONEY, description, amount=amount)


def pay_money(amount: int, description: str = "") -> Card:
    return Card(CardType.PAY_MONEY, description, amount=amount)


def collect_from_each_player(amount: int, description: str = "") -> Card:
    return Card(CardType.COLLECT_FROM_EACH_PLAYER, description, amount=amount)


def pay_each_player(amount: int, description: str = "") -> Card:
    return Card(CardType.PAY_EACH_PLAYER, description, amount=amount)


def pay_repairs(per_house: int, per_hotel: int, description: str = "") -> Card:
    return Card(CardType.PAY_REPAIRS, description, per_house=per_house, per_hotel=per_hotel)


class CardDeck:
    """
    An ordered deck of cards.

    Drawing takes the top card and puts it back at the bottom, so the deck
    cycles without reshuffling. A Get Out of Jail Free card is the exception:
    it stays with the player who drew it until `return_card` puts it back.
    """

    def __init__(self, cards: Iterable[Card], name: str = ""):
        self.cards: List[Card] = list(cards)
        self.name = name

    def shuffle(self, rng: random.Random) -> None:
        """Shuffle the deck in place."""
        rng.shuffle(self.cards)

    def draw(self) -> Card:
        """Draw the top card."""
        if not self.cards:
            raise ValidationError(f"Cannot draw from empty deck '{self.name}'")
        card = self.cards.pop(0)
        if card.card_type != CardType.GET_OUT_OF_JAIL_FREE:
            self.cards.append(card)
        return card

    def return_card(self, card: Card) -> None:
        """Put a held card back at the bottom of the deck."""
        self.cards.append(card)

    def peek(self) -> Optional[Card]:
        return self.cards[0] if self.cards else None

    @property
    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"CardDeck(name='{self.name}', size={len(self.cards)})"


def create_chance_deck(rng: Optional[random.Random] = None) -> CardDeck:
    """Create a standard Chance deck, shuffled when `rng` is given."""
    cards = [
        advance_to_go(),
        move_to_position(24, "Advance to Illinois Ave."),
        move_to_position(11, "Advance to St. Charles Place"),
        collect_money(50, "Bank pays you dividend of $50"),
        get_out_of_jail_free(),
        go_to_jail(),
        pay_repairs(25, 100, "Make general repairs on all your property: Pay $25 per house, $100 per hotel"),
        pay_money(15, "Pay poor tax of $15"),
        move_to_position(5, "Take a trip to Reading Railroad"),
        move_to_position(39, "Take a walk on the Boardwalk"),
        pay_each_player(50, "You have been elected Chairman of the Board. Pay each player $50"),
        collect_money(150, "Your building loan matures. Collect $150"),
    ]
    deck = CardDeck(cards, CHANCE)
    if rng is not None:
        deck.shuffle(rng)
    return deck


def create_community_chest_deck(rng: Optional[random.Random] = None) -> CardDeck:
    """Create a standard Community Chest deck, shuffled when `rng` is given."""
    cards = [
        advance_to_go(),
        collect_money(200, "Bank error in your favor. Collect $200"),
        pay_money(50, "Doctor's fees. Pay $50"),
        collect_money(50, "From sale of stock you get $50"),
        get_out_of_jail_free(),
        go_to_jail(),
        collect_from_each_player(50, "Grand Opera Night. Collect $50 from every player"),
        collect_money(100, "Holiday Fund matures. Receive $100"),
        collect_money(20, "Income tax refund. Collect $20"),
        collect_from_each_player(10, "It is your birthday. Collect $10 from every player"),
        collect_money(100, "Life insurance matures. Collect $100"),
        pay_money(100, "Hospital fees. Pay $100"),
        pay_money(150, "School fees. Pay $150"),
        collect_money(25, "Receive $25 consultancy fee"),
        pay_repairs(40, 115, "You are assessed for street repairs: Pay $40 per house, $115 per hotel"),
        collect_money(10, "You have won second prize in a beauty contest. Collect $10"),
        collect_money(100, "You inherit $100"),
    ]
    deck = CardDeck(cards, COMMUNITY_CHEST)
    if rng is not None:
        deck.shuffle(rng)
    return deck
