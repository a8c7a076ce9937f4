"""
Game events and the append-only event log.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional

from monopoly_sim.exceptions import InvalidActionError


class EventType(Enum):
    """Types of game events."""

    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"
    TURN_STARTED = "turn_started"
    TURN_ENDED = "turn_ended"

    DICE_ROLLED = "dice_rolled"
    DOUBLES_ROLLED = "doubles_rolled"
    THREE_CONSECUTIVE_DOUBLES = "three_consecutive_doubles"
    PLAYER_MOVED = "player_moved"
    PASSED_GO = "passed_go"

    PROPERTY_PURCHASED = "property_purchased"
    RENT_PAID = "rent_paid"
    TAX_PAID = "tax_paid"
    CARD_DRAWN = "card_drawn"

    PLAYER_SENT_TO_JAIL = "player_sent_to_jail"
    PLAYER_EXITED_JAIL = "player_exited_jail"

    HOUSE_BUILT = "house_built"
    HOTEL_BUILT = "hotel_built"
    HOUSE_SOLD = "house_sold"
    HOTEL_SOLD = "hotel_sold"

    PROPERTY_MORTGAGED = "property_mortgaged"
    PROPERTY_UNMORTGAGED = "property_unmortgaged"
    PROPERTY_TRADED = "property_traded"

    PLAYER_BANKRUPTED = "player_bankrupted"


@dataclass(frozen=True)
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    turn_number: int
    player: Optional[str] = None
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def to_dict(self) -> Dict[str, Any]:
        """Flatten the event into a JSON-ready mapping."""
        return {
            "event_type": self.event_type.value,
            "turn_number": self.turn_number,
            "player": self.player,
            **self.details,
        }

    def __repr__(self) -> str:
        player_str = self.player if self.player is not None else "System"
        return f"[T{self.turn_number}] [{player_str}] {self.event_type.value}: {dict(self.details)}"


class EventLog:
    """
    Append-only record of everything that happened in one game.

    Once the game ends the log is frozen; further appends raise
    InvalidActionError.
    """

    def __init__(self):
        self._events: List[GameEvent] = []
        self._frozen = False

    def log(
        self,
        event_type: EventType,
        turn_number: int,
        player: Optional[str] = None,
        **details: Any,
    ) -> GameEvent:
        """Append a game event and return it."""
        if self._frozen:
            raise InvalidActionError(f"Cannot log {event_type.value}: the game is over")
        event = GameEvent(event_type, turn_number, player, details)
        self._events.append(event)
        return event

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def events(self) -> List[GameEvent]:
        """Get a copy of all logged events."""
        return self._events.copy()

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        """Get all events of one type, in order."""
        return [e for e in self._events if e.event_type == event_type]

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self._events[-count:]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[GameEvent]:
        return iter(self._events.copy())
