"""
Monopoly Simulator

A deterministic Monopoly rules engine that plays full games between
automated strategies and records every state change in an event log.
"""

from .board import Board, BoardPosition, create_standard_board
from .config import GameConfig
from .dice import Dice, DiceRoll
from .events import EventLog, EventType, GameEvent
from .exceptions import ConfigError, InvalidActionError, MonopolyError, ValidationError
from .game import GameState, create_game
from .money import Money
from .player import Player
from .services import GameService

__all__ = [
    "Board",
    "BoardPosition",
    "create_standard_board",
    "GameConfig",
    "Dice",
    "DiceRoll",
    "EventLog",
    "EventType",
    "GameEvent",
    "ConfigError",
    "InvalidActionError",
    "MonopolyError",
    "ValidationError",
    "GameState",
    "create_game",
    "Money",
    "Player",
    "GameService",
]
