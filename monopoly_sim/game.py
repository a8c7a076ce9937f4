"""
Game state for a single Monopoly game.
"""

import random
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from monopoly_sim.board import Board, create_standard_board
from monopoly_sim.cards import (
    CHANCE,
    COMMUNITY_CHEST,
    Card,
    CardDeck,
    create_chance_deck,
    create_community_chest_deck,
)
from monopoly_sim.config import GameConfig
from monopoly_sim.events import EventLog, EventType, GameEvent
from monopoly_sim.exceptions import InvalidActionError, ValidationError
from monopoly_sim.player import Player
from monopoly_sim.strategies.base import Strategy


class GameState:
    """
    Represents the complete state of one Monopoly game.

    A GameState owns its players, its board and its decks. Nothing in it is
    shared with any other game.
    """

    def __init__(
        self,
        players: Sequence[Player],
        board: Board,
        config: Optional[GameConfig] = None,
        chance_deck: Optional[CardDeck] = None,
        community_chest_deck: Optional[CardDeck] = None,
    ):
        if not players:
            raise ValidationError("A game needs at least one player")
        names = [p.name for p in players]
        if len(set(names)) != len(names):
            raise ValidationError(f"Player names must be unique, got {names}")

        self.config = config or GameConfig()
        self.rng = random.Random(self.config.seed)
        self.players: List[Player] = list(players)
        self.board = board
        self.chance_deck = chance_deck if chance_deck is not None else create_chance_deck(self.rng)
        self.community_chest_deck = (
            community_chest_deck
            if community_chest_deck is not None
            else create_community_chest_deck(self.rng)
        )

        self.current_player_index = 0
        self.turn_number = 0
        self.event_log = EventLog()
        self.game_over = False
        self.winner: Optional[str] = None

        # Get Out of Jail Free cards currently held, with the deck each came from
        self.held_jail_cards: Dict[str, List[Tuple[Card, str]]] = {}

    # --- players -------------------------------------------------------------

    def get_player(self, name: str) -> Player:
        """Look up a player by name."""
        for player in self.players:
            if player.name == name:
                return player
        raise ValidationError(f"No player named '{name}' in this game")

    def require_active(self, player: Player) -> Player:
        """Return the game's player record, refusing bankrupt or foreign players and finished games."""
        known = self.get_player(player.name)
        if known is not player:
            raise ValidationError(f"Player '{player.name}' does not belong to this game")
        if player.is_bankrupt:
            raise InvalidActionError(f"Player '{player.name}' is bankrupt")
        if self.game_over:
            raise InvalidActionError("The game is already over")
        return player

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def active_players(self) -> List[Player]:
        """Players that are still in the game."""
        return [p for p in self.players if not p.is_bankrupt]

    def other_active_players(self, player: Player) -> List[Player]:
        return [p for p in self.players if p is not player and not p.is_bankrupt]

    # --- decks ---------------------------------------------------------------

    def deck(self, name: str) -> CardDeck:
        if name == CHANCE:
            return self.chance_deck
        if name == COMMUNITY_CHEST:
            return self.community_chest_deck
        raise ValidationError(f"Unknown deck '{name}'")

    def hold_jail_card(self, player: Player, card: Card, deck_name: str) -> None:
        """Record that `player` keeps a Get Out of Jail Free card drawn from `deck_name`."""
        self.held_jail_cards.setdefault(player.name, []).append((card, deck_name))

    def return_jail_card(self, player: Player) -> bool:
        """Put one of the player's held jail cards back at the bottom of its deck."""
        held = self.held_jail_cards.get(player.name)
        if not held:
            return False
        card, deck_name = held.pop(0)
        self.deck(deck_name).return_card(card)
        return True

    def return_all_jail_cards(self, player: Player) -> int:
        returned = 0
        while self.return_jail_card(player):
            returned += 1
        return returned

    # --- events --------------------------------------------------------------

    def log(self, event_type: EventType, player: Union[Player, str, None] = None, **details: Any) -> GameEvent:
        """Append an event stamped with the current turn number."""
        name = player.name if isinstance(player, Player) else player
        return self.event_log.log(event_type, self.turn_number, name, **details)

    @property
    def events(self) -> List[GameEvent]:
        return self.event_log.events

    def __repr__(self) -> str:
        return (
            f"GameState(turn={self.turn_number}, players={[p.name for p in self.players]}, "
            f"game_over={self.game_over}, winner={self.winner})"
        )


def create_game(
    players: Sequence[Tuple[str, Strategy]],
    board: Optional[Board] = None,
    config: Optional[GameConfig] = None,
) -> GameState:
    """
    Create a new game from (name, strategy) pairs.

    The board is copied so a shared template is never mutated.
    """
    config = config or GameConfig()
    board = board.copy() if board is not None else create_standard_board()
    roster = [Player(name, strategy, config.starting_cash) for name, strategy in players]
    return GameState(roster, board, config)
