"""
Jail state machine: NotInJail <-> InJail(turns 0-2).
"""

import logging

from monopoly_sim.events import EventType
from monopoly_sim.game import GameState
from monopoly_sim.player import Player

logger = logging.getLogger(__name__)

PAID_FINE = "paid_fine"
ROLLED_DOUBLES = "rolled_doubles"
FORCED_AFTER_3_TURNS = "forced_after_3_turns"
USED_CARD = "used_card"


class JailService:
    """Sends players to jail and resolves every way out of it."""

    def send_to_jail(self, player: Player, game_state: GameState) -> None:
        """Move the player straight to jail. No GO bonus is paid."""
        game_state.require_active(player)
        player.send_to_jail(game_state.config.jail_position)
        game_state.log(EventType.PLAYER_SENT_TO_JAIL, player, position=game_state.config.jail_position)
        logger.debug(f"{player.name} sent to jail")

    def pay_fine_to_exit(self, player: Player, game_state: GameState) -> bool:
        """Pay the fine and leave jail. Fails without enough cash."""
        game_state.require_active(player)
        fine = game_state.config.jail_fine
        if not player.in_jail or not player.can_afford(fine):
            return False
        player.pay(fine)
        self._release(player, game_state, PAID_FINE, fine=fine)
        return True

    def attempt_exit_with_doubles(self, player: Player, die1: int, die2: int, game_state: GameState) -> bool:
        """
        Try to roll out of jail.

        Doubles release the player. Otherwise the jail-turn counter goes up;
        on the last allowed turn the fine is charged automatically (even if it
        leaves the player in debt) and the player is released.

        Returns True if the player left jail.
        """
        game_state.require_active(player)
        if not player.in_jail:
            return False

        if die1 == die2:
            self._release(player, game_state, ROLLED_DOUBLES)
            return True

        turns = player.increment_jail_turns()
        if turns >= game_state.config.max_jail_turns:
            fine = game_state.config.jail_fine
            player.pay(fine)
            self._release(player, game_state, FORCED_AFTER_3_TURNS, fine=fine)
            return True

        logger.debug(f"{player.name} stays in jail (turn {turns})")
        return False

    def use_get_out_of_jail_free_card(self, player: Player, game_state: GameState) -> bool:
        """Spend a Get Out of Jail Free card; it goes back under its deck."""
        game_state.require_active(player)
        if not player.in_jail or not player.use_jail_card():
            return False
        game_state.return_jail_card(player)
        self._release(player, game_state, USED_CARD)
        return True

    @staticmethod
    def _release(player: Player, game_state: GameState, method: str, **details) -> None:
        player.release_from_jail()
        game_state.log(EventType.PLAYER_EXITED_JAIL, player, method=method, **details)
        logger.debug(f"{player.name} left jail ({method})")
