"""Colour-group monopoly detection."""

from typing import List

from monopoly_sim.player import Player
from monopoly_sim.properties import ColorGroup


class MonopolyChecker:
    """Answers "does this player hold the whole colour group?"."""

    def has_monopoly(self, player: Player, color_group: ColorGroup) -> bool:
        return player.count_in_group(color_group) == color_group.size

    def monopolies_of(self, player: Player) -> List[ColorGroup]:
        """Colour groups the player fully owns, in board order."""
        return [group for group in ColorGroup if self.has_monopoly(player, group)]
