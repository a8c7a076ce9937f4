"""Batch simulation of independent games."""

from monopoly_sim.simulation.runner import (
    MultiGameResult,
    PlayerSpec,
    SingleGameResult,
    format_summary,
    run_batch,
    run_single_game,
)

__all__ = [
    "MultiGameResult",
    "PlayerSpec",
    "SingleGameResult",
    "format_summary",
    "run_batch",
    "run_single_game",
]
