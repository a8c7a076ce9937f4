"""
Batch runner: plays many independent games, optionally in parallel.

Each game gets its own board copy, dice, strategy instances and deck
shuffle, all derived from a per-game seed. Games share nothing mutable, so
they can run on a thread pool and be collected as they complete.
"""

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence

from monopoly_sim.board import Board, create_standard_board
from monopoly_sim.config import GameConfig
from monopoly_sim.dice import Dice
from monopoly_sim.exceptions import MonopolyError, ValidationError
from monopoly_sim.game import GameState, create_game
from monopoly_sim.services.game_service import GameService
from monopoly_sim.strategies.registry import StrategyRegistry, create_default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerSpec:
    """A seat at the table: a player name and the strategy it plays."""

    name: str
    strategy_id: str
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class SingleGameResult:
    """Outcome of one game. `final_state` is None when the game failed."""

    game_number: int
    winner: Optional[str]
    total_turns: int
    final_state: Optional[GameState] = None
    seed: Optional[int] = None
    elapsed_seconds: float = 0.0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class MultiGameResult:
    """Results of a batch, ordered by game number."""

    results: List[SingleGameResult]
    player_names: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def total_games(self) -> int:
        return len(self.results)

    @property
    def completed(self) -> List[SingleGameResult]:
        return [r for r in self.results if not r.failed]

    @property
    def failures(self) -> List[SingleGameResult]:
        return [r for r in self.results if r.failed]

    def wins_by_player(self) -> Dict[str, int]:
        """Win count for every seated player (zero included)."""
        wins = {name: 0 for name in self.player_names}
        for r in self.completed:
            if r.winner is not None:
                wins[r.winner] = wins.get(r.winner, 0) + 1
        return wins

    @property
    def games_without_winner(self) -> int:
        return sum(1 for r in self.completed if r.winner is None)

    def win_rate(self, name: str) -> float:
        games = len(self.completed)
        if games == 0:
            return 0.0
        return self.wins_by_player().get(name, 0) / games

    @property
    def average_turns(self) -> float:
        turns = [r.total_turns for r in self.completed]
        return sum(turns) / len(turns) if turns else 0.0

    @property
    def min_turns(self) -> int:
        return min((r.total_turns for r in self.completed), default=0)

    @property
    def max_turns(self) -> int:
        return max((r.total_turns for r in self.completed), default=0)


def run_single_game(
    game_number: int,
    players: Sequence[PlayerSpec],
    registry: Optional[StrategyRegistry] = None,
    board: Optional[Board] = None,
    seed: Optional[int] = None,
    max_turns: Optional[int] = None,
    config: Optional[GameConfig] = None,
    game_service: Optional[GameService] = None,
) -> SingleGameResult:
    """Play one complete game and return its result."""
    registry = registry or create_default_registry()
    game_service = game_service or GameService()
    config = config or GameConfig()

    master = random.Random(seed)
    dice = Dice(seed=master.getrandbits(64))
    game_config = replace(config, seed=master.getrandbits(64), max_turns=max_turns or config.max_turns)
    seats = [
        (spec.name, registry.create(spec.strategy_id, spec.params, rng=random.Random(master.getrandbits(64))))
        for spec in players
    ]

    game_state = create_game(seats, board if board is not None else create_standard_board(), game_config)

    start = time.time()
    winner = game_service.run_game(game_state, dice)
    elapsed = time.time() - start

    logger.debug(f"Game {game_number}: {game_state.turn_number} turns, winner {winner}")
    return SingleGameResult(
        game_number=game_number,
        winner=winner,
        total_turns=game_state.turn_number,
        final_state=game_state,
        seed=seed,
        elapsed_seconds=round(elapsed, 3),
    )


def run_batch(
    num_games: int,
    players: Sequence[PlayerSpec],
    workers: int = 1,
    base_seed: Optional[int] = None,
    max_turns: Optional[int] = None,
    registry: Optional[StrategyRegistry] = None,
    board: Optional[Board] = None,
    config: Optional[GameConfig] = None,
) -> MultiGameResult:
    """
    Run `num_games` independent games.

    Args:
        num_games: Number of games to play.
        players: Seats, in turn order.
        workers: Number of parallel workers. 1 = sequential, >1 = thread pool.
        base_seed: Game N uses seed base_seed + N. None gives unseeded games.
        max_turns: Turn cutoff per game.
        registry: Strategy catalogue; defaults to the built-in strategies.
        board: Board template, copied for each game.
        config: Rule configuration shared by all games.
    """
    if num_games < 1:
        raise ValidationError(f"num_games must be at least 1, got {num_games}")
    if workers < 1:
        raise ValidationError(f"workers must be at least 1, got {workers}")

    registry = registry or create_default_registry()
    for spec in players:
        # Fail fast on bad ids or params before any game starts
        registry.validate_parameters(spec.strategy_id, spec.params)
    template = board if board is not None else create_standard_board()
    service = GameService()

    def game_kwargs(number: int) -> Dict[str, Any]:
        return {
            "game_number": number,
            "players": players,
            "registry": registry,
            "board": template,
            "seed": None if base_seed is None else base_seed + number,
            "max_turns": max_turns,
            "config": config,
            "game_service": service,
        }

    logger.info(f"Running {num_games} games with {workers} worker(s), players {[p.name for p in players]}")
    start_time = time.time()
    results: List[SingleGameResult] = []

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_number = {
                executor.submit(run_single_game, **game_kwargs(number)): number
                for number in range(1, num_games + 1)
            }
            for future in as_completed(future_to_number):
                number = future_to_number[future]
                try:
                    result = future.result()
                except MonopolyError as e:
                    logger.warning(f"Game {number} failed: {e}", exc_info=True)
                    result = SingleGameResult(number, None, 0, error=str(e))
                results.append(result)
                logger.info(f"[{len(results)}/{num_games}] Game {number}: {result.total_turns} turns, winner {result.winner}")
        results.sort(key=lambda r: r.game_number)
    else:
        for number in range(1, num_games + 1):
            try:
                result = run_single_game(**game_kwargs(number))
            except MonopolyError as e:
                logger.warning(f"Game {number} failed: {e}", exc_info=True)
                result = SingleGameResult(number, None, 0, error=str(e))
            results.append(result)

    elapsed = time.time() - start_time
    logger.info(f"Batch complete: {num_games} games in {elapsed:.2f}s")
    return MultiGameResult(results, [p.name for p in players], round(elapsed, 3))


def format_summary(result: MultiGameResult) -> str:
    """Human readable batch summary: win distribution and turn statistics."""
    lines = [
        "=" * 60,
        "BATCH COMPLETE",
        "=" * 60,
        f"Total games: {result.total_games}",
        f"Total time: {result.elapsed_seconds:.2f}s",
    ]
    if result.failures:
        lines.append(f"Failed games: {len(result.failures)}")

    lines.append("")
    lines.append("Win distribution:")
    wins = result.wins_by_player()
    games = len(result.completed) or 1
    for name, count in sorted(wins.items(), key=lambda x: -x[1]):
        lines.append(f"  {name}: {count} wins ({count / games * 100:.1f}%)")
    if result.games_without_winner:
        lines.append(f"  No winner: {result.games_without_winner}")

    lines.append("")
    lines.append("Turn statistics:")
    lines.append(f"  Min: {result.min_turns}")
    lines.append(f"  Max: {result.max_turns}")
    lines.append(f"  Avg: {result.average_turns:.1f}")
    lines.append("=" * 60)
    return "\n".join(lines)
