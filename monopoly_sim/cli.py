"""
Command-line batch runner.

Usage:
    # 10 games between the default strategy line-up
    monopoly-sim --games 10

    # 100 games, 4 workers, reproducible
    monopoly-sim -n 100 -w 4 --seed 42 -s always,balanced,roi,aggressive

    # Override strategy parameters
    monopoly-sim -s balanced,conservative --param balanced.threshold=60 --param conservative.minCashReserve=300

    # List the available strategies
    monopoly-sim --list
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional, Sequence

from monopoly_sim.exceptions import ConfigError, ValidationError
from monopoly_sim.settings import get_simulation_settings
from monopoly_sim.simulation.runner import PlayerSpec, format_summary, run_batch
from monopoly_sim.strategies.registry import StrategyRegistry, create_default_registry

PLAYER_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Hank"]


def parse_params(raw: Sequence[str]) -> Dict[str, Dict[str, str]]:
    """Turn ["balanced.threshold=60", ...] into {"balanced": {"threshold": "60"}}."""
    params: Dict[str, Dict[str, str]] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        strategy_id, dot, name = key.partition(".")
        if not sep or not dot or not strategy_id or not name:
            raise ConfigError(f"Parameter must look like STRATEGY.NAME=VALUE, got '{item}'")
        params.setdefault(strategy_id.strip().lower(), {})[name.strip()] = value.strip()
    return params


def build_player_specs(strategy_ids: List[str], params: Dict[str, Dict[str, str]]) -> List[PlayerSpec]:
    if len(strategy_ids) < 2:
        raise ConfigError("At least two strategies are needed for a game")
    if len(strategy_ids) > len(PLAYER_NAMES):
        raise ConfigError(f"At most {len(PLAYER_NAMES)} players are supported")
    return [
        PlayerSpec(f"{PLAYER_NAMES[i]}-{sid}", sid, params.get(sid, {}))
        for i, sid in enumerate(strategy_ids)
    ]


def describe_strategies(registry: StrategyRegistry) -> str:
    lines = []
    for meta in registry.list_all():
        lines.append(f"{meta.id:<14}{meta.display_name}: {meta.description}")
        defaults = registry.default_parameters(meta.id)
        if defaults:
            lines.append(" " * 14 + ", ".join(f"{k}={v}" for k, v in defaults.items()))
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_simulation_settings()

    parser = argparse.ArgumentParser(
        description="Simulate Monopoly games between automated strategies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-n", "--games",
        type=int,
        default=settings.games,
        help=f"Number of games to run (default: {settings.games})",
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=settings.workers,
        help=f"Number of parallel workers (default: {settings.workers} = sequential)",
    )
    parser.add_argument(
        "-t", "--max-turns",
        type=int,
        default=settings.max_turns,
        help=f"Maximum turns per game (default: {settings.max_turns})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Base seed; game N uses seed + N",
    )
    parser.add_argument(
        "-s", "--strategies",
        type=str,
        default=settings.strategies,
        help=f"Comma-separated strategy ids, one per player (default: {settings.strategies})",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="STRATEGY.NAME=VALUE",
        help="Strategy parameter override; may be repeated",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available strategies and exit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = create_default_registry()
    if args.list:
        print(describe_strategies(registry))
        return 0

    try:
        strategy_ids = [s.strip().lower() for s in args.strategies.split(",") if s.strip()]
        players = build_player_specs(strategy_ids, parse_params(args.param))
        result = run_batch(
            num_games=args.games,
            players=players,
            workers=args.workers,
            base_seed=args.seed,
            max_turns=args.max_turns,
            registry=registry,
        )
    except (ConfigError, ValidationError) as e:
        parser.error(str(e))

    print(format_summary(result))
    return 1 if result.failures else 0


if __name__ == "__main__":
    sys.exit(main())
