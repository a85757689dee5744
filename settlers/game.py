"""Game setup and session runner.

Creates the world state for a table of players and runs an orchestrator
together with one driver task per action source.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from collections.abc import Mapping, Sequence

from . import config as config_module
from . import log
from .ai import base as ai_base
from .ai import driver, passive
from .engine import errors, orchestrator
from .models import board, board_builder, game_state, player

logger = logging.getLogger(__name__)


def create_world_state(
    player_names: Sequence[str],
    brd: board.Board,
    ai_players: Sequence[int] = (),
) -> game_state.WorldState:
    """Create a fresh WorldState ready for opening placement.

    Args:
        player_names: Display names in turn order (determines player count).
        brd: The board to play on.
        ai_players: Turn-order indices of automated players.
    """
    players = [
        player.Player(player_index=i, name=name, is_ai=i in ai_players)
        for i, name in enumerate(player_names)
    ]
    return game_state.WorldState(players=players, board=brd)


async def play_game(
    orch: orchestrator.GameOrchestrator,
    sources: Mapping[int, ai_base.ActionSource] | None = None,
) -> list[player.Player]:
    """Run *orch* to completion with an action source driving each agent.

    Automated players without an entry in *sources* get a
    :class:`~.ai.passive.PassiveSource`.  The game stops as soon as any
    driver fails; its exception is re-raised here.

    Raises:
        errors.SetupError: If a human player has no action source.
    """
    sources = dict(sources or {})
    for p in orch.state.players:
        if p.player_index in sources:
            continue
        if not p.is_ai:
            raise errors.SetupError(f'No action source for player {p.name!r}')
        sources[p.player_index] = passive.PassiveSource()

    delay = orch.config.ai_delay_seconds
    drivers = [
        asyncio.create_task(
            driver.drive_agent(agent, sources[agent.player_index], orch.state, delay)
        )
        for agent in orch.agents
    ]
    game = asyncio.create_task(orch.run_game())
    try:
        done, _pending = await asyncio.wait(
            [game, *drivers], return_when=asyncio.FIRST_COMPLETED
        )
        if game not in done:
            # Drivers only finish by raising; surface the first failure.
            failed = next(iter(done))
            logger.error('Action source failed: %r', failed.exception())
            failed.result()
        return game.result()
    finally:
        for task in [game, *drivers]:
            task.cancel()
        await asyncio.gather(game, *drivers, return_exceptions=True)


# Hard cap for unattended games between passive players, which never
# build past the opening placement.
_DEFAULT_MAX_ROUNDS = 200


def run(
    player_names: Sequence[str],
    brd: board.Board,
    cfg: config_module.GameConfig | None = None,
    seed: int | None = None,
) -> game_state.WorldState:
    """Play a game between passive automated players and return the final state."""
    cfg = cfg or config_module.load_config()
    if cfg.max_rounds is None:
        cfg = cfg.model_copy(update={'max_rounds': _DEFAULT_MAX_ROUNDS})
    state = create_world_state(player_names, brd, ai_players=range(len(player_names)))
    orch = orchestrator.GameOrchestrator(state, config=cfg, rng=random.Random(seed))
    asyncio.run(play_game(orch))
    return state


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point: play one passive game on the demo board."""
    parser = argparse.ArgumentParser(
        description='Run a game between passive players.'
    )
    parser.add_argument('--players', type=int, default=3, help='number of players')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed')
    parser.add_argument('--rounds', type=int, default=20, help='round limit')
    parser.add_argument('--debug', action='store_true', help='log every request')
    args = parser.parse_args(argv)

    log.configure_logging(
        logging.DEBUG if args.debug else logging.INFO, quiet_requests=not args.debug
    )
    cfg = config_module.load_config().model_copy(update={'max_rounds': args.rounds})
    names = [f'Player{i}' for i in range(args.players)]
    brd = board_builder.build_board(board_builder.DEMO_LAYOUT)
    state = run(names, brd, cfg, args.seed)
    for p in state.players:
        print(f'{p.name}: {p.victory_points} VP, {p.resources.total()} cards')
    return 0


if __name__ == '__main__':
    sys.exit(main())
