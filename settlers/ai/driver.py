"""Async driver binding an action source to a player agent.

The driver waits for the agent to publish an objective, asks the source
for an action, and submits it.  It runs until cancelled; an exception
from the source ends the driver and is visible on its task.
"""

from __future__ import annotations

import asyncio
import logging

from ..engine import agent as agent_module
from ..models import game_state
from . import base

logger = logging.getLogger(__name__)


async def drive_agent(
    agent: agent_module.PlayerAgent,
    source: base.ActionSource,
    state: game_state.WorldState,
    delay: float = 0.0,
) -> None:
    """Answer every objective *agent* publishes with an action from *source*.

    A *delay* sleep before each answer simulates thinking time.
    """
    while True:
        objective = await agent.next_request()
        if delay:
            await asyncio.sleep(delay)
        action = source.choose_action(state, agent, objective)
        logger.debug(
            'Player %d answers %s with %s',
            agent.player_index,
            objective.value,
            type(action).__name__,
        )
        agent.submit(action)
