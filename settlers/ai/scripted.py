"""Scripted action source that replays a fixed list of actions."""

from __future__ import annotations

from collections.abc import Iterable

from ..engine import agent as agent_module
from ..models import actions, game_state
from . import base


class ScriptExhaustedError(RuntimeError):
    """The script ran out of actions while an objective was still pending."""


class ScriptedSource(base.ActionSource):
    """Answers objectives with pre-recorded actions, in order.

    The objective each action answered is kept in :attr:`answered` so tests
    can check the order in which the orchestrator asked.
    """

    def __init__(self, script: Iterable[actions.BaseAction]) -> None:
        self._script = list(script)
        self._position = 0
        self.answered: list[game_state.Objective] = []

    @property
    def remaining(self) -> int:
        """Number of actions not yet replayed."""
        return len(self._script) - self._position

    def choose_action(
        self,
        state: game_state.WorldState,
        agent: agent_module.PlayerAgent,
        objective: game_state.Objective,
    ) -> actions.BaseAction:
        """Return the next scripted action."""
        if self._position >= len(self._script):
            raise ScriptExhaustedError(
                f'Player {agent.player_index}: no scripted action for {objective.value}'
            )
        action = self._script[self._position]
        self._position += 1
        self.answered.append(objective)
        return action
