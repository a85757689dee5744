"""Abstract base class for action sources.

An action source answers the objectives an agent publishes.  Human input
relays, scripted test players, and automated strategies all implement the
same interface, so the orchestrator treats them alike.
"""

from __future__ import annotations

import abc

from ..engine import agent as agent_module
from ..models import actions, game_state


class ActionSource(abc.ABC):
    """Supplies one action for every objective requested from an agent."""

    @abc.abstractmethod
    def choose_action(
        self,
        state: game_state.WorldState,
        agent: agent_module.PlayerAgent,
        objective: game_state.Objective,
    ) -> actions.BaseAction:
        """Return the action *agent* submits for *objective*.

        The pending trade offer, if any, is on ``agent.trade_offer``.
        """
