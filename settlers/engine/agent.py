"""Per-player agent mediating between the orchestrator and an action source.

The agent is a two-channel rendezvous.  The orchestrator calls
:meth:`PlayerAgent.wait_for_next_action`, which publishes the objective on
the request channel and suspends until an action arrives on the action
channel.  An action source (human input relay, scripted test player, or
automated strategy) awaits :meth:`PlayerAgent.next_request` and answers
with :meth:`PlayerAgent.submit`.

Each request takes exactly one answer; a second submit for the same
request is refused.  At most one request is outstanding per agent, and a
request nobody read is withdrawn when the wait ends, so the request
channel never builds up behind a source that is not connected.

Timeouts are not part of the agent; wrap the await in ``asyncio.wait_for``
at the boundary if a source may disappear.
"""

from __future__ import annotations

import asyncio
import logging

from ..models import actions, game_state, player
from . import errors, trade

logger = logging.getLogger(__name__)


class PlayerAgent:
    """Controller for exactly one player."""

    def __init__(self, owned_player: player.Player) -> None:
        self.player = owned_player
        self.objective = game_state.Objective.IDLE
        self.trade_offer: trade.TradeOffer | None = None
        self._requests: asyncio.Queue[game_state.Objective] = asyncio.Queue()
        self._actions: asyncio.Queue[actions.BaseAction] = asyncio.Queue()
        self._awaiting_answer = False

    def __repr__(self) -> str:
        return (
            f'PlayerAgent(player_index={self.player.player_index}, '
            f'objective={self.objective.value})'
        )

    @property
    def player_index(self) -> int:
        """Turn-order index of the owned player."""
        return self.player.player_index

    # ------------------------------------------------------------------
    # Orchestrator side
    # ------------------------------------------------------------------

    def set_objective(self, objective: game_state.Objective) -> None:
        """Set what kind of action this agent is expected to supply next."""
        self.objective = objective

    def set_trade_offer(self, offer: trade.TradeOffer) -> None:
        """Attach the offer this agent is being asked to answer."""
        self.trade_offer = offer

    def clear_trade_offer(self) -> None:
        """Drop any attached offer."""
        self.trade_offer = None

    async def wait_for_next_action(
        self, objective: game_state.Objective | None = None
    ) -> actions.BaseAction:
        """Request an action for *objective* and block until one is supplied.

        When *objective* is None the currently set objective is requested.

        Raises:
            errors.ProtocolViolation: If no objective is pending, or the
                supplied action does not answer it or names another player.
        """
        if objective is not None:
            self.objective = objective
        requested = self.objective
        if requested == game_state.Objective.IDLE:
            raise errors.ProtocolViolation(
                f'Player {self.player_index} asked to act with no objective pending'
            )
        logger.debug('Player %d: waiting for %s', self.player_index, requested.value)
        self._awaiting_answer = True
        self._requests.put_nowait(requested)
        try:
            action = await self._actions.get()
        finally:
            self._awaiting_answer = False
            for channel in (self._requests, self._actions):
                while not channel.empty():
                    channel.get_nowait()
        self._validate(requested, action)
        return action

    def _validate(
        self, requested: game_state.Objective, action: actions.BaseAction
    ) -> None:
        if not isinstance(action, actions.ALLOWED_ACTIONS[requested]):
            raise errors.ProtocolViolation(
                f'Player {self.player_index} answered {requested.value} '
                f'with {type(action).__name__}'
            )
        if action.player_index != self.player_index:
            raise errors.ProtocolViolation(
                f'Action for player {action.player_index} submitted to the agent '
                f'of player {self.player_index}'
            )

    # ------------------------------------------------------------------
    # Action source side
    # ------------------------------------------------------------------

    async def next_request(self) -> game_state.Objective:
        """Block until the orchestrator requests an action; return its objective."""
        return await self._requests.get()

    def submit(self, action: actions.BaseAction) -> None:
        """Hand *action* to the orchestrator.

        Raises:
            errors.ProtocolViolation: If no objective is pending, or the
                pending request was already answered.
        """
        if self.objective == game_state.Objective.IDLE:
            raise errors.ProtocolViolation(
                f'Player {self.player_index} submitted '
                f'{type(action).__name__} with no objective pending'
            )
        if not self._awaiting_answer:
            raise errors.ProtocolViolation(
                f'Player {self.player_index} submitted '
                f'{type(action).__name__} but no request is waiting for it'
            )
        self._awaiting_answer = False
        self._actions.put_nowait(action)
