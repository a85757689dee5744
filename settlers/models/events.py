"""Notifications published by the orchestrator to its observers.

Observers (a UI relay, an automated player, a test) register a listener
with :meth:`GameOrchestrator.subscribe` and receive one of these models
for every change they can react to.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal

import pydantic


class EventType(enum.StrEnum):
    """Discriminator values for orchestrator events."""

    ACTIVE_PLAYER_CHANGED = 'active_player_changed'
    DICE_ROLLED = 'dice_rolled'
    TRADE_RESOLVED = 'trade_resolved'
    ROUND_COMPLETED = 'round_completed'
    GAME_OVER = 'game_over'


class ActivePlayerChanged(pydantic.BaseModel):
    """The active agent slot changed; None means no agent is active."""

    event_type: Literal[EventType.ACTIVE_PLAYER_CHANGED] = (
        EventType.ACTIVE_PLAYER_CHANGED
    )
    player_index: int | None


class DiceRolled(pydantic.BaseModel):
    """A player rolled the dice."""

    event_type: Literal[EventType.DICE_ROLLED] = EventType.DICE_ROLLED
    player_index: int
    value: int


class TradeResolved(pydantic.BaseModel):
    """A trade offer finished; accepted_by is None when nobody accepted."""

    event_type: Literal[EventType.TRADE_RESOLVED] = EventType.TRADE_RESOLVED
    offering_player: int
    accepted_by: int | None


class RoundCompleted(pydantic.BaseModel):
    """Every player has had a turn; round_counter is the new value."""

    event_type: Literal[EventType.ROUND_COMPLETED] = EventType.ROUND_COMPLETED
    round_counter: int


class GameOver(pydantic.BaseModel):
    """The game ended; winner_indices is empty if the round limit was hit."""

    event_type: Literal[EventType.GAME_OVER] = EventType.GAME_OVER
    winner_indices: list[int]


# Discriminated union of all event types.
GameEvent = Annotated[
    ActivePlayerChanged | DiceRolled | TradeResolved | RoundCompleted | GameOver,
    pydantic.Field(discriminator='event_type'),
]
