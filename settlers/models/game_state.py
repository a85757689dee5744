"""Settlers world state model.

Captures the authoritative shared data of a game in progress: the players
in turn order, the board, the round counter, and the winner slot.
"""

from __future__ import annotations

import enum

import pydantic

from .board import Board
from .player import Player


class Objective(enum.StrEnum):
    """What kind of action a player agent is currently expected to supply."""

    IDLE = 'idle'
    DICE_ROLL = 'dice_roll'
    REGULAR_TURN = 'regular_turn'
    PLACE_VILLAGE = 'place_village'
    PLACE_ROAD = 'place_road'
    ACCEPT_TRADE = 'accept_trade'
    SELECT_ROBBER_TILE = 'select_robber_tile'
    SELECT_CARD_TO_STEAL = 'select_card_to_steal'
    DROP_CARDS = 'drop_cards'


class WorldState(pydantic.BaseModel):
    """Complete snapshot of a game at any point in time."""

    # Turn order; fixed for the whole game.
    players: list[Player]
    board: Board
    # 0 during opening placement, 1 for the first full round, +1 per pass.
    round_counter: int = 0
    current_dice_roll: int | None = None
    # Full history of dice roll totals for this game.
    dice_roll_history: list[int] = pydantic.Field(default_factory=list)
    # player_index of the winner once the game is over, or None.
    winner_index: int | None = None

    def player(self, player_index: int) -> Player:
        """Return the player with *player_index*.

        Raises:
            KeyError: If no such player is seated.
        """
        for p in self.players:
            if p.player_index == player_index:
                return p
        raise KeyError(player_index)
