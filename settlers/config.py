"""Game configuration read from environment variables.

Every rule constant the orchestrator consumes lives on :class:`GameConfig`.
``load_config()`` overlays ``CATAN_*`` environment variables on the
defaults, e.g. ``CATAN_VICTORY_POINTS_TO_WIN=5``.
"""

from __future__ import annotations

import os

import pydantic

ENV_PREFIX: str = 'CATAN_'


class GameConfig(pydantic.BaseModel):
    """Rule constants for one game."""

    model_config = pydantic.ConfigDict(frozen=True)

    min_players: int = pydantic.Field(default=2, ge=1)
    victory_points_to_win: int = pydantic.Field(default=10, ge=1)
    # A player holding more than this many cards discards on a robber roll.
    discard_threshold: int = 7
    # Dice value that triggers the robber instead of production.
    robber_roll: int = 7
    knight_bonus_threshold: int = 3
    knight_bonus_points: int = 2
    longest_road_bonus_points: int = 2
    opening_rounds: int = pydantic.Field(default=2, ge=1)
    number_of_dice: int = pydantic.Field(default=2, ge=1)
    dice_sides: int = pydantic.Field(default=6, ge=2)
    bank_trade_ratio: int = pydantic.Field(default=4, ge=1)
    # Stop after this many completed rounds even without a winner.
    max_rounds: int | None = None
    # Whether the player who rolled the robber value also has to discard.
    active_player_discards: bool = False
    # Pause before an automated player answers an objective.
    ai_delay_seconds: float = pydantic.Field(default=0.0, ge=0.0)


def load_config(environ: dict[str, str] | None = None) -> GameConfig:
    """Return a :class:`GameConfig` with ``CATAN_*`` overrides applied.

    Raises:
        pydantic.ValidationError: If an override does not validate.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, str] = {}
    for field_name in GameConfig.model_fields:
        value = env.get(ENV_PREFIX + field_name.upper())
        if value is not None and value != '':
            overrides[field_name] = value
    return GameConfig.model_validate(overrides)
