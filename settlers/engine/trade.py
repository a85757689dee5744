"""Settlers trading logic.

Handles bank trades and the resource exchange behind a player-to-player
trade offer.  The sequential offer protocol itself lives in the
orchestrator; this module only validates and applies exchanges.
"""

from __future__ import annotations

import pydantic

from ..models import board
from ..models import player as player_module
from . import errors


class TradeOffer(pydantic.BaseModel):
    """A proposal shown to one counterpart at a time."""

    offering_player: int
    # Maps resource name → quantity the offerer gives.
    offering: dict[str, int]
    # Maps resource name → quantity the offerer wants in return.
    requesting: dict[str, int]

    @pydantic.field_validator('offering', 'requesting')
    @classmethod
    def _check_quantities(cls, value: dict[str, int]) -> dict[str, int]:
        for name, amount in value.items():
            board.ResourceType(name)
            if amount < 0:
                raise ValueError(f'Negative quantity {amount} for {name}')
        return {k: v for k, v in value.items() if v > 0}


def validate_offer(
    offering_player: player_module.Player, offer: TradeOffer
) -> tuple[bool, str]:
    """Check whether an offer may be shown to other players.

    Returns (True, '') on success, or (False, reason) on failure.
    """
    if not offer.offering and not offer.requesting:
        return False, 'Trade offer is empty'
    if not offering_player.resources.can_afford(offer.offering):
        return False, 'Insufficient resources to offer'
    return True, ''


def execute_trade(
    offerer: player_module.Player,
    accepter: player_module.Player,
    offer: TradeOffer,
) -> None:
    """Exchange resources between *offerer* and *accepter* atomically.

    The offerer gives ``offer.offering`` and receives ``offer.requesting``;
    the accepter does the reverse.  Both hands are checked before either is
    touched.

    Raises:
        errors.RejectedTransferError: If either side cannot cover its part.
    """
    if not accepter.resources.can_afford(offer.requesting):
        raise errors.RejectedTransferError(
            f'Player {accepter.player_index} does not have {offer.requesting}'
        )
    if not offerer.resources.can_afford(offer.offering):
        raise errors.RejectedTransferError(
            f'Player {offerer.player_index} no longer has {offer.offering}'
        )

    offered = player_module.Resources.from_dict(offer.offering)
    requested = player_module.Resources.from_dict(offer.requesting)
    offerer.resources = offerer.resources.subtract(offer.offering).add(requested)
    accepter.resources = accepter.resources.subtract(offer.requesting).add(offered)


def can_bank_trade(
    offering_player: player_module.Player,
    giving: board.ResourceType,
    receiving: board.ResourceType,
    ratio: int = 4,
) -> tuple[bool, str]:
    """Check whether a player can execute a bank trade.

    Returns (True, '') on success, or (False, reason) on failure.
    """
    if giving == receiving:
        return False, 'Cannot trade a resource for itself'
    current_amount = offering_player.resources.get(giving)
    if current_amount < ratio:
        return False, f'Need {ratio} {giving} to bank trade, have {current_amount}'
    return True, ''


def apply_bank_trade(
    offering_player: player_module.Player,
    giving: board.ResourceType,
    receiving: board.ResourceType,
    ratio: int = 4,
) -> None:
    """Execute a bank trade in place. Does not validate sufficiency."""
    after_giving = offering_player.resources.subtract({giving.value: ratio})
    offering_player.resources = after_giving.add(
        player_module.Resources().with_resource(receiving, 1)
    )
