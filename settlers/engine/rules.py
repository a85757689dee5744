"""Settlers rules.

Pure functions for placement legality, robber victims, discard sizes,
largest army, and victory evaluation.  Nothing here mutates state.
"""

from __future__ import annotations

from collections.abc import Sequence

from .. import config as config_module
from ..models import board, player

# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


def can_place_village(
    brd: board.Board, player_index: int, slot_id: int, opening: bool = False
) -> tuple[bool, str]:
    """Check whether *player_index* may put a village on *slot_id*.

    Every village needs an empty slot with no settlement one edge away.
    Outside the opening phase it must also touch one of the player's roads.

    Returns (True, '') on success, or (False, reason) on failure.
    """
    if not 0 <= slot_id < len(brd.slots):
        return False, f'Slot {slot_id} does not exist'
    if brd.slots[slot_id].settlement is not None:
        return False, f'Slot {slot_id} is already occupied'
    if any(brd.slots[n].settlement is not None for n in brd.neighbours_of(slot_id)):
        return False, 'Village violates the distance rule'
    if opening:
        return True, ''
    if not any(e.road_owner == player_index for e in brd.edges_at(slot_id)):
        return False, f'Slot {slot_id} is not connected to an own road'
    return True, ''


def can_place_road(
    brd: board.Board, player_index: int, edge_id: int
) -> tuple[bool, str]:
    """Check whether *player_index* may put a road on *edge_id*.

    The edge must be free and touch an own settlement, or an own road
    through a slot that holds no opponent's settlement.

    Returns (True, '') on success, or (False, reason) on failure.
    """
    if not 0 <= edge_id < len(brd.edges):
        return False, f'Edge {edge_id} does not exist'
    edge = brd.edges[edge_id]
    if edge.road_owner is not None:
        return False, f'Edge {edge_id} already has a road'
    for slot_id in edge.slot_ids:
        settlement = brd.slots[slot_id].settlement
        if settlement is not None and settlement.owner == player_index:
            return True, ''
        # Opponent's settlement blocks this slot as a connection point.
        if settlement is not None:
            continue
        for other in brd.edges_at(slot_id):
            if other.edge_id != edge_id and other.road_owner == player_index:
                return True, ''
    return False, f'Edge {edge_id} is not reachable by this player'


def can_place_city(
    brd: board.Board, player_index: int, slot_id: int
) -> tuple[bool, str]:
    """Check whether *player_index* may upgrade the village on *slot_id*.

    Returns (True, '') on success, or (False, reason) on failure.
    """
    if not 0 <= slot_id < len(brd.slots):
        return False, f'Slot {slot_id} does not exist'
    settlement = brd.slots[slot_id].settlement
    if (
        settlement is None
        or settlement.owner != player_index
        or settlement.settlement_type != board.SettlementType.VILLAGE
    ):
        return False, f'No own village at slot {slot_id}'
    return True, ''


# ---------------------------------------------------------------------------
# Robber
# ---------------------------------------------------------------------------


def must_discard(p: player.Player, threshold: int) -> bool:
    """Return True if *p* holds more than *threshold* resource cards."""
    return p.resources.total() > threshold


def discard_count(p: player.Player) -> int:
    """Return how many cards *p* has to drop: half the hand, rounded down."""
    return p.resources.total() // 2


def steal_candidates(
    brd: board.Board,
    players: Sequence[player.Player],
    tile_index: int,
    thief_index: int,
) -> list[int]:
    """Return the players the thief may steal from after robbing *tile_index*.

    A candidate owns a settlement around the tile, is not the thief, and
    holds at least one resource card.  Order follows the tile's slots.
    """
    holding = {p.player_index for p in players if p.resources.total() > 0}
    return [
        owner
        for owner in brd.owners_on_tile(tile_index)
        if owner != thief_index and owner in holding
    ]


# ---------------------------------------------------------------------------
# Victory
# ---------------------------------------------------------------------------


def get_largest_army_holder(
    players: Sequence[player.Player], threshold: int = 3
) -> int | None:
    """Return the player_index of the unique player with the most knights.

    Returns None if nobody has played at least *threshold* knights or the
    highest count is shared.
    """
    best_count = threshold - 1  # must exceed to claim
    holder: int | None = None
    for p in players:
        if p.knights_played > best_count:
            best_count = p.knights_played
            holder = p.player_index
        elif p.knights_played == best_count and best_count >= threshold:
            # Tie among multiple players: no clear holder.
            holder = None
    return holder


def effective_score(
    p: player.Player,
    cfg: config_module.GameConfig,
    army_holder: int | None,
    road_holder: int | None,
) -> int:
    """Return base victory points plus the largest army and longest road bonuses."""
    score = p.victory_points
    if army_holder == p.player_index:
        score += cfg.knight_bonus_points
    if road_holder == p.player_index:
        score += cfg.longest_road_bonus_points
    return score


def compute_winners(
    players: Sequence[player.Player],
    cfg: config_module.GameConfig,
    road_holder: int | None = None,
) -> list[player.Player]:
    """Return every player whose effective score reaches the target, in turn order."""
    army_holder = get_largest_army_holder(players, cfg.knight_bonus_threshold)
    return [
        p
        for p in players
        if effective_score(p, cfg, army_holder, road_holder)
        >= cfg.victory_points_to_win
    ]
