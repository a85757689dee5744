"""In-turn action handlers.

Each handler validates one action against the world state and applies it
in place.  A handler that rejects an action raises
:class:`~.errors.IllegalActionError` before changing anything, so the
orchestrator can simply request the action again.
"""

from __future__ import annotations

import random

from ..models import board, game_state, player
from . import dice, errors, rules, trade

_RESOURCE_NAMES = frozenset(r.value for r in board.ResourceType)


def _require(result: tuple[bool, str]) -> None:
    ok, reason = result
    if not ok:
        raise errors.IllegalActionError(reason)


def _pay(p: player.Player, cost: dict[str, int], what: str) -> None:
    if not p.resources.can_afford(cost):
        raise errors.IllegalActionError(f'Insufficient resources to build {what}.')
    p.resources = p.resources.subtract(cost)


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def place_village(
    state: game_state.WorldState, p: player.Player, slot_id: int, free: bool = False
) -> None:
    """Put a village of *p* on *slot_id*; paid unless *free* (opening phase)."""
    _require(rules.can_place_village(state.board, p.player_index, slot_id, free))
    if p.build_inventory.villages_remaining < 1:
        raise errors.IllegalActionError('No villages remaining.')
    if not free:
        _pay(p, player.VILLAGE_COST, 'a village')

    state.board.slots[slot_id].settlement = board.Settlement(owner=p.player_index)
    p.build_inventory.villages_remaining -= 1
    p.victory_points += 1


def place_road(
    state: game_state.WorldState, p: player.Player, edge_id: int, free: bool = False
) -> None:
    """Put a road of *p* on *edge_id*; paid unless *free* (opening phase)."""
    _require(rules.can_place_road(state.board, p.player_index, edge_id))
    if p.build_inventory.roads_remaining < 1:
        raise errors.IllegalActionError('No roads remaining.')
    if not free:
        _pay(p, player.ROAD_COST, 'a road')

    state.board.edges[edge_id].road_owner = p.player_index
    p.build_inventory.roads_remaining -= 1


def place_city(state: game_state.WorldState, p: player.Player, slot_id: int) -> None:
    """Upgrade the village of *p* on *slot_id* to a city."""
    _require(rules.can_place_city(state.board, p.player_index, slot_id))
    if p.build_inventory.cities_remaining < 1:
        raise errors.IllegalActionError('No cities remaining.')
    _pay(p, player.CITY_COST, 'a city')

    state.board.slots[slot_id].settlement = board.Settlement(
        owner=p.player_index, settlement_type=board.SettlementType.CITY
    )
    p.build_inventory.cities_remaining -= 1
    p.build_inventory.villages_remaining += 1
    p.victory_points += 1  # was 1 for the village, now 2 total


# ---------------------------------------------------------------------------
# Development cards
# ---------------------------------------------------------------------------


def buy_development_card(p: player.Player, draw: dice.CardSource) -> player.DevCardType:
    """Buy one card for *p*; it becomes playable once the turn ends.

    Victory point cards count immediately.
    """
    if not p.resources.can_afford(player.DEV_CARD_COST):
        raise errors.IllegalActionError('Insufficient resources to buy a dev card.')
    try:
        card_type = draw()
    except IndexError as exc:
        raise errors.IllegalActionError(str(exc)) from exc

    p.resources = p.resources.subtract(player.DEV_CARD_COST)
    p.new_dev_cards = p.new_dev_cards.add(card_type)
    if card_type == player.DevCardType.VICTORY_POINT:
        p.victory_points += 1
    return card_type


def play_knight(p: player.Player) -> None:
    """Spend a playable Knight card of *p*; the robber move follows separately."""
    if p.dev_cards.knight < 1:
        raise errors.IllegalActionError('No Knight card in hand.')
    p.dev_cards = p.dev_cards.remove(player.DevCardType.KNIGHT)
    p.knights_played += 1


def end_turn(p: player.Player) -> None:
    """Move development cards bought this turn into the playable hand."""
    for card_type in player.DevCardType:
        count = p.new_dev_cards.get(card_type)
        if count > 0:
            p.dev_cards = p.dev_cards.add(card_type, count)
    p.new_dev_cards = player.DevCardHand()


# ---------------------------------------------------------------------------
# Trading
# ---------------------------------------------------------------------------


def trade_with_bank(
    p: player.Player,
    giving: board.ResourceType,
    receiving: board.ResourceType,
    ratio: int,
) -> None:
    """Give *ratio* cards of *giving* to the bank for one *receiving*."""
    _require(trade.can_bank_trade(p, giving, receiving, ratio))
    trade.apply_bank_trade(p, giving, receiving, ratio)


# ---------------------------------------------------------------------------
# Robber
# ---------------------------------------------------------------------------


def drop_cards(p: player.Player, resources: dict[str, int], required: int) -> None:
    """Discard exactly *required* cards named by *resources* from *p*'s hand."""
    for name, amount in resources.items():
        if name not in _RESOURCE_NAMES:
            raise errors.IllegalActionError(f'Unknown resource {name!r}.')
        if amount < 0:
            raise errors.IllegalActionError('Cannot discard a negative amount.')
    dropped = player.Resources.from_dict(resources)
    if dropped.total() != required:
        raise errors.IllegalActionError(
            f'Must discard exactly {required} cards, got {dropped.total()}.'
        )
    if not p.resources.can_afford(dropped.to_dict()):
        raise errors.IllegalActionError(f'Player does not hold {resources} to discard.')

    p.resources = p.resources.subtract(dropped.to_dict())


def move_robber(state: game_state.WorldState, tile_index: int) -> None:
    """Put the robber on *tile_index*, which must differ from its current tile."""
    if not 0 <= tile_index < len(state.board.tiles):
        raise errors.IllegalActionError(f'Tile {tile_index} does not exist.')
    if tile_index == state.board.robber_tile_index:
        raise errors.IllegalActionError('Robber must move to a different tile.')
    state.board.robber_tile_index = tile_index


def steal_card(
    state: game_state.WorldState,
    thief: player.Player,
    target_index: int | None,
    rng: random.Random,
) -> board.ResourceType | None:
    """Move one random card from the target to the thief.

    *target_index* must be one of the steal candidates around the robber;
    it may be None only when there are none.  Returns the stolen resource.
    """
    robber_tile = state.board.robber_tile_index
    candidates = (
        []
        if robber_tile is None
        else rules.steal_candidates(
            state.board, state.players, robber_tile, thief.player_index
        )
    )
    if target_index is None:
        if candidates:
            raise errors.IllegalActionError(
                f'Must choose a player to steal from: {candidates}'
            )
        return None
    if target_index not in candidates:
        raise errors.IllegalActionError(
            f'Player {target_index} cannot be stolen from on this tile.'
        )

    target = state.player(target_index)
    chosen = rng.choice(target.resources.cards())
    target.resources = target.resources.subtract({chosen.value: 1})
    thief.grant(chosen, 1)
    return chosen
