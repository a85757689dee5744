"""Passive action source.

Answers every objective with the simplest legal action: roll, end the
turn, decline trades, build at the first legal position, discard from the
front of the hand, and rob the first eligible tile.  Useful as a stand-in
for automated players and for smoke-testing the engine.
"""

from __future__ import annotations

from ..engine import agent as agent_module
from ..engine import rules
from ..models import actions, game_state
from . import base


class PassiveSource(base.ActionSource):
    """Always-valid, never-ambitious player."""

    def choose_action(
        self,
        state: game_state.WorldState,
        agent: agent_module.PlayerAgent,
        objective: game_state.Objective,
    ) -> actions.BaseAction:
        """Return the simplest legal action for *objective*.

        Raises:
            ValueError: If *objective* has no legal answer on this board.
        """
        index = agent.player_index
        brd = state.board

        if objective == game_state.Objective.DICE_ROLL:
            return actions.RollDice(player_index=index)
        if objective == game_state.Objective.REGULAR_TURN:
            return actions.EndTurn(player_index=index)
        if objective == game_state.Objective.ACCEPT_TRADE:
            return actions.DeclineTrade(player_index=index)

        if objective == game_state.Objective.PLACE_VILLAGE:
            opening = state.round_counter == 0
            for slot in brd.slots:
                if rules.can_place_village(brd, index, slot.slot_id, opening)[0]:
                    return actions.PlaceVillage(
                        player_index=index, slot_id=slot.slot_id
                    )

        elif objective == game_state.Objective.PLACE_ROAD:
            for edge in brd.edges:
                if rules.can_place_road(brd, index, edge.edge_id)[0]:
                    return actions.PlaceRoad(player_index=index, edge_id=edge.edge_id)

        elif objective == game_state.Objective.DROP_CARDS:
            hand = agent.player.resources.cards()
            dropped: dict[str, int] = {}
            for card in hand[: rules.discard_count(agent.player)]:
                dropped[card.value] = dropped.get(card.value, 0) + 1
            return actions.DropCards(player_index=index, resources=dropped)

        elif objective == game_state.Objective.SELECT_ROBBER_TILE:
            for i in range(len(brd.tiles)):
                if i != brd.robber_tile_index:
                    return actions.SelectRobberTile(player_index=index, tile_index=i)

        elif objective == game_state.Objective.SELECT_CARD_TO_STEAL:
            candidates: list[int] = []
            if brd.robber_tile_index is not None:
                candidates = rules.steal_candidates(
                    brd, state.players, brd.robber_tile_index, index
                )
            return actions.SelectCardToSteal(
                player_index=index,
                target_player_index=candidates[0] if candidates else None,
            )

        raise ValueError(f'No legal action for {objective.value}')
