"""Unit tests for the passive action source."""

from __future__ import annotations

import unittest

from settlers.ai import passive
from settlers.engine import agent as agent_module
from settlers.engine import rules
from settlers.models import actions, board, board_builder, game_state, player
from settlers.models.game_state import Objective


class TestPassiveSource(unittest.TestCase):
    """Tests for PassiveSource."""

    def setUp(self) -> None:
        self.state = game_state.WorldState(
            players=[
                player.Player(player_index=0, name='Alice'),
                player.Player(player_index=1, name='Bob'),
            ],
            board=board_builder.build_board(board_builder.DEMO_LAYOUT),
        )
        self.alice, self.bob = self.state.players
        self.agent = agent_module.PlayerAgent(self.alice)
        self.source = passive.PassiveSource()

    def choose(self, objective: Objective) -> actions.BaseAction:
        return self.source.choose_action(self.state, self.agent, objective)

    def test_simple_answers(self) -> None:
        """Roll, end the turn, and decline every trade."""
        self.assertIsInstance(self.choose(Objective.DICE_ROLL), actions.RollDice)
        self.assertIsInstance(self.choose(Objective.REGULAR_TURN), actions.EndTurn)
        self.assertIsInstance(
            self.choose(Objective.ACCEPT_TRADE), actions.DeclineTrade
        )

    def test_opening_village_and_road(self) -> None:
        """The first legal slot is chosen, then a road next to it."""
        village = self.choose(Objective.PLACE_VILLAGE)
        self.assertEqual(village, actions.PlaceVillage(player_index=0, slot_id=0))

        self.state.board.slots[0].settlement = board.Settlement(owner=0)
        road = self.choose(Objective.PLACE_ROAD)
        self.assertTrue(rules.can_place_road(self.state.board, 0, road.edge_id)[0])

    def test_skips_blocked_slots(self) -> None:
        """Occupied slots and their neighbours are passed over."""
        self.state.board.slots[0].settlement = board.Settlement(owner=1)
        village = self.choose(Objective.PLACE_VILLAGE)
        self.assertEqual(village.slot_id, 2)

    def test_no_village_outside_opening_without_road(self) -> None:
        """Without roads there is no legal village after the opening."""
        self.state.round_counter = 1
        with self.assertRaises(ValueError):
            self.choose(Objective.PLACE_VILLAGE)

    def test_drops_exactly_half(self) -> None:
        """The discard covers half the hand from the front."""
        self.alice.resources = player.Resources(wood=3, brick=2, ore=4)
        drop = self.choose(Objective.DROP_CARDS)
        self.assertEqual(drop.resources, {'wood': 3, 'brick': 1})

    def test_robber_and_steal(self) -> None:
        """The robber leaves its tile and the first candidate is robbed."""
        tile = self.choose(Objective.SELECT_ROBBER_TILE)
        self.assertEqual(tile.tile_index, 0)

        self.state.board.robber_tile_index = 1
        self.state.board.slots[6].settlement = board.Settlement(owner=1)
        self.assertIsNone(
            self.choose(Objective.SELECT_CARD_TO_STEAL).target_player_index
        )
        self.bob.resources = player.Resources(sheep=1)
        self.assertEqual(
            self.choose(Objective.SELECT_CARD_TO_STEAL).target_player_index, 1
        )

    def test_idle_has_no_answer(self) -> None:
        """IDLE is never answered."""
        with self.assertRaises(ValueError):
            self.choose(Objective.IDLE)


if __name__ == '__main__':
    unittest.main()
