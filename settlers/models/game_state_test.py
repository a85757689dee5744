"""Unit tests for the world state model."""

from __future__ import annotations

import unittest

from settlers.models import board_builder, game_state, player


def _make_state() -> game_state.WorldState:
    return game_state.WorldState(
        players=[
            player.Player(player_index=0, name='Alice'),
            player.Player(player_index=1, name='Bob'),
        ],
        board=board_builder.build_board(board_builder.DEMO_LAYOUT),
    )


class TestWorldState(unittest.TestCase):
    """Tests for WorldState."""

    def test_defaults(self) -> None:
        """A new game sits in the opening phase with no rolls and no winner."""
        state = _make_state()
        self.assertEqual(state.round_counter, 0)
        self.assertIsNone(state.current_dice_roll)
        self.assertEqual(state.dice_roll_history, [])
        self.assertIsNone(state.winner_index)

    def test_player_lookup(self) -> None:
        """player() returns the seated object itself."""
        state = _make_state()
        self.assertIs(state.player(1), state.players[1])

    def test_player_lookup_unknown_index(self) -> None:
        """player() raises KeyError for an unseated index."""
        with self.assertRaises(KeyError):
            _make_state().player(5)

    def test_json_round_trip(self) -> None:
        """The world state serializes and restores unchanged."""
        state = _make_state()
        state.players[0].resources = player.Resources(wood=2)
        restored = game_state.WorldState.model_validate_json(state.model_dump_json())
        self.assertEqual(restored, state)


if __name__ == '__main__':
    unittest.main()
