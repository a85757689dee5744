"""Unit tests for board construction."""

from __future__ import annotations

import unittest

from settlers.models import board_builder
from settlers.models.board import TileType


class TestBuildBoard(unittest.TestCase):
    """Tests for build_board."""

    def test_demo_layout_sizes(self) -> None:
        """The demo strip has 6 tiles, 26 slots and 31 distinct edges."""
        brd = board_builder.build_board(board_builder.DEMO_LAYOUT)
        self.assertEqual(len(brd.tiles), 6)
        self.assertEqual(len(brd.slots), 26)
        self.assertEqual(len(brd.edges), 31)

    def test_shared_edge_created_once(self) -> None:
        """Two tiles sharing a side produce one edge for it."""
        brd = board_builder.build_board(
            [
                (TileType.FOREST, 6, [0, 1, 2, 3, 4, 5]),
                (TileType.HILLS, 8, [6, 7, 8, 9, 2, 1]),
            ]
        )
        shared = [e for e in brd.edges if set(e.slot_ids) == {1, 2}]
        self.assertEqual(len(shared), 1)
        self.assertEqual(len(brd.edges), 11)

    def test_edge_ids_match_positions(self) -> None:
        """Edge ids index into Board.edges."""
        brd = board_builder.build_board(board_builder.DEMO_LAYOUT)
        for i, edge in enumerate(brd.edges):
            self.assertEqual(edge.edge_id, i)

    def test_robber_starts_on_desert(self) -> None:
        """The robber starts on the first desert tile."""
        brd = board_builder.build_board(board_builder.DEMO_LAYOUT)
        self.assertEqual(brd.robber_tile_index, 2)

    def test_no_desert_means_no_robber(self) -> None:
        """Without a desert the robber starts off the board."""
        brd = board_builder.build_board([(TileType.FOREST, 6, [0, 1, 2])])
        self.assertIsNone(brd.robber_tile_index)

    def test_invalid_corner_list_rejected(self) -> None:
        """Repeated or too few corners raise ValueError."""
        with self.assertRaises(ValueError):
            board_builder.build_board([(TileType.FOREST, 6, [0, 1])])
        with self.assertRaises(ValueError):
            board_builder.build_board([(TileType.FOREST, 6, [0, 1, 1])])


if __name__ == '__main__':
    unittest.main()
