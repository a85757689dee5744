"""Board construction from an explicit tile layout.

A layout lists, for every tile, its terrain, its number token, and the ids
of its corner slots in perimeter order.  Edges are derived from consecutive
corners of each tile (the last corner connects back to the first); an edge
shared by two tiles is created once.  The robber starts on the first
desert tile, if there is one.

Example: two forest/hills tiles sharing the side between slots 4 and 5::

    build_board([
        (TileType.FOREST, 6, [0, 1, 2, 3, 4, 5]),
        (TileType.HILLS, 8, [5, 4, 6, 7, 8, 9]),
    ])
"""

from __future__ import annotations

from collections.abc import Sequence

from .board import Board, Edge, Slot, Tile, TileType

TileLayout = tuple[TileType, int | None, Sequence[int]]


def build_board(layout: Sequence[TileLayout]) -> Board:
    """Return a :class:`Board` for *layout*.

    Raises:
        ValueError: If a tile lists fewer than three corner slots or repeats
            a slot id.
    """
    tiles: list[Tile] = []
    edge_keys: dict[frozenset[int], int] = {}
    edges: list[Edge] = []
    max_slot = -1

    for tile_type, number, corners in layout:
        corners = list(corners)
        if len(corners) < 3 or len(set(corners)) != len(corners):
            raise ValueError(f'Invalid corner list for {tile_type} tile: {corners}')
        tiles.append(Tile(tile_type=tile_type, number=number, slot_ids=corners))
        max_slot = max(max_slot, *corners)
        for i, a in enumerate(corners):
            b = corners[(i + 1) % len(corners)]
            key = frozenset((a, b))
            if key in edge_keys:
                continue
            edge_keys[key] = len(edges)
            edges.append(Edge(edge_id=len(edges), slot_ids=(a, b)))

    slots = [Slot(slot_id=i) for i in range(max_slot + 1)]
    robber_tile_index = next(
        (i for i, t in enumerate(tiles) if t.tile_type == TileType.DESERT), None
    )
    return Board(
        tiles=tiles, slots=slots, edges=edges, robber_tile_index=robber_tile_index
    )


# A strip of six pointy-top hexes, left to right.  Corners are listed
# top, upper-right, lower-right, bottom, lower-left, upper-left; each hex
# shares its left side with the previous hex's right side.
DEMO_LAYOUT: list[TileLayout] = [
    (TileType.FOREST, 6, [0, 1, 2, 3, 4, 5]),
    (TileType.HILLS, 8, [6, 7, 8, 9, 2, 1]),
    (TileType.DESERT, None, [10, 11, 12, 13, 8, 7]),
    (TileType.FIELDS, 5, [14, 15, 16, 17, 12, 11]),
    (TileType.PASTURE, 9, [18, 19, 20, 21, 16, 15]),
    (TileType.MOUNTAINS, 10, [22, 23, 24, 25, 20, 19]),
]
