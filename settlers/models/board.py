"""Settlers board data models.

The board is an external collaborator of the turn engine: it knows which
tiles a dice value triggers and which settlement slots touch each tile.
Slots and edges are plain id-indexed records; their spatial arrangement is
supplied by whoever builds the board.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator

import pydantic


class TileType(enum.StrEnum):
    """Terrain tile types and the resource each produces."""

    FOREST = 'forest'  # produces wood
    PASTURE = 'pasture'  # produces sheep
    FIELDS = 'fields'  # produces wheat
    HILLS = 'hills'  # produces brick
    MOUNTAINS = 'mountains'  # produces ore
    DESERT = 'desert'  # produces nothing


class ResourceType(enum.StrEnum):
    """The five tradeable resource types."""

    WOOD = 'wood'
    BRICK = 'brick'
    WHEAT = 'wheat'
    SHEEP = 'sheep'
    ORE = 'ore'


# Map from tile type to the resource it produces (desert excluded).
TILE_RESOURCE: dict[TileType, ResourceType] = {
    TileType.FOREST: ResourceType.WOOD,
    TileType.PASTURE: ResourceType.SHEEP,
    TileType.FIELDS: ResourceType.WHEAT,
    TileType.HILLS: ResourceType.BRICK,
    TileType.MOUNTAINS: ResourceType.ORE,
}


class SettlementType(enum.StrEnum):
    """Village or upgraded city."""

    VILLAGE = 'village'
    CITY = 'city'


# Resource cards produced per triggered tile for each settlement type.
SETTLEMENT_YIELD: dict[SettlementType, int] = {
    SettlementType.VILLAGE: 1,
    SettlementType.CITY: 2,
}


class Settlement(pydantic.BaseModel):
    """A village or city placed on a slot."""

    owner: int  # player_index
    settlement_type: SettlementType = SettlementType.VILLAGE


class Slot(pydantic.BaseModel):
    """An intersection where a settlement can be placed."""

    slot_id: int
    settlement: Settlement | None = None


class Edge(pydantic.BaseModel):
    """A road position connecting exactly two slots."""

    edge_id: int
    slot_ids: tuple[int, int]
    road_owner: int | None = None


class Tile(pydantic.BaseModel):
    """A terrain tile with its trigger number and adjacent slots."""

    tile_type: TileType
    number: int | None = None  # None for desert
    slot_ids: list[int] = pydantic.Field(default_factory=list)

    @property
    def resource(self) -> ResourceType | None:
        """The resource this tile produces, or None for the desert."""
        return TILE_RESOURCE.get(self.tile_type)


class Board(pydantic.BaseModel):
    """Tiles, slots, and edges of a game board plus the robber position."""

    tiles: list[Tile]
    slots: list[Slot]
    edges: list[Edge]
    robber_tile_index: int | None = None

    def tiles_triggered_by(self, dice_value: int) -> list[Tile]:
        """Return the producing tiles whose number matches *dice_value*.

        Robber rule: the tile currently holding the robber is left out even
        when its number matches, so its settlements receive nothing for
        that roll.  Production for any dice value therefore covers every
        matching tile except the robbed one.
        """
        return [
            tile
            for i, tile in enumerate(self.tiles)
            if tile.number == dice_value
            and tile.resource is not None
            and i != self.robber_tile_index
        ]

    def settlements_on(self, tile: Tile) -> Iterator[Settlement]:
        """Yield the settlements on the slots adjacent to *tile*."""
        for slot_id in tile.slot_ids:
            settlement = self.slots[slot_id].settlement
            if settlement is not None:
                yield settlement

    def owners_on_tile(self, tile_index: int) -> list[int]:
        """Return the distinct settlement owners around a tile, in slot order."""
        owners: list[int] = []
        for settlement in self.settlements_on(self.tiles[tile_index]):
            if settlement.owner not in owners:
                owners.append(settlement.owner)
        return owners

    def edges_at(self, slot_id: int) -> list[Edge]:
        """Return every edge touching *slot_id*."""
        return [e for e in self.edges if slot_id in e.slot_ids]

    def neighbours_of(self, slot_id: int) -> list[int]:
        """Return the slots one edge away from *slot_id*."""
        result: list[int] = []
        for edge in self.edges_at(slot_id):
            a, b = edge.slot_ids
            result.append(b if a == slot_id else a)
        return result
