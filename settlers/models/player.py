"""Player data models.

A player's hand is a pair of small count models: :class:`Resources` for
resource cards and :class:`DevCardHand` for development cards.  Both are
treated as values; every operation returns a new object, and the owning
:class:`Player` swaps its field.
"""

from __future__ import annotations

import enum

import pydantic

from .board import ResourceType


class DevCardType(enum.StrEnum):
    """Development card types."""

    KNIGHT = 'knight'
    ROAD_BUILDING = 'road_building'
    YEAR_OF_PLENTY = 'year_of_plenty'
    MONOPOLY = 'monopoly'
    VICTORY_POINT = 'victory_point'


# Cards in a fresh deck, 25 in all.
DEV_CARD_COUNTS: dict[DevCardType, int] = {
    DevCardType.KNIGHT: 14,
    DevCardType.ROAD_BUILDING: 2,
    DevCardType.YEAR_OF_PLENTY: 2,
    DevCardType.MONOPOLY: 2,
    DevCardType.VICTORY_POINT: 5,
}

# Prices, keyed by resource name.
ROAD_COST: dict[str, int] = {'wood': 1, 'brick': 1}
VILLAGE_COST: dict[str, int] = {'wood': 1, 'brick': 1, 'wheat': 1, 'sheep': 1}
CITY_COST: dict[str, int] = {'wheat': 2, 'ore': 3}
DEV_CARD_COST: dict[str, int] = {'wheat': 1, 'sheep': 1, 'ore': 1}


class Resources(pydantic.BaseModel):
    """Resource cards in one hand, one count per resource type."""

    wood: int = 0
    brick: int = 0
    wheat: int = 0
    sheep: int = 0
    ore: int = 0

    @classmethod
    def from_dict(cls, resource_dict: dict[str, int]) -> Resources:
        """Build Resources from a name-to-count mapping; non-positive counts drop."""
        return cls(**{k: v for k, v in resource_dict.items() if v > 0})

    def to_dict(self) -> dict[str, int]:
        """Return the non-zero counts keyed by resource name."""
        return {r.value: self.get(r) for r in ResourceType if self.get(r)}

    def get(self, resource_type: ResourceType) -> int:
        return getattr(self, resource_type.value)

    def total(self) -> int:
        """Number of cards in the hand."""
        return sum(self.get(r) for r in ResourceType)

    def can_afford(self, cost: dict[str, int]) -> bool:
        """Return True if the hand covers every entry of *cost*.

        Names that are not resources count as zero held.
        """
        return all(getattr(self, name, 0) >= amount for name, amount in cost.items())

    def subtract(self, cost: dict[str, int]) -> Resources:
        """Return the hand minus *cost*; sufficiency is the caller's check."""
        return Resources(
            **{r.value: self.get(r) - cost.get(r.value, 0) for r in ResourceType}
        )

    def add(self, other: Resources) -> Resources:
        return Resources(**{r.value: self.get(r) + other.get(r) for r in ResourceType})

    def with_resource(self, resource_type: ResourceType, amount: int) -> Resources:
        """Return a copy with the count of *resource_type* set to *amount*."""
        return self.model_copy(update={resource_type.value: amount})

    def cards(self) -> list[ResourceType]:
        """Return the hand as a flat list of cards, one entry per card."""
        pool: list[ResourceType] = []
        for resource_type in ResourceType:
            pool.extend([resource_type] * self.get(resource_type))
        return pool


class DevCardHand(pydantic.BaseModel):
    """Development cards in one hand."""

    knight: int = 0
    road_building: int = 0
    year_of_plenty: int = 0
    monopoly: int = 0
    victory_point: int = 0

    def get(self, card_type: DevCardType) -> int:
        return getattr(self, card_type.value)

    def total(self) -> int:
        return sum(self.get(c) for c in DevCardType)

    def add(self, card_type: DevCardType, count: int = 1) -> DevCardHand:
        """Return a copy holding *count* more cards of *card_type*."""
        return self.model_copy(update={card_type.value: self.get(card_type) + count})

    def remove(self, card_type: DevCardType, count: int = 1) -> DevCardHand:
        """Return a copy holding *count* fewer cards of *card_type*."""
        return self.add(card_type, -count)


class BuildInventory(pydantic.BaseModel):
    """Pieces still in the player's supply."""

    villages_remaining: int = 5
    cities_remaining: int = 4
    roads_remaining: int = 15


class Player(pydantic.BaseModel):
    """One seat at the table.

    ``victory_points`` counts buildings and victory point cards; the largest
    army and longest road bonuses are added when victory is evaluated.
    """

    player_index: int  # position in turn order
    name: str
    is_ai: bool = False
    resources: Resources = pydantic.Field(default_factory=Resources)
    dev_cards: DevCardHand = pydantic.Field(default_factory=DevCardHand)
    # Bought this turn; playable once the turn ends.
    new_dev_cards: DevCardHand = pydantic.Field(default_factory=DevCardHand)
    build_inventory: BuildInventory = pydantic.Field(default_factory=BuildInventory)
    victory_points: int = 0
    knights_played: int = 0

    def grant(self, resource_type: ResourceType, amount: int) -> None:
        """Add *amount* cards of *resource_type* to the hand."""
        current = self.resources.get(resource_type)
        self.resources = self.resources.with_resource(resource_type, current + amount)
