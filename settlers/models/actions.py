"""Pydantic action schemas for every decision a player agent can return.

Each action subclass carries the data needed to apply it to a WorldState.
``ALLOWED_ACTIONS`` lists which actions answer which objective.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal

import pydantic

from .board import ResourceType
from .game_state import Objective


class ActionType(enum.StrEnum):
    """Discriminator values for every action type."""

    ROLL_DICE = 'roll_dice'
    END_TURN = 'end_turn'
    PLACE_VILLAGE = 'place_village'
    PLACE_ROAD = 'place_road'
    PLACE_CITY = 'place_city'
    BUY_DEVELOPMENT_CARD = 'buy_development_card'
    PLAY_KNIGHT = 'play_knight'
    OFFER_TRADE = 'offer_trade'
    TRADE_WITH_BANK = 'trade_with_bank'
    ACCEPT_TRADE = 'accept_trade'
    DECLINE_TRADE = 'decline_trade'
    SELECT_ROBBER_TILE = 'select_robber_tile'
    SELECT_CARD_TO_STEAL = 'select_card_to_steal'
    DROP_CARDS = 'drop_cards'


class BaseAction(pydantic.BaseModel):
    """Base for all actions. Every action identifies its type and acting player."""

    player_index: int


class RollDice(BaseAction):
    """Roll the dice to start a turn."""

    action_type: Literal[ActionType.ROLL_DICE] = ActionType.ROLL_DICE


class EndTurn(BaseAction):
    """End the current player's turn."""

    action_type: Literal[ActionType.END_TURN] = ActionType.END_TURN


class PlaceVillage(BaseAction):
    """Place a village on a slot."""

    action_type: Literal[ActionType.PLACE_VILLAGE] = ActionType.PLACE_VILLAGE
    slot_id: int


class PlaceRoad(BaseAction):
    """Place a road on an edge."""

    action_type: Literal[ActionType.PLACE_ROAD] = ActionType.PLACE_ROAD
    edge_id: int


class PlaceCity(BaseAction):
    """Upgrade an own village to a city."""

    action_type: Literal[ActionType.PLACE_CITY] = ActionType.PLACE_CITY
    slot_id: int


class BuyDevelopmentCard(BaseAction):
    """Purchase one development card."""

    action_type: Literal[ActionType.BUY_DEVELOPMENT_CARD] = (
        ActionType.BUY_DEVELOPMENT_CARD
    )


class PlayKnight(BaseAction):
    """Play a Knight card to move the robber and steal a card."""

    action_type: Literal[ActionType.PLAY_KNIGHT] = ActionType.PLAY_KNIGHT


class OfferTrade(BaseAction):
    """Offer a trade to the other players, one after another."""

    action_type: Literal[ActionType.OFFER_TRADE] = ActionType.OFFER_TRADE
    # Maps resource name → quantity being offered.
    offering: dict[str, int]
    # Maps resource name → quantity being requested in return.
    requesting: dict[str, int]


class TradeWithBank(BaseAction):
    """Trade several of one resource to the bank for one of another."""

    action_type: Literal[ActionType.TRADE_WITH_BANK] = ActionType.TRADE_WITH_BANK
    giving: ResourceType
    receiving: ResourceType


class AcceptTrade(BaseAction):
    """Accept the trade offer attached to this player's agent."""

    action_type: Literal[ActionType.ACCEPT_TRADE] = ActionType.ACCEPT_TRADE


class DeclineTrade(BaseAction):
    """Decline the trade offer attached to this player's agent."""

    action_type: Literal[ActionType.DECLINE_TRADE] = ActionType.DECLINE_TRADE


class SelectRobberTile(BaseAction):
    """Move the robber to a new tile."""

    action_type: Literal[ActionType.SELECT_ROBBER_TILE] = (
        ActionType.SELECT_ROBBER_TILE
    )
    tile_index: int  # index into Board.tiles


class SelectCardToSteal(BaseAction):
    """Choose the player to draw one random card from.

    ``target_player_index`` is None only when nobody around the robber can
    be stolen from.
    """

    action_type: Literal[ActionType.SELECT_CARD_TO_STEAL] = (
        ActionType.SELECT_CARD_TO_STEAL
    )
    target_player_index: int | None = None


class DropCards(BaseAction):
    """Discard half of the hand after a robber roll."""

    action_type: Literal[ActionType.DROP_CARDS] = ActionType.DROP_CARDS
    # Maps resource name → quantity to discard.
    resources: dict[str, int]


# Discriminated union of all action types for deserialization.
Action = Annotated[
    RollDice
    | EndTurn
    | PlaceVillage
    | PlaceRoad
    | PlaceCity
    | BuyDevelopmentCard
    | PlayKnight
    | OfferTrade
    | TradeWithBank
    | AcceptTrade
    | DeclineTrade
    | SelectRobberTile
    | SelectCardToSteal
    | DropCards,
    pydantic.Field(discriminator='action_type'),
]

# Actions that may answer each objective.  IDLE accepts nothing.
ALLOWED_ACTIONS: dict[Objective, tuple[type[BaseAction], ...]] = {
    Objective.IDLE: (),
    Objective.DICE_ROLL: (RollDice,),
    Objective.REGULAR_TURN: (
        EndTurn,
        PlaceVillage,
        PlaceRoad,
        PlaceCity,
        BuyDevelopmentCard,
        PlayKnight,
        OfferTrade,
        TradeWithBank,
    ),
    Objective.PLACE_VILLAGE: (PlaceVillage,),
    Objective.PLACE_ROAD: (PlaceRoad,),
    Objective.ACCEPT_TRADE: (AcceptTrade, DeclineTrade),
    Objective.SELECT_ROBBER_TILE: (SelectRobberTile,),
    Objective.SELECT_CARD_TO_STEAL: (SelectCardToSteal,),
    Objective.DROP_CARDS: (DropCards,),
}
