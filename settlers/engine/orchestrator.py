"""Turn orchestrator.

Drives every player agent through the game: opening placement, dice rolls,
production, the regular turn, sequential trade offers, the robber
sub-protocol, and victory evaluation.

Exactly one agent is active while play waits for an action; the
:meth:`GameOrchestrator.active_player` context manager owns that slot.
Everything runs on one event loop and all world-state mutation happens
between two awaits, so the game data needs no locking.
"""

from __future__ import annotations

import contextlib
import logging
import random
from collections.abc import Callable, Iterator, Sequence

import pydantic

from .. import config as config_module
from ..models import actions, board, events, game_state, player
from . import agent as agent_module
from . import dice, errors, handlers, rules, trade

logger = logging.getLogger(__name__)

Listener = Callable[[events.GameEvent], None]
# Returns the longest road holder, or None when nobody holds it.
LongestRoadSource = Callable[[Sequence[player.Player]], player.Player | None]


def no_longest_road(players: Sequence[player.Player]) -> player.Player | None:
    """Longest road source used until a road-length computation is supplied."""
    return None


class GameOrchestrator:
    """The turn state machine for one game."""

    def __init__(
        self,
        state: game_state.WorldState,
        agents: Sequence[agent_module.PlayerAgent] | None = None,
        *,
        config: config_module.GameConfig | None = None,
        dice_source: dice.DiceSource | None = None,
        card_source: dice.CardSource | None = None,
        longest_road: LongestRoadSource | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.state = state
        self.config = config or config_module.GameConfig()
        self._rng = rng or random.Random()
        self._dice = dice_source or dice.make_dice(
            self.config.number_of_dice, self.config.dice_sides, self._rng
        )
        self._cards = card_source or dice.make_card_deck(self._rng)
        self._longest_road = longest_road or no_longest_road
        self._agents: dict[int, agent_module.PlayerAgent] = {
            a.player_index: a for a in agents or ()
        }
        self._active: agent_module.PlayerAgent | None = None
        self._listeners: list[Listener] = []
        self._started = False
        self.init_player_agents()

    # ------------------------------------------------------------------
    # Agents and observers
    # ------------------------------------------------------------------

    def init_player_agents(self) -> None:
        """Create an agent for every seated player that has none.

        Raises:
            errors.SetupError: If a supplied agent does not own the seated
                player object, or belongs to nobody at the table.
        """
        seated = {p.player_index for p in self.state.players}
        for index in self._agents:
            if index not in seated:
                raise errors.SetupError(f'Agent for unknown player {index}')
        for p in self.state.players:
            existing = self._agents.get(p.player_index)
            if existing is None:
                self._agents[p.player_index] = agent_module.PlayerAgent(p)
            elif existing.player is not p:
                raise errors.SetupError(
                    f'Agent for player {p.player_index} does not own the seated player'
                )

    @property
    def agents(self) -> list[agent_module.PlayerAgent]:
        """All agents in turn order."""
        return [self._agents[p.player_index] for p in self.state.players]

    def agent_for(self, p: player.Player) -> agent_module.PlayerAgent:
        """Return the agent that owns *p*."""
        return self._agents[p.player_index]

    @property
    def active_agent(self) -> agent_module.PlayerAgent | None:
        """The agent currently allowed to act, if any."""
        return self._active

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for game events; return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: events.GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _set_active(self, agent: agent_module.PlayerAgent | None) -> None:
        if agent is self._active:
            return
        self._active = agent
        self._emit(
            events.ActivePlayerChanged(
                player_index=None if agent is None else agent.player_index
            )
        )

    @contextlib.contextmanager
    def active_player(
        self, agent: agent_module.PlayerAgent
    ) -> Iterator[agent_module.PlayerAgent]:
        """Make *agent* the active agent for the duration of the block.

        A previously active agent is idled while the block runs and becomes
        active again afterwards.  On every exit path *agent* is idled.
        """
        previous = self._active
        if previous is not None and previous is not agent:
            previous.set_objective(game_state.Objective.IDLE)
        self._set_active(agent)
        try:
            yield agent
        finally:
            agent.set_objective(game_state.Objective.IDLE)
            self._set_active(previous)

    # ------------------------------------------------------------------
    # Suppliers
    # ------------------------------------------------------------------

    def cast_dice(self) -> int:
        """Roll the dice, record the value on the world state, and return it."""
        value = self._dice()
        self.state.current_dice_roll = value
        self.state.dice_roll_history.append(value)
        return value

    def draw_development_card(self) -> player.DevCardType:
        """Draw the next development card from the card source."""
        return self._cards()

    # ------------------------------------------------------------------
    # Victory
    # ------------------------------------------------------------------

    def compute_winners(self) -> list[player.Player]:
        """Return every player at or above the victory target, in turn order.

        Raises:
            errors.SetupError: If no players are seated.
        """
        if not self.state.players:
            raise errors.SetupError('Cannot evaluate victory without players')
        holder = self._longest_road(self.state.players)
        return rules.compute_winners(
            self.state.players,
            self.config,
            None if holder is None else holder.player_index,
        )

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    async def run_game(self) -> list[player.Player]:
        """Play the game to the end and return the winners.

        Raises:
            errors.SetupError: If fewer than ``config.min_players`` are seated
                or the game was already started.
        """
        if self._started:
            raise errors.SetupError('Game already started')
        if len(self.state.players) < self.config.min_players:
            raise errors.SetupError(
                f'Not enough players: {len(self.state.players)} seated, '
                f'{self.config.min_players} required'
            )
        self._started = True
        logger.info('Starting game with %d players', len(self.state.players))

        await self._opening_round()
        self.state.round_counter = 1

        winners = self.compute_winners()
        while not winners:
            if (
                self.config.max_rounds is not None
                and self.state.round_counter > self.config.max_rounds
            ):
                logger.info('Round limit %d reached', self.config.max_rounds)
                break
            for p in self.state.players:
                await self._play_turn(self.agent_for(p))
            self.state.round_counter += 1
            logger.info('Round %d complete', self.state.round_counter - 1)
            self._emit(events.RoundCompleted(round_counter=self.state.round_counter))
            winners = self.compute_winners()

        if winners:
            self.state.winner_index = winners[0].player_index
            logger.info(
                'Game over after %d rounds; winners: %s',
                self.state.round_counter - 1,
                ', '.join(w.name for w in winners),
            )
        self._emit(events.GameOver(winner_indices=[w.player_index for w in winners]))
        return winners

    async def _opening_round(self) -> None:
        """Each player places one village and one road, ``opening_rounds`` times."""
        for _ in range(self.config.opening_rounds):
            for p in self.state.players:
                agent = self.agent_for(p)
                with self.active_player(agent):
                    await self._await_completed(
                        agent, game_state.Objective.PLACE_VILLAGE
                    )
                    await self._await_completed(agent, game_state.Objective.PLACE_ROAD)

    async def _play_turn(self, agent: agent_module.PlayerAgent) -> None:
        with self.active_player(agent):
            logger.info(
                'Round %d: %s to move', self.state.round_counter, agent.player.name
            )
            await self._await_completed(agent, game_state.Objective.DICE_ROLL)
            value = self.state.current_dice_roll
            assert value is not None
            if value == self.config.robber_roll:
                await self._dice_roll_seven(agent)
            else:
                self.distribute_resources(value)
            await self._regular_turn(agent)

    async def _regular_turn(self, agent: agent_module.PlayerAgent) -> None:
        """Apply in-turn actions until the active player ends the turn."""
        while True:
            action = await self._await_completed(
                agent, game_state.Objective.REGULAR_TURN
            )
            if isinstance(action, actions.EndTurn):
                return

    async def _await_completed(
        self, agent: agent_module.PlayerAgent, objective: game_state.Objective
    ) -> actions.BaseAction:
        """Request actions for *objective* until one is applied successfully."""
        while True:
            action = await agent.wait_for_next_action(objective)
            try:
                await self._dispatch(agent, action)
            except errors.IllegalActionError as exc:
                logger.warning(
                    'Player %d: %s rejected: %s',
                    agent.player_index,
                    type(action).__name__,
                    exc,
                )
                continue
            return action

    async def _dispatch(
        self, agent: agent_module.PlayerAgent, action: actions.BaseAction
    ) -> None:
        """Apply *action* for *agent* according to its type."""
        p = agent.player
        opening = self.state.round_counter == 0
        if isinstance(action, actions.RollDice):
            value = self.cast_dice()
            logger.info('%s rolled %d', p.name, value)
            self._emit(events.DiceRolled(player_index=p.player_index, value=value))
        elif isinstance(action, actions.EndTurn):
            handlers.end_turn(p)
        elif isinstance(action, actions.PlaceVillage):
            handlers.place_village(self.state, p, action.slot_id, free=opening)
        elif isinstance(action, actions.PlaceRoad):
            handlers.place_road(self.state, p, action.edge_id, free=opening)
        elif isinstance(action, actions.PlaceCity):
            handlers.place_city(self.state, p, action.slot_id)
        elif isinstance(action, actions.BuyDevelopmentCard):
            handlers.buy_development_card(p, self.draw_development_card)
        elif isinstance(action, actions.PlayKnight):
            handlers.play_knight(p)
            await self._move_robber(agent)
        elif isinstance(action, actions.OfferTrade):
            await self.offer_trade(p, action.offering, action.requesting)
        elif isinstance(action, actions.TradeWithBank):
            handlers.trade_with_bank(
                p, action.giving, action.receiving, self.config.bank_trade_ratio
            )
        elif isinstance(action, actions.SelectRobberTile):
            handlers.move_robber(self.state, action.tile_index)
            logger.info('%s moved the robber to tile %d', p.name, action.tile_index)
        elif isinstance(action, actions.SelectCardToSteal):
            stolen = handlers.steal_card(
                self.state, p, action.target_player_index, self._rng
            )
            if stolen is not None:
                logger.info(
                    '%s stole a card from player %d', p.name, action.target_player_index
                )
        elif isinstance(action, actions.DropCards):
            handlers.drop_cards(p, action.resources, rules.discard_count(p))
        else:
            raise errors.ProtocolViolation(
                f'{type(action).__name__} cannot be applied outside its sub-protocol'
            )

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    async def offer_trade(
        self,
        offering_player: player.Player,
        offering: dict[str, int],
        requesting: dict[str, int],
    ) -> player.Player | None:
        """Offer a trade to every other player in turn order until one accepts.

        Returns the accepting player, or None if everybody declined.

        Raises:
            errors.IllegalActionError: If the offer is malformed or the
                offerer does not hold the offered resources.
        """
        try:
            offer = trade.TradeOffer(
                offering_player=offering_player.player_index,
                offering=offering,
                requesting=requesting,
            )
        except pydantic.ValidationError as exc:
            raise errors.IllegalActionError(f'Malformed trade offer: {exc}') from exc

        offering_player = self.state.player(offering_player.player_index)
        accepted_by: player.Player | None = None
        with self.active_player(self.agent_for(offering_player)):
            ok, reason = trade.validate_offer(offering_player, offer)
            if not ok:
                raise errors.IllegalActionError(reason)
            logger.info(
                '%s offers %s for %s',
                offering_player.name,
                offer.offering,
                offer.requesting,
            )
            for candidate in self.state.players:
                if candidate.player_index == offering_player.player_index:
                    continue
                if await self._ask_to_accept(candidate, offering_player, offer):
                    accepted_by = candidate
                    break

        self._emit(
            events.TradeResolved(
                offering_player=offering_player.player_index,
                accepted_by=None if accepted_by is None else accepted_by.player_index,
            )
        )
        return accepted_by

    async def _ask_to_accept(
        self,
        candidate: player.Player,
        offerer: player.Player,
        offer: trade.TradeOffer,
    ) -> bool:
        """Show *offer* to *candidate*; return True if the exchange happened."""
        agent = self.agent_for(candidate)
        with self.active_player(agent):
            agent.set_objective(game_state.Objective.ACCEPT_TRADE)
            agent.set_trade_offer(offer)
            try:
                response = await agent.wait_for_next_action()
                if not isinstance(response, actions.AcceptTrade):
                    logger.info('%s declined the trade', candidate.name)
                    return False
                trade.execute_trade(offerer, candidate, offer)
            except errors.RejectedTransferError as exc:
                logger.warning('Trade voided: %s', exc)
                return False
            finally:
                agent.clear_trade_offer()
        logger.info('%s accepted the trade', candidate.name)
        return True

    # ------------------------------------------------------------------
    # Robber
    # ------------------------------------------------------------------

    async def _dice_roll_seven(self, agent: agent_module.PlayerAgent) -> None:
        """Run discards for over-limit players, then move the robber and steal.

        The rolling agent stays registered and becomes active again once the
        discards are done.
        """
        for p in self.state.players:
            if p is agent.player and not self.config.active_player_discards:
                continue
            if not rules.must_discard(p, self.config.discard_threshold):
                continue
            discarding = self.agent_for(p)
            with self.active_player(discarding):
                before = p.resources.total()
                required = rules.discard_count(p)
                await self._await_completed(
                    discarding, game_state.Objective.DROP_CARDS
                )
                after = p.resources.total()
                if after != before - required:
                    raise errors.ProtocolViolation(
                        f'Player {p.player_index} holds {after} cards after '
                        f'discarding; expected {before - required}'
                    )
                logger.info('%s discarded %d cards', p.name, required)

        await self._move_robber(agent)

    async def _move_robber(self, agent: agent_module.PlayerAgent) -> None:
        await self._await_completed(agent, game_state.Objective.SELECT_ROBBER_TILE)
        await self._await_completed(agent, game_state.Objective.SELECT_CARD_TO_STEAL)

    # ------------------------------------------------------------------
    # Production
    # ------------------------------------------------------------------

    def distribute_resources(self, dice_value: int) -> dict[int, player.Resources]:
        """Grant production for *dice_value* and return the grants per player.

        Each settlement around a triggered tile yields 1 (village) or 2
        (city) of the tile's resource to its owner.
        """
        grants: dict[int, player.Resources] = {}
        for tile in self.state.board.tiles_triggered_by(dice_value):
            self._distribute_resources_on_tile(tile, grants)
        if grants:
            logger.info(
                'Roll %d produced %s',
                dice_value,
                {i: r.to_dict() for i, r in grants.items()},
            )
        return grants

    def _distribute_resources_on_tile(
        self, tile: board.Tile, grants: dict[int, player.Resources]
    ) -> None:
        resource = tile.resource
        if resource is None:
            return
        for settlement in self.state.board.settlements_on(tile):
            amount = board.SETTLEMENT_YIELD[settlement.settlement_type]
            self.state.player(settlement.owner).grant(resource, amount)
            so_far = grants.get(settlement.owner, player.Resources())
            grants[settlement.owner] = so_far.with_resource(
                resource, so_far.get(resource) + amount
            )
