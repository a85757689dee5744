"""Unit tests for trade validation and execution."""

from __future__ import annotations

import unittest

import pydantic

from settlers.engine import errors, trade
from settlers.models import player
from settlers.models.board import ResourceType


def _make_player(index: int, **resources: int) -> player.Player:
    return player.Player(
        player_index=index,
        name=f'P{index}',
        resources=player.Resources(**resources),
    )


def _offer(offering: dict[str, int], requesting: dict[str, int]) -> trade.TradeOffer:
    return trade.TradeOffer(offering_player=0, offering=offering, requesting=requesting)


class TestTradeOffer(unittest.TestCase):
    """Tests for TradeOffer validation."""

    def test_zero_entries_dropped(self) -> None:
        """Zero quantities are removed."""
        offer = _offer({'wood': 1, 'ore': 0}, {'brick': 1})
        self.assertEqual(offer.offering, {'wood': 1})

    def test_unknown_resource_rejected(self) -> None:
        """A name that is not a resource fails validation."""
        with self.assertRaises(pydantic.ValidationError):
            _offer({'gold': 1}, {'brick': 1})

    def test_negative_quantity_rejected(self) -> None:
        """Negative quantities fail validation."""
        with self.assertRaises(pydantic.ValidationError):
            _offer({'wood': -1}, {'brick': 1})


class TestValidateOffer(unittest.TestCase):
    """Tests for validate_offer."""

    def test_valid(self) -> None:
        """An affordable, non-empty offer passes."""
        ok, reason = trade.validate_offer(
            _make_player(0, wood=1), _offer({'wood': 1}, {'brick': 1})
        )
        self.assertTrue(ok)
        self.assertEqual(reason, '')

    def test_empty_offer(self) -> None:
        """An offer with nothing on either side fails."""
        ok, _ = trade.validate_offer(_make_player(0), _offer({}, {}))
        self.assertFalse(ok)

    def test_unaffordable_offer(self) -> None:
        """The offerer must hold what is offered."""
        ok, reason = trade.validate_offer(
            _make_player(0), _offer({'wood': 1}, {'brick': 1})
        )
        self.assertFalse(ok)
        self.assertIn('Insufficient', reason)


class TestExecuteTrade(unittest.TestCase):
    """Tests for execute_trade."""

    def test_exchange_conserves_resources(self) -> None:
        """Each side gives its part and the combined hand is unchanged."""
        offerer = _make_player(0, wood=2)
        accepter = _make_player(1, brick=1, ore=3)
        trade.execute_trade(offerer, accepter, _offer({'wood': 2}, {'brick': 1}))

        self.assertEqual(offerer.resources, player.Resources(brick=1))
        self.assertEqual(accepter.resources, player.Resources(wood=2, ore=3))

    def test_accepter_short_leaves_both_unchanged(self) -> None:
        """A short accepter voids the trade without touching either hand."""
        offerer = _make_player(0, wood=1)
        accepter = _make_player(1)
        with self.assertRaises(errors.RejectedTransferError):
            trade.execute_trade(offerer, accepter, _offer({'wood': 1}, {'brick': 1}))
        self.assertEqual(offerer.resources, player.Resources(wood=1))
        self.assertEqual(accepter.resources, player.Resources())

    def test_offerer_short_leaves_both_unchanged(self) -> None:
        """An offerer who no longer holds the goods voids the trade."""
        offerer = _make_player(0)
        accepter = _make_player(1, brick=1)
        with self.assertRaises(errors.RejectedTransferError):
            trade.execute_trade(offerer, accepter, _offer({'wood': 1}, {'brick': 1}))
        self.assertEqual(accepter.resources, player.Resources(brick=1))


class TestBankTrade(unittest.TestCase):
    """Tests for bank trades."""

    def test_four_for_one(self) -> None:
        """Four of one resource buy one of another."""
        p = _make_player(0, wheat=5)
        ok, _ = trade.can_bank_trade(p, ResourceType.WHEAT, ResourceType.ORE)
        self.assertTrue(ok)
        trade.apply_bank_trade(p, ResourceType.WHEAT, ResourceType.ORE)
        self.assertEqual(p.resources, player.Resources(wheat=1, ore=1))

    def test_too_few_cards(self) -> None:
        """Fewer cards than the ratio is rejected."""
        p = _make_player(0, wheat=3)
        ok, _ = trade.can_bank_trade(p, ResourceType.WHEAT, ResourceType.ORE)
        self.assertFalse(ok)

    def test_same_resource(self) -> None:
        """A resource cannot be traded for itself."""
        p = _make_player(0, wheat=4)
        ok, _ = trade.can_bank_trade(p, ResourceType.WHEAT, ResourceType.WHEAT)
        self.assertFalse(ok)


if __name__ == '__main__':
    unittest.main()
