"""Errors raised by the turn engine."""

from __future__ import annotations


class GameError(Exception):
    """Base class for every engine error."""


class SetupError(GameError):
    """The game cannot start: too few players, no players, or started twice."""


class ProtocolViolation(GameError):
    """An agent broke the objective/action contract.

    Raised when an action does not answer the pending objective, names the
    wrong player, or arrives while no objective is pending.
    """


class RejectedTransferError(GameError):
    """An accepted trade could not be executed because a side lacks resources."""


class IllegalActionError(GameError, ValueError):
    """An action answered its objective but is not legal in the current state."""
