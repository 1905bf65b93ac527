"""Player action types for the event deck."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto


class ActionType(IntEnum):
    """Type of action."""

    DRAW = auto()
    HOLD_CURRENT = auto()
    DISCARD_CURRENT = auto()
    DISCARD_HELD = auto()
    PLAY_HELD = auto()  # Effect is resolved at the table; the card is discarded
    RESET = auto()


@dataclass(frozen=True, slots=True)
class Action(ABC):
    """Base class for all actions."""

    @property
    @abstractmethod
    def action_type(self) -> ActionType:
        """The type of this action."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable action description."""
        ...


@dataclass(frozen=True, slots=True)
class Draw(Action):
    """Deal the next card, or run a queued reshuffle."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.DRAW

    def __str__(self) -> str:
        return "Draw"


@dataclass(frozen=True, slots=True)
class HoldCurrent(Action):
    """Move the current card into the hold area."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.HOLD_CURRENT

    def __str__(self) -> str:
        return "Hold current card"


@dataclass(frozen=True, slots=True)
class DiscardCurrent(Action):
    """Move the current card to the discard pile."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.DISCARD_CURRENT

    def __str__(self) -> str:
        return "Discard current card"


@dataclass(frozen=True, slots=True)
class DiscardHeld(Action):
    """Discard the held card at ``index``."""

    index: int

    @property
    def action_type(self) -> ActionType:
        return ActionType.DISCARD_HELD

    def __str__(self) -> str:
        return f"Discard held card {self.index}"


@dataclass(frozen=True, slots=True)
class PlayHeld(Action):
    """Play the held card at ``index``.

    The engine does not interpret effects, so playing moves the card to the
    discard pile exactly like DiscardHeld.
    """

    index: int

    @property
    def action_type(self) -> ActionType:
        return ActionType.PLAY_HELD

    def __str__(self) -> str:
        return f"Play held card {self.index}"


@dataclass(frozen=True, slots=True)
class Reset(Action):
    """Rebuild the deck from every card not held."""

    @property
    def action_type(self) -> ActionType:
        return ActionType.RESET

    def __str__(self) -> str:
        return "Reset deck"
