"""Stateful owner of a single event deck.

DeckEngine holds the current DeckState and is the only mutation path for it.
Presentation code calls one action method per user command and then reads
the state back through the read-only properties or ``snapshot()``.
"""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import TYPE_CHECKING

from event_deck.actions import (
    Action,
    DiscardCurrent,
    DiscardHeld,
    Draw,
    HoldCurrent,
    PlayHeld,
    Reset,
)
from event_deck.catalog import load_catalog
from event_deck.executor import apply_action
from event_deck.state import DeckPhase, DeckState, create_initial_state

if TYPE_CHECKING:
    from event_deck.cards import Card

logger = logging.getLogger(__name__)


class DeckEngine:
    """Owns the catalog, draw pile, discard pile, hold slots and current card."""

    def __init__(self, catalog: tuple[Card, ...] | list[Card], rng: random.Random | None = None):
        """Initialize the engine with a freshly shuffled deck.

        Args:
            catalog: Every card for the session; never modified afterwards.
            rng: Random source for shuffles. Leave unset outside of tests.
        """
        self._rng = rng or random.Random()
        self._state = create_initial_state(catalog, self._rng)
        self._state.check_invariants()
        logger.info(f"Deck engine ready with {len(self._state.catalog)} cards")

    @classmethod
    def from_source(cls, source: str | Path, rng: random.Random | None = None) -> DeckEngine:
        """Load a catalog from a path or URL and build an engine from it.

        Raises:
            CatalogLoadError: If the catalog cannot be loaded. No engine is built.
        """
        return cls(load_catalog(source), rng=rng)

    def apply(self, action: Action) -> DeckState:
        """Apply an action, verify invariants, and return the new state."""
        new_state = apply_action(self._state, action, self._rng)
        new_state.check_invariants()
        self._state = new_state
        return new_state

    def draw(self) -> DeckState:
        return self.apply(Draw())

    def hold_current(self) -> DeckState:
        return self.apply(HoldCurrent())

    def discard_current(self) -> DeckState:
        return self.apply(DiscardCurrent())

    def discard_held(self, index: int) -> DeckState:
        return self.apply(DiscardHeld(index))

    def play_held(self, index: int) -> DeckState:
        return self.apply(PlayHeld(index))

    def reset(self) -> DeckState:
        """Reshuffle every card not held back into the deck."""
        return self.apply(Reset())

    def snapshot(self) -> DeckState:
        """The current immutable state."""
        return self._state

    @property
    def catalog(self) -> tuple[Card, ...]:
        return self._state.catalog

    @property
    def deck_count(self) -> int:
        return len(self._state.deck)

    @property
    def discard_count(self) -> int:
        return len(self._state.discard)

    @property
    def held(self) -> tuple[Card, ...]:
        return self._state.held

    @property
    def current(self) -> Card | None:
        return self._state.current

    @property
    def pending_reshuffle(self) -> bool:
        return self._state.pending_reshuffle

    @property
    def phase(self) -> DeckPhase:
        return self._state.phase

    @property
    def can_hold(self) -> bool:
        return self._state.can_hold

    @property
    def hold_blocked_reason(self) -> str | None:
        return self._state.hold_blocked_reason
