"""Immutable deck state models."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum, auto

from event_deck.cards import HOLD_LIMIT, Card, shuffle_cards

RESHUFFLE_NOTICE = "Reshuffle is queued. Next draw resets the deck (held cards stay out)."
HOLD_FULL_WARNING = "Hold is full. Discard/play a held card to make room."


class DeckPhase(IntEnum):
    """Where the draw cycle currently stands."""

    EMPTY = auto()  # Nothing drawn; next draw deals a card
    HAS_CURRENT = auto()  # A card is showing; next draw auto-discards it first
    RESHUFFLE_PENDING = auto()  # A reshuffle card was drawn; next draw resets the deck


class InvariantViolation(AssertionError):
    """Raised when the deck state breaks one of its structural rules."""


@dataclass(frozen=True, slots=True)
class DeckState:
    """Complete immutable state of the event deck.

    Attributes:
        catalog: Every card that exists, in load order
        deck: Draw pile; cards are dealt from the front
        discard: Discarded cards in the order they were discarded
        held: Cards set aside by the player, at most HOLD_LIMIT
        current: The most recently drawn card, if not yet discarded or held
        pending_reshuffle: The next draw resets the deck instead of dealing
    """

    catalog: tuple[Card, ...]
    deck: tuple[Card, ...] = ()
    discard: tuple[Card, ...] = ()
    held: tuple[Card, ...] = ()
    current: Card | None = None
    pending_reshuffle: bool = False

    @property
    def phase(self) -> DeckPhase:
        if self.pending_reshuffle:
            return DeckPhase.RESHUFFLE_PENDING
        if self.current is not None:
            return DeckPhase.HAS_CURRENT
        return DeckPhase.EMPTY

    @property
    def reshuffle_pool(self) -> tuple[Card, ...]:
        """Catalog cards not currently held, in catalog order.

        Each held card removes exactly one matching catalog entry.
        """
        remaining_held = Counter(self.held)
        pool = []
        for card in self.catalog:
            if remaining_held[card] > 0:
                remaining_held[card] -= 1
                continue
            pool.append(card)
        return tuple(pool)

    @property
    def hold_is_full(self) -> bool:
        return len(self.held) >= HOLD_LIMIT

    @property
    def can_hold(self) -> bool:
        """Whether the current card can be moved into the hold area."""
        return self.current is not None and self.current.is_holdable and not self.hold_is_full

    @property
    def hold_blocked_reason(self) -> str | None:
        """Why the current card cannot be held, or None if it can (or none is showing)."""
        if self.current is None:
            return None
        if not self.current.is_holdable:
            return "Only Hold-timing cards can be held."
        if self.hold_is_full:
            return "Hold is full."
        return None

    @property
    def notices(self) -> list[str]:
        """Banner messages the player should see for this state."""
        notices = []
        if self.pending_reshuffle:
            notices.append(RESHUFFLE_NOTICE)
        if self.hold_is_full:
            notices.append(HOLD_FULL_WARNING)
        return notices

    def check_invariants(self) -> None:
        """Verify the partition, capacity, and holdability rules.

        Raises:
            InvariantViolation: If any rule is broken.
        """
        if len(self.held) > HOLD_LIMIT:
            raise InvariantViolation(f"Hold has {len(self.held)} cards (limit {HOLD_LIMIT})")

        for card in self.held:
            if not card.is_holdable:
                raise InvariantViolation(f"Non-holdable card {card.id} is in hold")

        in_play = Counter(self.deck) + Counter(self.discard) + Counter(self.held)
        if self.current is not None:
            in_play[self.current] += 1
        if in_play != Counter(self.catalog):
            missing = Counter(self.catalog) - in_play
            extra = in_play - Counter(self.catalog)
            raise InvariantViolation(
                f"Cards out of partition: missing={[c.id for c in missing.elements()]} "
                f"extra={[c.id for c in extra.elements()]}"
            )

    def with_deck(self, deck: tuple[Card, ...]) -> DeckState:
        """Return new state with updated draw pile."""
        return DeckState(
            catalog=self.catalog,
            deck=deck,
            discard=self.discard,
            held=self.held,
            current=self.current,
            pending_reshuffle=self.pending_reshuffle,
        )

    def with_discard(self, discard: tuple[Card, ...]) -> DeckState:
        """Return new state with updated discard pile."""
        return DeckState(
            catalog=self.catalog,
            deck=self.deck,
            discard=discard,
            held=self.held,
            current=self.current,
            pending_reshuffle=self.pending_reshuffle,
        )

    def with_held(self, held: tuple[Card, ...]) -> DeckState:
        """Return new state with updated hold slots."""
        return DeckState(
            catalog=self.catalog,
            deck=self.deck,
            discard=self.discard,
            held=held,
            current=self.current,
            pending_reshuffle=self.pending_reshuffle,
        )

    def with_current(self, current: Card | None) -> DeckState:
        """Return new state with updated current card."""
        return DeckState(
            catalog=self.catalog,
            deck=self.deck,
            discard=self.discard,
            held=self.held,
            current=current,
            pending_reshuffle=self.pending_reshuffle,
        )

    def with_pending_reshuffle(self, pending_reshuffle: bool) -> DeckState:
        """Return new state with the reshuffle flag set or cleared."""
        return DeckState(
            catalog=self.catalog,
            deck=self.deck,
            discard=self.discard,
            held=self.held,
            current=self.current,
            pending_reshuffle=pending_reshuffle,
        )


def reset_keep_held(state: DeckState, rng: random.Random | None = None) -> DeckState:
    """Rebuild the deck from the reshuffle pool, leaving held cards alone.

    The discard pile is emptied, the current card is cleared, and any queued
    reshuffle is consumed.
    """
    return DeckState(
        catalog=state.catalog,
        deck=shuffle_cards(state.reshuffle_pool, rng),
        discard=(),
        held=state.held,
        current=None,
        pending_reshuffle=False,
    )


def create_initial_state(catalog: tuple[Card, ...] | list[Card], rng: random.Random | None = None) -> DeckState:
    """Create the starting state: every card shuffled into the deck.

    Args:
        catalog: All cards for the session.
        rng: Random source for the shuffle. Defaults to a fresh unseeded one.

    Returns:
        Initial deck state with nothing drawn or held.
    """
    return reset_keep_held(DeckState(catalog=tuple(catalog)), rng)
