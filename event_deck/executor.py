"""Action execution for the event deck.

Every function here is pure: it takes a DeckState and returns the next one.
Actions that are not currently allowed (holding with nothing showing, an
out-of-range held index, ...) return the state unchanged instead of raising;
the presentation layer is expected to disable those affordances.
"""

from __future__ import annotations

import logging
import random

from event_deck.actions import (
    Action,
    DiscardCurrent,
    DiscardHeld,
    Draw,
    HoldCurrent,
    PlayHeld,
    Reset,
)
from event_deck.cards import HOLD_LIMIT, shuffle_cards
from event_deck.state import DeckPhase, DeckState, reset_keep_held

logger = logging.getLogger(__name__)


class UnknownActionError(Exception):
    """Raised when an action type has no handler."""

    pass


def apply_action(state: DeckState, action: Action, rng: random.Random | None = None) -> DeckState:
    """Apply an action and return the new deck state.

    Args:
        state: Current deck state.
        action: Action to apply.
        rng: Random source for any shuffle the action triggers.

    Returns:
        New deck state (the same object if the action was a no-op).

    Raises:
        UnknownActionError: If the action type is not recognised.
    """
    match action:
        case Draw():
            return _apply_draw(state, rng)
        case HoldCurrent():
            return _apply_hold_current(state)
        case DiscardCurrent():
            return _apply_discard_current(state)
        case DiscardHeld(index=index) | PlayHeld(index=index):
            return _apply_discard_held(state, index)
        case Reset():
            return reset_keep_held(state, rng)
        case _:
            raise UnknownActionError(f"Unknown action type: {type(action)}")


def _apply_draw(state: DeckState, rng: random.Random | None) -> DeckState:
    """Deal the next card.

    A queued reshuffle consumes this draw entirely: the deck is rebuilt and no
    card is dealt until the following draw.
    """
    if state.phase == DeckPhase.RESHUFFLE_PENDING:
        logger.info(f"Queued reshuffle fired; rebuilding deck without {len(state.held)} held card(s)")
        return reset_keep_held(state, rng)

    if state.phase == DeckPhase.HAS_CURRENT:
        state = _apply_discard_current(state)

    state = _ensure_deck_not_empty(state, rng)
    if not state.deck:
        logger.debug("Nothing to draw: reshuffle pool is empty")
        return state

    drawn = state.deck[0]
    new_state = state.with_deck(state.deck[1:]).with_current(drawn)
    logger.debug(f"Drew {drawn.id} ({len(new_state.deck)} left in deck)")

    if drawn.reshuffle:
        logger.info(f"Reshuffle card {drawn.id} drawn; reshuffle queued for next draw")
        new_state = new_state.with_pending_reshuffle(True)

    return new_state


def _ensure_deck_not_empty(state: DeckState, rng: random.Random | None) -> DeckState:
    """Refill an exhausted deck from the full reshuffle pool.

    The discard pile is cleared rather than recycled; the refill always
    regenerates from every card not held, the same as a queued reset.
    """
    if state.deck:
        return state
    logger.info(f"Deck exhausted; refilling from reshuffle pool and clearing {len(state.discard)} discard(s)")
    return state.with_deck(shuffle_cards(state.reshuffle_pool, rng)).with_discard(())


def _apply_hold_current(state: DeckState) -> DeckState:
    """Move the current card into the hold area if allowed."""
    if not state.can_hold:
        logger.debug(f"Hold ignored: {state.hold_blocked_reason or 'no current card'}")
        return state

    assert len(state.held) < HOLD_LIMIT
    return state.with_held(state.held + (state.current,)).with_current(None)


def _apply_discard_current(state: DeckState) -> DeckState:
    """Move the current card to the discard pile."""
    if state.current is None:
        logger.debug("Discard ignored: no current card")
        return state

    return state.with_discard(state.discard + (state.current,)).with_current(None)


def _apply_discard_held(state: DeckState, index: object) -> DeckState:
    """Move the held card at ``index`` to the discard pile."""
    if isinstance(index, bool) or not isinstance(index, int):
        logger.debug(f"Held discard ignored: index {index!r} is not an integer")
        return state
    if not 0 <= index < len(state.held):
        logger.debug(f"Held discard ignored: index {index} out of range ({len(state.held)} held)")
        return state

    card = state.held[index]
    new_held = state.held[:index] + state.held[index + 1 :]
    return state.with_held(new_held).with_discard(state.discard + (card,))
