"""Tests for deck state models."""

import random

import pytest

from event_deck.cards import HOLD_LIMIT, Card
from event_deck.state import (
    HOLD_FULL_WARNING,
    RESHUFFLE_NOTICE,
    DeckPhase,
    DeckState,
    InvariantViolation,
    create_initial_state,
    reset_keep_held,
)


def make_catalog(n: int = 5, holdable: int = 0) -> tuple[Card, ...]:
    return tuple(
        Card(id=f"c{i}", name=f"Card {i}", timing="Hold" if i < holdable else "Immediate")
        for i in range(n)
    )


class TestInitialState:
    def test_initial_state(self):
        catalog = make_catalog(5)
        state = create_initial_state(catalog, random.Random(1))
        assert len(state.deck) == 5
        assert set(state.deck) == set(catalog)
        assert state.discard == ()
        assert state.held == ()
        assert state.current is None
        assert not state.pending_reshuffle
        assert state.phase == DeckPhase.EMPTY
        state.check_invariants()

    def test_catalog_is_kept_in_load_order(self):
        catalog = make_catalog(5)
        state = create_initial_state(list(catalog), random.Random(1))
        assert state.catalog == catalog

    def test_initial_state_deterministic(self):
        catalog = make_catalog(8)
        state1 = create_initial_state(catalog, random.Random(42))
        state2 = create_initial_state(catalog, random.Random(42))
        assert state1.deck == state2.deck

    def test_empty_catalog(self):
        state = create_initial_state((), random.Random(1))
        assert state.deck == ()
        state.check_invariants()


class TestPhase:
    def test_phase_has_current(self):
        catalog = make_catalog(2)
        state = DeckState(catalog=catalog, deck=catalog[1:], current=catalog[0])
        assert state.phase == DeckPhase.HAS_CURRENT

    def test_reshuffle_pending_takes_priority(self):
        catalog = make_catalog(2)
        state = DeckState(catalog=catalog, deck=catalog[1:], current=catalog[0], pending_reshuffle=True)
        assert state.phase == DeckPhase.RESHUFFLE_PENDING


class TestReshufflePool:
    def test_pool_excludes_held(self):
        catalog = make_catalog(5, holdable=2)
        state = DeckState(catalog=catalog, deck=catalog[2:], held=catalog[:2])
        assert state.reshuffle_pool == catalog[2:]

    def test_pool_keeps_catalog_order(self):
        catalog = make_catalog(5, holdable=5)
        state = DeckState(catalog=catalog, deck=(), discard=(catalog[0], catalog[1], catalog[3], catalog[4]), held=(catalog[2],))
        assert state.reshuffle_pool == (catalog[0], catalog[1], catalog[3], catalog[4])

    def test_reset_keeps_held_out_of_deck(self):
        catalog = make_catalog(6, holdable=3)
        state = DeckState(
            catalog=catalog,
            deck=catalog[4:],
            discard=(catalog[2],),
            held=(catalog[0], catalog[1]),
            current=catalog[3],
            pending_reshuffle=True,
        )
        new_state = reset_keep_held(state, random.Random(3))

        assert new_state.held == (catalog[0], catalog[1])
        assert set(new_state.deck) == set(catalog[2:])
        assert not set(new_state.deck) & set(new_state.held)
        assert new_state.discard == ()
        assert new_state.current is None
        assert not new_state.pending_reshuffle
        new_state.check_invariants()


class TestHoldQueries:
    def test_can_hold_holdable_current(self):
        catalog = make_catalog(2, holdable=1)
        state = DeckState(catalog=catalog, deck=catalog[1:], current=catalog[0])
        assert state.can_hold
        assert state.hold_blocked_reason is None

    def test_cannot_hold_immediate_card(self):
        catalog = make_catalog(2)
        state = DeckState(catalog=catalog, deck=catalog[1:], current=catalog[0])
        assert not state.can_hold
        assert state.hold_blocked_reason == "Only Hold-timing cards can be held."

    def test_cannot_hold_when_full(self):
        catalog = make_catalog(HOLD_LIMIT + 1, holdable=HOLD_LIMIT + 1)
        state = DeckState(catalog=catalog, held=catalog[:HOLD_LIMIT], current=catalog[HOLD_LIMIT])
        assert state.hold_is_full
        assert not state.can_hold
        assert state.hold_blocked_reason == "Hold is full."

    def test_no_current(self):
        catalog = make_catalog(2)
        state = DeckState(catalog=catalog, deck=catalog)
        assert not state.can_hold
        assert state.hold_blocked_reason is None


class TestNotices:
    def test_no_notices(self):
        catalog = make_catalog(2)
        assert DeckState(catalog=catalog, deck=catalog).notices == []

    def test_reshuffle_and_full_notices(self):
        catalog = make_catalog(HOLD_LIMIT + 1, holdable=HOLD_LIMIT)
        state = DeckState(
            catalog=catalog,
            held=catalog[:HOLD_LIMIT],
            current=catalog[HOLD_LIMIT],
            pending_reshuffle=True,
        )
        assert state.notices == [RESHUFFLE_NOTICE, HOLD_FULL_WARNING]


class TestInvariants:
    def test_missing_card(self):
        catalog = make_catalog(3)
        state = DeckState(catalog=catalog, deck=catalog[:2])
        with pytest.raises(InvariantViolation, match="missing"):
            state.check_invariants()

    def test_duplicated_card(self):
        catalog = make_catalog(3)
        state = DeckState(catalog=catalog, deck=catalog, discard=(catalog[0],))
        with pytest.raises(InvariantViolation, match="extra"):
            state.check_invariants()

    def test_hold_overflow(self):
        catalog = make_catalog(HOLD_LIMIT + 1, holdable=HOLD_LIMIT + 1)
        state = DeckState(catalog=catalog, held=catalog)
        with pytest.raises(InvariantViolation, match="Hold has"):
            state.check_invariants()

    def test_non_holdable_in_hold(self):
        catalog = make_catalog(2)
        state = DeckState(catalog=catalog, deck=catalog[1:], held=catalog[:1])
        with pytest.raises(InvariantViolation, match="Non-holdable"):
            state.check_invariants()

    def test_invariant_violation_is_assertion(self):
        assert issubclass(InvariantViolation, AssertionError)


class TestWithMethods:
    def test_with_current(self):
        catalog = make_catalog(2)
        state = DeckState(catalog=catalog, deck=catalog)
        new_state = state.with_deck(catalog[1:]).with_current(catalog[0])
        assert new_state.current == catalog[0]
        assert state.current is None  # Original unchanged

    def test_with_pending_reshuffle(self):
        catalog = make_catalog(2)
        state = DeckState(catalog=catalog, deck=catalog)
        assert state.with_pending_reshuffle(True).pending_reshuffle
        assert not state.pending_reshuffle
