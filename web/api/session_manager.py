"""Deck session management for the web API."""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from event_deck.cards import HOLD_LIMIT
from event_deck.catalog import CatalogLoadError, load_catalog
from event_deck.engine import DeckEngine

logger = logging.getLogger(__name__)

MAX_HISTORY = 500
MAX_SESSIONS = 1000

if TYPE_CHECKING:
    from event_deck.actions import Action
    from event_deck.cards import Card


class CatalogUnavailableError(Exception):
    """Raised when a session is requested but the catalog failed to load."""

    pass


@dataclass
class DeckSession:
    """One player's table: an engine plus its action log."""

    id: str
    engine: DeckEngine
    created_at: datetime
    action_history: list[dict] = field(default_factory=list)

    def apply(self, action: Action) -> None:
        """Apply an action and record it."""
        before = self.engine.snapshot()
        after = self.engine.apply(action)

        self.action_history.append({
            "action": str(action),
            "action_type": action.action_type.name,
            "timestamp": datetime.now().isoformat(),
            "changed": after is not before,
            "current_after": after.current.id if after.current else None,
        })
        if len(self.action_history) > MAX_HISTORY:
            del self.action_history[:-MAX_HISTORY]

    def to_client_state(self) -> dict:
        """Convert engine state to client-friendly format."""
        state = self.engine.snapshot()

        return {
            "session_id": self.id,
            "phase": state.phase.name,
            "deck_count": len(state.deck),
            "discard_count": len(state.discard),
            "held": [card_to_dict(c) for c in state.held],
            "hold_limit": HOLD_LIMIT,
            "current": card_to_dict(state.current) if state.current else None,
            "pending_reshuffle": state.pending_reshuffle,
            "can_hold": state.can_hold,
            "hold_blocked_reason": state.hold_blocked_reason,
            "notices": state.notices,
        }


def card_to_dict(card: Card) -> dict:
    """Convert a Card to a dictionary."""
    return {
        "id": card.id,
        "name": card.name,
        "group": card.group,
        "tone": card.tone.badge,
        "timing": card.timing,
        "holdable": card.is_holdable,
        "effect": card.effect,
        "reshuffle": card.reshuffle,
    }


class DeckSessionManager:
    """Manages the shared catalog and all active deck sessions."""

    def __init__(self):
        self._sessions: dict[str, DeckSession] = {}
        self._catalog: tuple[Card, ...] | None = None
        self._load_error: str | None = None

    @property
    def catalog(self) -> tuple[Card, ...] | None:
        return self._catalog

    @property
    def load_error(self) -> str | None:
        return self._load_error

    def load(self, source: str | Path) -> None:
        """Load the catalog once. A failure is recorded, not raised."""
        try:
            self._catalog = load_catalog(source)
            self._load_error = None
        except CatalogLoadError as e:
            logger.error(f"Catalog load failed: {e}")
            self._catalog = None
            self._load_error = str(e)

    def set_catalog(self, cards: tuple[Card, ...] | list[Card]) -> None:
        """Install an already-loaded catalog."""
        self._catalog = tuple(cards)
        self._load_error = None

    def require_catalog(self) -> tuple[Card, ...]:
        """Return the catalog or raise if it is not available."""
        if self._catalog is None:
            raise CatalogUnavailableError(self._load_error or "Catalog not loaded")
        return self._catalog

    def create_session(self, seed: int | None = None) -> DeckSession:
        """Create a new session with a freshly shuffled deck.

        Args:
            seed: Optional seed for a reproducible shuffle sequence (debugging only).
        """
        catalog = self.require_catalog()
        self._evict_oldest()
        session_id = str(uuid.uuid4())
        rng = random.Random(seed) if seed is not None else None

        session = DeckSession(
            id=session_id,
            engine=DeckEngine(catalog, rng=rng),
            created_at=datetime.now(),
        )
        self._sessions[session_id] = session
        logger.info(f"Created deck session {session_id}")
        return session

    def _evict_oldest(self) -> None:
        """Drop the oldest sessions so a new one fits under MAX_SESSIONS."""
        while len(self._sessions) >= MAX_SESSIONS:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info(f"Evicted deck session {oldest}")

    def get_session(self, session_id: str) -> DeckSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False

    def clear(self) -> None:
        """Drop every session and forget the catalog."""
        self._sessions.clear()
        self._catalog = None
        self._load_error = None

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        return [
            {
                "id": s.id,
                "created_at": s.created_at.isoformat(),
                "deck_count": s.engine.deck_count,
                "held_count": len(s.engine.held),
                "actions": len(s.action_history),
            }
            for s in self._sessions.values()
        ]


# Global session manager instance
session_manager = DeckSessionManager()
