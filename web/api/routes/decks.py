"""Deck session API routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from event_deck.actions import (
    Action,
    DiscardCurrent,
    DiscardHeld,
    Draw,
    HoldCurrent,
    PlayHeld,
    Reset,
)
from web.api.session_manager import (
    CatalogUnavailableError,
    DeckSession,
    card_to_dict,
    session_manager,
)

router = APIRouter(tags=["decks"])


# Request/Response models
class CreateSessionRequest(BaseModel):
    """Request to start a new deck session."""

    seed: int | None = Field(None, description="Random seed for a reproducible shuffle sequence")


class CardResponse(BaseModel):
    """A catalog card."""

    id: str
    name: str
    group: str
    tone: str
    timing: str
    holdable: bool
    effect: str
    reshuffle: bool


class SessionStateResponse(BaseModel):
    """Deck session state."""

    session_id: str
    phase: str
    deck_count: int
    discard_count: int
    held: list[CardResponse]
    hold_limit: int
    current: CardResponse | None
    pending_reshuffle: bool
    can_hold: bool
    hold_blocked_reason: str | None
    notices: list[str]


def _require_session(session_id: str) -> DeckSession:
    session = session_manager.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _apply(session_id: str, action: Action) -> dict:
    session = _require_session(session_id)
    session.apply(action)
    return session.to_client_state()


# REST Endpoints


@router.get("/catalog", response_model=list[CardResponse])
async def get_catalog():
    """List every card in the loaded catalog."""
    try:
        catalog = session_manager.require_catalog()
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Catalog unavailable: {e}")
    return [card_to_dict(c) for c in catalog]


@router.post("/sessions", response_model=SessionStateResponse)
async def create_session(request: CreateSessionRequest | None = None):
    """Start a new deck session with a freshly shuffled deck."""
    seed = request.seed if request else None
    try:
        session = session_manager.create_session(seed=seed)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Catalog unavailable: {e}")
    return session.to_client_state()


@router.get("/sessions", response_model=list[dict])
async def list_sessions():
    """List all active deck sessions."""
    return session_manager.list_sessions()


@router.get("/sessions/{session_id}", response_model=SessionStateResponse)
async def get_session(session_id: str):
    """Get the current state of a session."""
    return _require_session(session_id).to_client_state()


@router.get("/sessions/{session_id}/history")
async def get_history(session_id: str):
    """Get the action log of a session."""
    return {"actions": _require_session(session_id).action_history}


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str):
    """End a session."""
    if not session_manager.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"deleted": session_id}


@router.post("/sessions/{session_id}/draw", response_model=SessionStateResponse)
async def draw(session_id: str):
    """Draw a card (or run a queued reshuffle)."""
    return _apply(session_id, Draw())


@router.post("/sessions/{session_id}/hold", response_model=SessionStateResponse)
async def hold_current(session_id: str):
    """Hold the current card."""
    return _apply(session_id, HoldCurrent())


@router.post("/sessions/{session_id}/discard", response_model=SessionStateResponse)
async def discard_current(session_id: str):
    """Discard the current card."""
    return _apply(session_id, DiscardCurrent())


@router.post("/sessions/{session_id}/reset", response_model=SessionStateResponse)
async def reset(session_id: str):
    """Reshuffle every card not held back into the deck."""
    return _apply(session_id, Reset())


@router.post("/sessions/{session_id}/held/{index}/discard", response_model=SessionStateResponse)
async def discard_held(session_id: str, index: int):
    """Discard a held card."""
    return _apply(session_id, DiscardHeld(index))


@router.post("/sessions/{session_id}/held/{index}/play", response_model=SessionStateResponse)
async def play_held(session_id: str, index: int):
    """Play a held card."""
    return _apply(session_id, PlayHeld(index))
