"""Event deck draw engine."""

from event_deck.actions import Action, DiscardCurrent, DiscardHeld, Draw, HoldCurrent, PlayHeld, Reset
from event_deck.cards import HOLD_LIMIT, Card, GroupTone
from event_deck.catalog import CatalogLoadError, load_catalog
from event_deck.engine import DeckEngine
from event_deck.state import DeckPhase, DeckState, InvariantViolation

__all__ = [
    "HOLD_LIMIT",
    "Card",
    "GroupTone",
    "CatalogLoadError",
    "load_catalog",
    "DeckEngine",
    "DeckPhase",
    "DeckState",
    "InvariantViolation",
    "Action",
    "Draw",
    "HoldCurrent",
    "DiscardCurrent",
    "DiscardHeld",
    "PlayHeld",
    "Reset",
]
