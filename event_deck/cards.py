"""Card model, group tones, and shuffling for the event deck."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum, auto

HOLD_LIMIT = 5
HOLD_TIMING = "hold"


class GroupTone(IntEnum):
    """Display category derived from a card's group tag."""

    GOOD = auto()
    MINOR_BAD = auto()
    MAJOR_BAD = auto()
    NEUTRAL = auto()

    @property
    def badge(self) -> str:
        return {
            GroupTone.GOOD: "good",
            GroupTone.MINOR_BAD: "minorbad",
            GroupTone.MAJOR_BAD: "majorbad",
            GroupTone.NEUTRAL: "neutral",
        }[self]

    @classmethod
    def from_group(cls, group: str) -> GroupTone:
        """Classify a group tag by substring, checked good > major > minor."""
        g = str(group).lower()
        if "good" in g:
            return cls.GOOD
        if "major" in g:
            return cls.MAJOR_BAD
        if "minor" in g:
            return cls.MINOR_BAD
        return cls.NEUTRAL


@dataclass(frozen=True, slots=True)
class Card:
    """An event card.

    Cards are immutable once loaded. The effect text is opaque to the engine;
    only ``timing`` and ``reshuffle`` affect how a card moves.

    Attributes:
        id: Unique identifier within the catalog
        name: Display name
        group: Display category tag (e.g. "Good", "Minor", "Major")
        timing: "Hold" (any case) marks a holdable card, anything else is immediate
        effect: Free text describing the effect
        reshuffle: Drawing this card queues a deck reset
    """

    id: str
    name: str = "Untitled"
    group: str = "Neutral"
    timing: str = "Immediate"
    effect: str = ""
    reshuffle: bool = False

    @property
    def is_holdable(self) -> bool:
        """Whether this card may be placed in the hold area."""
        return str(self.timing).lower() == HOLD_TIMING

    @property
    def tone(self) -> GroupTone:
        return GroupTone.from_group(self.group)

    def __str__(self) -> str:
        tag = " [RESHUFFLE]" if self.reshuffle else ""
        return f"{self.name} ({self.group}, {self.timing}){tag}"


def shuffle_cards(cards: tuple[Card, ...] | list[Card], rng: random.Random | None = None) -> tuple[Card, ...]:
    """Return a uniformly shuffled copy of the cards.

    Fisher-Yates: walk from the last position down, swapping each slot with a
    uniformly chosen slot at or below it.
    """
    rng = rng or random.Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return tuple(shuffled)
