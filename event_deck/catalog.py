"""Loading and normalizing the card catalog.

The catalog is a JSON array of card records. Every field is optional;
missing (or null) fields are filled with defaults so the engine always works
with complete Card values.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any

import httpx

from event_deck.cards import Card

logger = logging.getLogger(__name__)

DEFAULT_CARDS_SOURCE = "data/cards.json"
FETCH_TIMEOUT = 10.0


class CatalogLoadError(Exception):
    """Raised when the catalog cannot be fetched, read, or parsed."""

    pass


def generate_card_id() -> str:
    """Create a fresh unique id for a record that lacks one."""
    return "C" + uuid.uuid4().hex


def _default(record: dict[str, Any], key: str, fallback: Any) -> Any:
    value = record.get(key)
    return fallback if value is None else value


def normalize_record(record: dict[str, Any]) -> Card:
    """Build a Card from a raw record, filling in missing fields.

    Args:
        record: One decoded catalog entry.

    Returns:
        A complete Card.
    """
    card_id = record.get("id")
    return Card(
        id=generate_card_id() if card_id is None else str(card_id),
        name=str(_default(record, "name", "Untitled")),
        group=str(_default(record, "group", "Neutral")),
        timing=str(_default(record, "timing", "Immediate")),
        effect=str(_default(record, "effect", "")),
        reshuffle=bool(record.get("reshuffle")),
    )


def normalize_catalog(records: Any) -> tuple[Card, ...]:
    """Normalize a decoded payload into catalog cards.

    Raises:
        CatalogLoadError: If the payload is not a list of objects.
    """
    if not isinstance(records, list):
        raise CatalogLoadError(f"Catalog must be a JSON array, got {type(records).__name__}")

    cards = []
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise CatalogLoadError(f"Catalog entry {i} is not an object")
        cards.append(normalize_record(record))
    return tuple(cards)


def parse_catalog(raw: bytes | str) -> tuple[Card, ...]:
    """Decode a JSON catalog payload.

    Raises:
        CatalogLoadError: If the payload is not valid JSON or has the wrong shape.
    """
    try:
        records = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise CatalogLoadError(f"Malformed catalog payload: {e}") from e
    return normalize_catalog(records)


def load_catalog_file(path: str | Path) -> tuple[Card, ...]:
    """Load the catalog from a JSON file on disk."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CatalogLoadError(f"Failed to load {path}: {e}") from e

    cards = parse_catalog(raw)
    logger.info(f"Loaded {len(cards)} cards from {path}")
    return cards


def load_catalog_url(url: str, client: httpx.Client | None = None) -> tuple[Card, ...]:
    """Fetch the catalog over HTTP.

    Args:
        url: Location of the JSON catalog.
        client: Optional preconfigured client (a new one is created otherwise).

    Raises:
        CatalogLoadError: On transport errors, non-2xx status, or a bad payload.
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=FETCH_TIMEOUT)

    try:
        response = client.get(url, headers={"Cache-Control": "no-store"})
    except httpx.HTTPError as e:
        raise CatalogLoadError(f"Failed to load {url}: {e}") from e
    finally:
        if owns_client:
            client.close()

    if not response.is_success:
        raise CatalogLoadError(f"Failed to load {url}: {response.status_code}")

    cards = parse_catalog(response.content)
    logger.info(f"Loaded {len(cards)} cards from {url}")
    return cards


def load_catalog(source: str | Path = DEFAULT_CARDS_SOURCE, client: httpx.Client | None = None) -> tuple[Card, ...]:
    """Load the catalog from a file path or an http(s) URL."""
    text = str(source)
    if text.startswith(("http://", "https://")):
        return load_catalog_url(text, client=client)
    return load_catalog_file(source)
