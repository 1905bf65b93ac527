"""Command-line interface for the event deck."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import TYPE_CHECKING

from event_deck.cards import HOLD_LIMIT
from event_deck.catalog import DEFAULT_CARDS_SOURCE, CatalogLoadError, load_catalog
from event_deck.engine import DeckEngine

if TYPE_CHECKING:
    from event_deck.cards import Card
    from event_deck.state import DeckState

HELP_TEXT = """Commands:
  d      draw a card
  h      hold the current card
  x      discard the current card
  p N    play held card N
  r N    discard held card N
  q      quit"""


def format_card(card: Card) -> str:
    """Format a card as a short block of lines."""
    lines = [f"{card.name}"]
    meta = f"  {card.group} [{card.tone.badge}] | ID: {card.id} | {card.timing}"
    if card.reshuffle:
        meta += " | RESHUFFLE"
    lines.append(meta)
    if card.effect:
        lines.append(f"  {card.effect}")
    return "\n".join(lines)


def format_state(state: DeckState) -> str:
    """Format deck state for display."""
    lines = []

    lines.append("=" * 60)
    lines.append(f"Deck: {len(state.deck)} | Discard: {len(state.discard)} | Held: {len(state.held)}/{HOLD_LIMIT}")
    lines.append("=" * 60)

    lines.append("\nCurrent card")
    lines.append("-" * 40)
    if state.current is None:
        lines.append("  (no card drawn)")
    else:
        lines.append(format_card(state.current))
        if state.hold_blocked_reason:
            lines.append(f"  Cannot hold: {state.hold_blocked_reason}")

    lines.append("\nHeld cards")
    lines.append("-" * 40)
    for i in range(HOLD_LIMIT):
        if i < len(state.held):
            card = state.held[i]
            lines.append(f"  {i + 1}. {card.name} ({card.group}, {card.timing})")
        else:
            lines.append(f"  {i + 1}. (empty)")

    if state.notices:
        lines.append("")
        lines.extend(f"! {notice}" for notice in state.notices)

    return "\n".join(lines)


def _parse_slot(arg: str) -> int | None:
    """Turn a 1-based slot argument into a 0-based index."""
    try:
        return int(arg) - 1
    except ValueError:
        return None


def play_interactive(engine: DeckEngine) -> None:
    """Run the draw loop in the terminal."""
    print("\nEvent deck ready.")
    print(HELP_TEXT)
    print()

    while True:
        print(format_state(engine.snapshot()))

        try:
            choice = input("\n> ").strip().lower()
        except EOFError:
            print("\nGoodbye!")
            return

        command, _, arg = choice.partition(" ")
        if command == "q":
            print("Goodbye!")
            return
        elif command == "d":
            engine.draw()
        elif command == "h":
            engine.hold_current()
        elif command == "x":
            engine.discard_current()
        elif command in ("p", "r"):
            index = _parse_slot(arg)
            if index is None:
                print(f"Please enter a slot number 1-{HOLD_LIMIT}")
                continue
            if command == "p":
                engine.play_held(index)
            else:
                engine.discard_held(index)
        else:
            print(HELP_TEXT)
        print()


def show_catalog(cards: tuple[Card, ...]) -> None:
    """Print every card in the catalog."""
    print(f"\n{len(cards)} cards\n")
    for card in cards:
        print(format_card(card))
        print()


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Event deck draw utility")
    parser.add_argument(
        "--log-level", default=os.environ.get("LOG_LEVEL", "WARNING"), help="Logging level"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Draw cards interactively")
    play_parser.add_argument("--cards", default=DEFAULT_CARDS_SOURCE, help="Catalog path or URL")

    # Show command
    show_parser = subparsers.add_parser("show", help="List the catalog")
    show_parser.add_argument("--cards", default=DEFAULT_CARDS_SOURCE, help="Catalog path or URL")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command is None:
        parser.print_help()
        return

    try:
        cards = load_catalog(args.cards)
    except CatalogLoadError as e:
        print(f"Could not load cards: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "play":
        play_interactive(DeckEngine(cards))
    elif args.command == "show":
        show_catalog(cards)


if __name__ == "__main__":
    main()
