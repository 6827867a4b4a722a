"""Bulk-import knowledge cards from a JSON file.

Usage:
    python scripts/import_cards.py cards.json [--dry-run]

The file holds a list of objects with the same fields as the admin form:
``{"title": ..., "topics": [...], "answer": ..., "confidence": 0.9}``.
Each card goes through the same validation and embedding as
POST /api/cards/create. Invalid cards are reported and skipped.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from kbchat.chains.create_card import CardValidationError, create_card, validate_card
from kbchat.core.config import get_settings
from kbchat.core.schemas_cards import CreateCardRequest
from kbchat.core.upstream import UpstreamError


def load_cards(path: Path) -> list[CreateCardRequest]:
    """Parse the JSON file into card requests, skipping malformed entries."""
    raw = json.loads(path.read_text())
    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON list of cards")

    cards = []
    for i, item in enumerate(raw):
        try:
            cards.append(CreateCardRequest.model_validate(item))
        except ValidationError as e:
            print(f"  ⚠️  entry {i}: malformed ({e.error_count()} errors), skipped")
    return cards


async def import_cards(path: Path, dry_run: bool = False) -> tuple[int, int]:
    """
    Import cards one by one.

    Returns (succeeded, failed). In a dry run "succeeded" counts cards that
    passed validation; otherwise it counts cards written.
    """
    settings = get_settings()
    cards = load_cards(path)
    print(f"Loaded {len(cards)} cards from {path}")

    succeeded = failed = 0
    for i, card in enumerate(cards):
        try:
            if dry_run:
                validate_card(card)
                print(f"  ✓ {card.title} (dry run)")
            else:
                card_id = await create_card(card, settings)
                print(f"  ✓ {card.title} -> {card_id}")
            succeeded += 1
        except CardValidationError as e:
            print(f"  ⚠️  entry {i}: {e}")
            failed += 1
        except UpstreamError as e:
            print(f"  ❌ entry {i}: {e.service} failed: {e.message}")
            failed += 1

    return succeeded, failed


def main() -> None:
    parser = argparse.ArgumentParser(description="Bulk-import knowledge cards")
    parser.add_argument("path", type=Path, help="JSON file with a list of cards")
    parser.add_argument("--dry-run", action="store_true", help="Validate without writing")
    args = parser.parse_args()

    succeeded, failed = asyncio.run(import_cards(args.path, dry_run=args.dry_run))
    label = "valid" if args.dry_run else "created"
    print(f"\nDone: {succeeded} {label}, {failed} failed")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
