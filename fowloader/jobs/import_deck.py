"""
Import a Force of Wind deck onto an in-memory table.

Runs the full import pipeline against the live deck API and prints the
messages a player would see, followed by the resulting stacks.

Usage:
    python -m fowloader.jobs.import_deck https://forceofwind.online/view_decklist/4821/
"""

import argparse
import asyncio
import logging

from fowloader.config import settings
from fowloader.host.memory import InMemoryTable
from fowloader.models.session import ImportOptions, ImportReport, ImportStatus
from fowloader.services.importer import DeckImporter

logger = logging.getLogger(__name__)


async def run_import(
    url: str,
    *,
    player: str | None = None,
    options: ImportOptions | None = None,
    table: InMemoryTable | None = None,
) -> ImportReport:
    """Import one deck onto `table` (a fresh one by default)."""
    table = table or InMemoryTable()
    importer = DeckImporter(table, settings=settings)

    report = await importer.import_deck(url, player=player, options=options)
    logger.info("Import finished with status %s", report.status.value)
    return report


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Import a Force of Wind decklist")
    parser.add_argument("url", help="Decklist URL")
    parser.add_argument("--player", default="White", help="Player colour (default: White)")
    parser.add_argument(
        "--face-down",
        action="store_true",
        help="Spawn every zone face down",
    )
    parser.add_argument("--card-back", default=None, help="Card back image URL")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    table = InMemoryTable()
    options = ImportOptions(
        card_back=args.card_back,
        face_down=args.face_down or settings.spawn_face_down,
    )
    report = asyncio.run(run_import(args.url, player=args.player, options=options, table=table))

    for message in table.messages:
        prefix = "ERROR " if message.color else ""
        print(f"{prefix}{message.text}")

    if report.status is ImportStatus.COMPLETED:
        print(f"\n{report.deck_name}:")
        for obj in table.objects.values():
            print(f"  {obj.name}: {obj.card_count} card(s)")

    raise SystemExit(0 if report.status is ImportStatus.COMPLETED else 1)


if __name__ == "__main__":
    main()
