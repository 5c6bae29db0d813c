"""
Deck import orchestration.

Drives one import through the pipeline:

    IDLE -> FETCHING -> NORMALIZING -> LAYING_OUT -> SPAWNING -> REPORTING -> IDLE

INVARIANTS:
- At most one import runs per importer. The busy check and the state change
  happen in the same event-loop step, with no await in between.
- The importer is back to IDLE when import_deck returns, whatever happened.
- Failures reach the player as notices only. Zone failures are reported but
  do not fail the import; fetch failures and the import timeout do.
- Nothing is retried and in-flight spawns are never cancelled.
"""

import asyncio
import logging
from collections.abc import Callable

import httpx

from fowloader.config import Settings
from fowloader.config import settings as default_settings
from fowloader.host.base import ObjectHost
from fowloader.models.card import CardRecord
from fowloader.models.deck import ZoneOutcome, ZonePlan
from fowloader.models.failure import (
    ImportInProgressError,
    InputError,
    KnownError,
    TopLevelTimeoutError,
)
from fowloader.models.session import (
    ImportOptions,
    ImportReport,
    ImportSession,
    ImportState,
    ImportStatus,
    Notice,
)
from fowloader.parsers.deck_url import parse_deck_url
from fowloader.parsers.forceofwind import normalize_cards
from fowloader.services.collator import collate_zone
from fowloader.services.deck_fetcher import fetch_deck
from fowloader.services.layout import group_by_zone, plan_zones

logger = logging.getLogger(__name__)

MSG_STARTING = "Starting deck import..."
MSG_FETCHING = "Fetching decklist from fowind... :"
MSG_PREPARING = "Preparing Deck... :"
MSG_COMPLETE = "Deck import complete!"
MSG_FAILED = "Deck import failed."


class DeckImporter:
    """
    Single-flight deck importer bound to one host.

    Args:
        host: Object host the deck is spawned into
        settings: Endpoints, defaults and timeouts
        client: Optional httpx client for connection reuse
    """

    def __init__(
        self,
        host: ObjectHost,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.host = host
        self.settings = settings or default_settings
        self.client = client
        self.state = ImportState.IDLE
        # Zone tasks abandoned by an import timeout; kept referenced until they finish
        self._orphaned: set[asyncio.Task[ZoneOutcome]] = set()

    @property
    def busy(self) -> bool:
        """True while an import is running."""
        return self.state is not ImportState.IDLE

    def default_options(self) -> ImportOptions:
        return ImportOptions(card_back=None, face_down=self.settings.spawn_face_down)

    async def import_deck(
        self,
        url: str | None,
        *,
        player: str | None = None,
        options: ImportOptions | None = None,
    ) -> ImportReport:
        """
        Import the deck at `url` into the host.

        Args:
            url: Decklist URL as entered by the player
            player: Player colour that requested the import
            options: Per-import toggles; defaults come from settings

        Returns:
            ImportReport. REJECTED if another import is running or the URL was
            refused, FAILED if the import was aborted, COMPLETED otherwise
            (possibly with failed zones).
        """
        session = ImportSession(player=player, options=options or self.default_options())

        try:
            self._acquire()
        except ImportInProgressError as e:
            logger.info("Rejected import of %r: importer busy (%s)", url, self.state.value)
            self._notify(session.info(e.message))
            return self._report(session, ImportStatus.REJECTED, failure=e)

        try:
            return await self._run(url, session)
        finally:
            self.state = ImportState.IDLE

    def _acquire(self) -> None:
        if self.busy:
            raise ImportInProgressError()
        self.state = ImportState.FETCHING

    async def _run(self, url: str | None, session: ImportSession) -> ImportReport:
        try:
            session.source = parse_deck_url(url, self.settings.fow_base_url)
        except InputError as e:
            self._notify(session.info(e.message))
            return self._report(session, ImportStatus.REJECTED, failure=e)

        self._notify(session.broadcast(MSG_STARTING))
        logger.info("Importing deck %s for %s", session.source.slug, session.player or "everyone")

        try:
            self.state = ImportState.FETCHING
            self._notify(session.info(MSG_FETCHING))
            payload = await fetch_deck(
                session.source.slug,
                base_url=self.settings.fow_base_url,
                client=self.client,
                timeout=self.settings.request_timeout,
            )

            self.state = ImportState.NORMALIZING
            session.deck_name = payload.name
            cards = normalize_cards(payload, image_base_url=self.settings.image_base_url)

            self.state = ImportState.LAYING_OUT
            self._notify(session.info(MSG_PREPARING))
            plans = plan_zones(cards, force_face_down=session.options.face_down)
            zones = group_by_zone(cards)

            self.state = ImportState.SPAWNING
            outcomes = await self._spawn_zones(session, plans, zones)
        except KnownError as e:
            logger.warning(
                "Deck import %s failed: %s (%s)", session.source.slug, e.message, e.detail
            )
            self._notify(session.error(e.message))
            self._notify(session.broadcast(MSG_FAILED))
            return self._report(session, ImportStatus.FAILED, failure=e)

        self.state = ImportState.REPORTING
        failed = [outcome.zone for outcome in outcomes if not outcome.ok]
        logger.info(
            "Deck %s imported: %d zone(s), %d failed",
            session.source.slug,
            len(outcomes),
            len(failed),
        )
        self._notify(session.broadcast(MSG_COMPLETE))
        return self._report(session, ImportStatus.COMPLETED, zones=outcomes)

    async def _spawn_zones(
        self,
        session: ImportSession,
        plans: dict[str, ZonePlan],
        zones: dict[str, list[CardRecord]],
    ) -> list[ZoneOutcome]:
        """Collate every zone concurrently under the import deadline."""
        if not plans:
            logger.warning("Deck %s has no cards", session.deck_name)
            return []

        card_back = session.options.card_back or self.settings.card_back_url

        timed_out = False

        def on_zone_complete(outcome: ZoneOutcome) -> None:
            # Zones finishing after the import deadline belong to a finished report
            if outcome.error and not timed_out:
                self._notify(session.error(f"[{outcome.zone}] {outcome.error}"))

        tasks: dict[asyncio.Task[ZoneOutcome], str] = {}
        for zone, plan in plans.items():
            task = asyncio.create_task(
                collate_zone(
                    self.host,
                    plan,
                    zones[zone],
                    card_back=card_back,
                    timeout=self.settings.zone_timeout,
                    on_complete=on_zone_complete,
                ),
                name=f"collate:{zone}",
            )
            tasks[task] = zone

        done, pending = await asyncio.wait(tasks, timeout=self.settings.import_timeout)

        if pending:
            # Zones that already failed are still reported before the import is abandoned
            for task in done:
                self._collect(task, tasks[task], zones[tasks[task]], on_zone_complete)
            timed_out = True
            for task in pending:
                self._orphaned.add(task)
                task.add_done_callback(self._discard_orphan)
            raise TopLevelTimeoutError([tasks[task] for task in pending])

        return [
            self._collect(task, zone, zones[zone], on_zone_complete)
            for task, zone in tasks.items()
        ]

    @staticmethod
    def _collect(
        task: asyncio.Task[ZoneOutcome],
        zone: str,
        cards: list[CardRecord],
        on_zone_complete: Callable[[ZoneOutcome], None],
    ) -> ZoneOutcome:
        """Outcome of a finished zone task; an unexpected exception becomes a zone error."""
        try:
            return task.result()
        except Exception as e:
            logger.exception("Zone %s failed while spawning", zone)
            outcome = ZoneOutcome(
                zone=zone,
                expected=sum(card.quantity for card in cards),
                error=f"Error spawning zone {zone}: {e}",
            )
            on_zone_complete(outcome)
            return outcome

    def _discard_orphan(self, task: asyncio.Task[ZoneOutcome]) -> None:
        self._orphaned.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "Zone task %s failed after the import timed out",
                task.get_name(),
                exc_info=task.exception(),
            )

    def _notify(self, notice: Notice) -> None:
        if notice.player is None:
            self.host.print_to_all(notice.text)
        else:
            self.host.print_to_player(notice.player, notice.text, notice.color)

    @staticmethod
    def _report(
        session: ImportSession,
        status: ImportStatus,
        *,
        zones: list[ZoneOutcome] | None = None,
        failure: KnownError | None = None,
    ) -> ImportReport:
        return ImportReport(
            status=status,
            deck_name=session.deck_name,
            zones=zones or [],
            notices=list(session.notices),
            failure_kind=failure.kind if failure else None,
            failure_message=failure.message if failure else None,
            failure_suggestion=failure.suggestion if failure else None,
        )
