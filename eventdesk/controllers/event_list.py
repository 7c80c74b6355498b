"""List view controller: snapshot, selection and delete."""
from __future__ import annotations

from typing import List, Tuple

from eventdesk.models.errors import DomainError
from eventdesk.models.event import Event
from eventdesk.services.events_api import EventStoreClient
from eventdesk.services.navigation import Navigator
from eventdesk.utils.logger import logger

FETCH_ERROR = "Error fetching Event Data."


class EventListController:
    """Holds the authoritative snapshot of the remote collection.

    The snapshot keeps fetch order; ``sorted_events`` derives the display
    order on demand. Responses issued before the last ``deactivate`` (or a
    newer ``activate``) are discarded.
    """

    def __init__(self, store: EventStoreClient, navigator: Navigator) -> None:
        self._store = store
        self._navigator = navigator
        self._generation = 0
        self.events: Tuple[Event, ...] = ()
        self.loading = False
        self.error: str | None = None
        self.selected_id: int | None = None

    async def activate(self) -> None:
        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None
        try:
            events = await self._store.list_all()
        except DomainError as exc:
            if generation == self._generation:
                logger.error("Error fetching events", extra={"error": str(exc)})
                self.error = FETCH_ERROR
                self.loading = False
            return
        if generation != self._generation:
            logger.debug("Discarding stale event list")
            return
        self.events = tuple(events)
        self.loading = False
        logger.info("Loaded events", extra={"count": len(self.events)})

    async def refresh(self) -> None:
        await self.activate()

    def deactivate(self) -> None:
        self._generation += 1
        self.loading = False

    def sorted_events(self) -> List[Event]:
        """Display order: ascending by company, plain string comparison."""
        return sorted(self.events, key=lambda event: event.company)

    def select(self, event_id: int) -> None:
        """Toggle selection; selecting the selected event clears it."""
        self.selected_id = None if event_id == self.selected_id else event_id

    def open_editor(self, event_id: int) -> None:
        self._navigator.to_edit(event_id)

    def add_event(self) -> None:
        self._navigator.to_create()

    async def delete_selected(self) -> bool:
        """Delete the selected event.

        Returns ``True`` when the event was removed. On failure the snapshot
        and selection stay as they were and ``error`` is set. A successful
        delete is applied even if a refresh ran meanwhile, since removing an
        id that is already gone changes nothing.
        """
        event_id = self.selected_id
        if event_id is None:
            logger.warning("Delete requested with no event selected")
            return False

        generation = self._generation
        self.error = None
        try:
            await self._store.delete(event_id)
        except DomainError as exc:
            if generation == self._generation:
                logger.error("Error deleting event", extra={"event_id": event_id, "error": str(exc)})
                self.error = f"Error deleting event: {exc.message}"
            return False
        self.events = tuple(event for event in self.events if event.id != event_id)
        if self.selected_id == event_id:
            self.selected_id = None
        return True

    def apply_saved(self, saved: Event) -> None:
        """Patch the snapshot with an event the editor just persisted."""
        for index, event in enumerate(self.events):
            if event.id == saved.id:
                self.events = self.events[:index] + (saved,) + self.events[index + 1:]
                return
        self.events = self.events + (saved,)
