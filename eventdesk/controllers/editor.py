"""Draft controller for the create/edit view.

The editor owns a single draft plus the set of touched fields. Validation
state is never stored: ``validation`` and ``errors`` are recomputed from the
draft and the touched set each time they are read.

Every awaited store call captures the editor's generation first. ``open``,
``submit`` and ``cancel`` bump the generation, so a response that arrives for a
superseded view is dropped instead of overwriting the live draft.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional, Set

from pydantic import ValidationError as SchemaError

from eventdesk.models.errors import DomainError, ReadOnlyFieldError, ValidationError
from eventdesk.models.event import Event, field_name
from eventdesk.models.validation import (
    VALIDATED_FIELDS,
    ValidationResult,
    require_valid,
    validate,
    visible_errors,
)
from eventdesk.services.events_api import EventStoreClient
from eventdesk.services.navigation import Navigator
from eventdesk.utils.logger import logger

READ_ONLY_FIELDS = frozenset({"id", "created_on"})

LOAD_ERROR = "Error fetching event."
SAVE_ERROR = "Error saving event."


class EditorState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    DONE = "done"
    ERROR = "error"


def _now() -> datetime:
    return datetime.now().astimezone()


def new_draft(now: datetime) -> Event:
    """Blank draft stamped with the given moment."""
    created_on = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return Event(
        date=now.strftime("%Y-%m-%d"),
        time=now.strftime("%H:%M"),
        created_on=created_on.replace("+00:00", "Z"),
    )


def _attribute(name: str) -> str:
    try:
        return field_name(name)
    except KeyError:
        raise ValueError(f"Unknown event field: {name}") from None


class EventEditor:
    """Owns one in-progress event draft and drives it to the store."""

    def __init__(
        self,
        store: EventStoreClient,
        navigator: Navigator,
        on_saved: Optional[Callable[[Event], None]] = None,
        clock: Callable[[], datetime] = _now,
    ) -> None:
        self._store = store
        self._navigator = navigator
        self._on_saved = on_saved
        self._clock = clock
        self._generation = 0
        self.state = EditorState.IDLE
        self.event_id: int | None = None
        self.draft: Event = Event()
        self.error: str | None = None
        self.dirty = False
        self._touched: Set[str] = set()

    @property
    def touched(self) -> FrozenSet[str]:
        return frozenset(self._touched)

    @property
    def validation(self) -> ValidationResult:
        return validate(self.draft)

    @property
    def errors(self) -> Dict[str, str]:
        """Inline messages to display, limited to touched fields."""
        return visible_errors(self.validation, self._touched)

    @property
    def is_edit(self) -> bool:
        return self.event_id is not None

    async def open(self, event_id: int | None = None) -> None:
        """Enter the view, loading ``event_id`` or starting a fresh draft."""
        self._generation += 1
        generation = self._generation
        self.event_id = event_id
        self.error = None
        self.dirty = False
        self._touched = set()

        if event_id is None:
            self.draft = new_draft(self._clock())
            self.state = EditorState.READY
            return

        self.state = EditorState.LOADING
        try:
            loaded = await self._store.get_by_id(event_id)
        except DomainError as exc:
            if generation != self._generation:
                return
            logger.error("Error fetching event", extra={"event_id": event_id, "error": str(exc)})
            self.error = LOAD_ERROR
            self.state = EditorState.ERROR
            return
        if generation != self._generation:
            logger.debug("Discarding stale event load", extra={"event_id": event_id})
            return
        self.draft = loaded
        self.state = EditorState.READY

    def _accepts_edits(self) -> bool:
        if self.state is not EditorState.READY:
            logger.warning("Edit ignored", extra={"state": self.state.value})
            return False
        return True

    def _update(self, attr: str, value: Any) -> None:
        data = self.draft.model_dump()
        data[attr] = value
        try:
            self.draft = Event.model_validate(data)
        except SchemaError as exc:
            raise ValueError(f"Invalid value for event field: {attr}") from exc
        self._touched.add(attr)
        self.dirty = True

    def set_field(self, name: str, value: Any) -> None:
        """Apply a user edit to the draft and mark the field touched.

        Edits outside ``READY`` are ignored.
        """
        attr = _attribute(name)
        if attr in READ_ONLY_FIELDS:
            raise ReadOnlyFieldError(attr)
        if self._accepts_edits():
            self._update(attr, value)

    def set_color(self, color: str) -> None:
        """Colour comes from a fixed list, not free text."""
        if self._accepts_edits():
            self._update("color", color)

    def touch(self, name: str) -> None:
        """Blur: the field's error becomes visible without changing its value."""
        attr = _attribute(name)
        if self._accepts_edits():
            self._touched.add(attr)

    async def submit(self) -> Event | None:
        """Validate the whole draft and persist it.

        Returns the saved event, or ``None`` when validation blocked the
        submit or the store call failed (``error`` is set in that case).
        """
        if self.state is not EditorState.READY:
            logger.warning("Submit ignored", extra={"state": self.state.value})
            return None

        try:
            require_valid(self.draft)
        except ValidationError as exc:
            self._touched.update(VALIDATED_FIELDS)
            logger.debug("Submit blocked by validation", extra={"fields": exc.fields})
            return None

        self._generation += 1
        generation = self._generation
        self.state = EditorState.SUBMITTING
        self.error = None
        try:
            if self.event_id is None:
                saved = await self._store.create(self.draft)
            else:
                saved = await self._store.replace(self.event_id, self.draft)
        except DomainError as exc:
            if generation != self._generation:
                return None
            logger.error("Error saving event", extra={"event_id": self.event_id, "error": str(exc)})
            self.error = SAVE_ERROR
            self.state = EditorState.READY
            return None

        if generation != self._generation:
            logger.debug("Discarding stale save result", extra={"event_id": saved.id})
            return None
        self.draft = saved
        self.event_id = saved.id
        self.dirty = False
        self.state = EditorState.DONE
        if self._on_saved is not None:
            self._on_saved(saved)
        self._navigator.to_list()
        return saved

    def cancel(self) -> None:
        """Leave the view. Pending loads or saves no longer touch the draft."""
        self._generation += 1
        self.state = EditorState.DONE
        self._navigator.to_list()
