"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

import pytest

from eventdesk.models.errors import NotFoundError, TransportError
from eventdesk.models.event import Event, EventPatch
from eventdesk.services.navigation import Navigator

NOW = datetime(2025, 6, 15, 12, 30, 0, tzinfo=timezone.utc)


class FakeEventStore:
    """In-memory stand-in for EventStoreClient that records every call."""

    def __init__(self, events: Optional[List[Event]] = None, next_id: int = 1) -> None:
        self.records: Dict[int, Event] = {e.id: e for e in events or []}
        self.next_id = next_id
        self.calls: List[Tuple] = []
        self.fail_with: Optional[Exception] = None

    async def _check(self) -> None:
        await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with

    async def list_all(self) -> List[Event]:
        self.calls.append(("list_all",))
        await self._check()
        return list(self.records.values())

    async def get_by_id(self, event_id: int) -> Event:
        self.calls.append(("get_by_id", event_id))
        await self._check()
        if event_id not in self.records:
            raise NotFoundError(event_id)
        return self.records[event_id]

    async def create(self, draft: Event) -> Event:
        self.calls.append(("create", draft))
        await self._check()
        created = draft.model_copy(update={"id": self.next_id})
        self.records[created.id] = created
        self.next_id += 1
        return created

    async def replace(self, event_id: int, changes) -> Event:
        self.calls.append(("replace", event_id, changes))
        await self._check()
        if event_id not in self.records:
            raise NotFoundError(event_id)
        patch = changes if isinstance(changes, EventPatch) else EventPatch.from_event(changes)
        updated = self.records[event_id].model_copy(update=patch.model_dump(exclude_unset=True))
        self.records[event_id] = updated
        return updated

    async def delete(self, event_id: int) -> None:
        self.calls.append(("delete", event_id))
        await self._check()
        if event_id not in self.records:
            raise NotFoundError(event_id)
        del self.records[event_id]

    @property
    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


class RecordingNavigator(Navigator):
    def __init__(self) -> None:
        self.routes: List[str] = []

    def to_list(self) -> None:
        self.routes.append("/")

    def to_create(self) -> None:
        self.routes.append("/add")

    def to_edit(self, event_id: int) -> None:
        self.routes.append(f"/edit/{event_id}")


def make_event(**overrides) -> Event:
    defaults = dict(
        id=1,
        name="Launch",
        description="Product launch",
        company="Acme",
        color="blue",
        phone="",
        date="2025-06-15",
        time="12:30",
        created_on="2025-06-01T09:00:00.000Z",
    )
    defaults.update(overrides)
    return Event(**defaults)


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def store() -> FakeEventStore:
    return FakeEventStore()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("Events API returned HTTP 500", status_code=500)


@pytest.fixture
def clock():
    return lambda: NOW
