"""Events store client over a generic JSON REST collection.

The collection exposes ``GET /``, ``GET /{id}``, ``POST /``, ``PUT /{id}`` and
``DELETE /{id}``. Whether ``PUT`` merges the body into the stored record or
overwrites it is decided by the remote store; this client sends exactly the
fields it is given and returns whatever the store answers with.

No caching and no retries: every failure is mapped to ``TransportError`` or
``NotFoundError`` and raised to the caller. A malformed replace mapping is
rejected locally with ``ValidationError`` before any request is made.
"""
from __future__ import annotations

import os
from time import monotonic
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import ValidationError as SchemaError

from eventdesk.models.errors import NotFoundError, TransportError, ValidationError
from eventdesk.models.event import Event, EventPatch
from eventdesk.utils.logger import logger


EVENTS_API_BASE = os.getenv("EVENTS_API_BASE", "https://rf-json-server.herokuapp.com/events/")
_TIMEOUT_ENV = os.getenv("EVENTS_API_TIMEOUT")
EVENTS_API_TIMEOUT: Optional[float] = float(_TIMEOUT_ENV) if _TIMEOUT_ENV else None

PatchInput = Union[Event, EventPatch, Mapping[str, Any]]


class EventStoreClient:
    """Async CRUD client for the remote events collection.

    Pass ``client`` to share an existing ``httpx.AsyncClient`` (its lifetime
    then stays with the caller); otherwise one is created and closed by
    ``aclose``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = EVENTS_API_TIMEOUT,
    ) -> None:
        self._base = (base_url or EVENTS_API_BASE).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "EventStoreClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, event_id: int | None = None) -> str:
        if event_id is None:
            return f"{self._base}/"
        return f"{self._base}/{event_id}"

    async def _request(
        self,
        method: str,
        event_id: int | None = None,
        payload: Dict[str, Any] | None = None,
    ) -> httpx.Response:
        start = monotonic()
        url = self._url(event_id)
        status_code = 0
        try:
            resp = await self._client.request(method, url, json=payload)
            status_code = resp.status_code
            if resp.status_code == 404 and event_id is not None:
                raise NotFoundError(event_id)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Events API returned an error status",
                extra={"method": method, "url": url, "status_code": status_code},
            )
            raise TransportError(
                f"Events API returned HTTP {status_code}", status_code=status_code
            ) from exc
        except httpx.RequestError as exc:
            logger.warning(
                "Events API request failed",
                extra={"method": method, "url": url, "error": str(exc)},
            )
            raise TransportError(f"Events API request failed: {exc}") from exc
        finally:
            logger.debug(
                "Events API call",
                extra={
                    "method": method,
                    "url": url,
                    "status_code": status_code,
                    "response_time": monotonic() - start,
                },
            )

    @staticmethod
    def _parse_event(resp: httpx.Response) -> Event:
        try:
            return Event.model_validate(resp.json())
        except (ValueError, SchemaError) as exc:
            raise TransportError("Events API returned a malformed event") from exc

    async def list_all(self) -> List[Event]:
        resp = await self._request("GET")
        try:
            data = resp.json()
            if not isinstance(data, list):
                raise TransportError("Events API returned a malformed collection")
            events = [Event.model_validate(item) for item in data]
        except (ValueError, SchemaError) as exc:
            raise TransportError("Events API returned a malformed collection") from exc
        logger.debug("Fetched events", extra={"count": len(events)})
        return events

    async def get_by_id(self, event_id: int) -> Event:
        resp = await self._request("GET", event_id)
        return self._parse_event(resp)

    async def create(self, draft: Event) -> Event:
        """Persist a draft; the store assigns the id."""
        resp = await self._request("POST", payload=draft.to_wire())
        created = self._parse_event(resp)
        logger.info("Created event", extra={"event_id": created.id})
        return created

    async def replace(self, event_id: int, changes: PatchInput) -> Event:
        """Send ``changes`` to the stored record and return the updated event.

        ``changes`` may be a full ``Event`` (every field but the id is sent),
        an ``EventPatch`` or a mapping keyed by wire or attribute names.

        Raises:
            ValidationError: If a mapping names an unknown or read-only field
                or carries a value of the wrong type. Nothing is sent.
            NotFoundError: If the store has no event with ``event_id``.
            TransportError: On any other network or HTTP failure.
        """
        if isinstance(changes, Event):
            patch = EventPatch.from_event(changes)
        elif isinstance(changes, EventPatch):
            patch = changes
        else:
            try:
                patch = EventPatch.model_validate(dict(changes))
            except SchemaError as exc:
                raise ValidationError(
                    str(err["loc"][0]) for err in exc.errors() if err["loc"]
                ) from exc
        resp = await self._request("PUT", event_id, payload=patch.to_wire())
        updated = self._parse_event(resp)
        logger.info("Replaced event", extra={"event_id": event_id})
        return updated

    async def delete(self, event_id: int) -> None:
        await self._request("DELETE", event_id)
        logger.info("Deleted event", extra={"event_id": event_id})
