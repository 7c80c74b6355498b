"""Console entrypoint for EventDesk.

Drives the list and editor controllers from the command line. Each
sub-command maps to one user action in the list or editor view; the
controllers do the work and this module only prints their state.
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from eventdesk.controllers.editor import EditorState, EventEditor
from eventdesk.controllers.event_list import EventListController
from eventdesk.models.event import BROWSER_SAFE_COLORS, Event
from eventdesk.services.events_api import EventStoreClient
from eventdesk.services.navigation import Navigator
from eventdesk.utils.logger import logger

TEXT_FIELDS = ("name", "description", "company", "phone", "email", "address", "image", "date", "time")


class ConsoleNavigator(Navigator):
    """Records the last requested route; the console has a single screen."""

    def __init__(self) -> None:
        self.route: str | None = None

    def to_list(self) -> None:
        self.route = "/"

    def to_create(self) -> None:
        self.route = "/add"

    def to_edit(self, event_id: int) -> None:
        self.route = f"/edit/{event_id}"


def render_event(event: Event) -> str:
    return f"[{event.id}] {event.name} | {event.company} | {event.description}"


def render_details(event: Event) -> str:
    lines = [f"{name}: {value}" for name, value in event.model_dump(by_alias=True).items()]
    return "\n".join(lines)


def _print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


async def _list(store: EventStoreClient, args: argparse.Namespace) -> int:
    controller = EventListController(store, ConsoleNavigator())
    await controller.activate()
    if controller.error:
        _print_error(controller.error)
        return 1
    print("Upcoming Events:")
    for event in controller.sorted_events():
        print(render_event(event))
    return 0


async def _show(store: EventStoreClient, args: argparse.Namespace) -> int:
    editor = EventEditor(store, ConsoleNavigator())
    await editor.open(args.event_id)
    if editor.state is EditorState.ERROR:
        _print_error(editor.error or "")
        return 1
    print(render_details(editor.draft))
    return 0


async def _save(store: EventStoreClient, args: argparse.Namespace) -> int:
    event_id: Optional[int] = getattr(args, "event_id", None)
    editor = EventEditor(store, ConsoleNavigator())
    await editor.open(event_id)
    if editor.state is EditorState.ERROR:
        _print_error(editor.error or "")
        return 1

    for name in TEXT_FIELDS:
        value = getattr(args, name)
        if value is not None:
            editor.set_field(name, value)
    if args.color is not None:
        editor.set_color(args.color)

    action = "Updated" if editor.is_edit else "Created"
    saved = await editor.submit()
    if saved is None:
        if editor.error:
            _print_error(editor.error)
        for message in editor.errors.values():
            _print_error(message)
        return 1
    print(f"{action} {render_event(saved)}")
    return 0


async def _delete(store: EventStoreClient, args: argparse.Namespace) -> int:
    controller = EventListController(store, ConsoleNavigator())
    await controller.activate()
    if controller.error:
        _print_error(controller.error)
        return 1
    if not any(event.id == args.event_id for event in controller.events):
        _print_error(f"Event {args.event_id} not found")
        return 1
    controller.select(args.event_id)
    if not await controller.delete_selected():
        _print_error(controller.error or "")
        return 1
    print(f"Deleted event {args.event_id}")
    return 0


def _add_field_options(parser: argparse.ArgumentParser) -> None:
    for name in TEXT_FIELDS:
        parser.add_argument(f"--{name}")
    parser.add_argument("--color", choices=BROWSER_SAFE_COLORS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="eventdesk", description="Manage events in a remote collection.")
    parser.add_argument("--base-url", help="Events collection URL (defaults to EVENTS_API_BASE)")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List events ordered by company")
    list_parser.set_defaults(handler=_list)

    show_parser = sub.add_parser("show", help="Show one event")
    show_parser.add_argument("event_id", type=int)
    show_parser.set_defaults(handler=_show)

    create_parser = sub.add_parser("create", help="Create an event")
    _add_field_options(create_parser)
    create_parser.set_defaults(handler=_save)

    edit_parser = sub.add_parser("edit", help="Edit an event")
    edit_parser.add_argument("event_id", type=int)
    _add_field_options(edit_parser)
    edit_parser.set_defaults(handler=_save)

    delete_parser = sub.add_parser("delete", help="Delete an event")
    delete_parser.add_argument("event_id", type=int)
    delete_parser.set_defaults(handler=_delete)

    return parser


async def _run(args: argparse.Namespace) -> int:
    async with EventStoreClient(base_url=args.base_url) as store:
        return await args.handler(store, args)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger.debug("Running command", extra={"command": args.command})
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
