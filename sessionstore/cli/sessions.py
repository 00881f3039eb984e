# ==============================================================================
# Session Commands
# ==============================================================================
"""
Read-only session lookups for operators.

Every command prints JSON so output can be piped into other tools, and
closes the store client it opened before returning.
"""

import json
from typing import Annotated

import typer

from sessionstore.cli.shared import build_session_repository, build_timestamp_store, fail
from sessionstore.core.errors import NotFoundError, SessionStoreError


def sessions_ids(
    user_id: Annotated[str, typer.Argument(help="Owning user id")],
    website_id: Annotated[str, typer.Argument(help="Website id")],
    today: Annotated[
        bool, typer.Option("--today", "-t", help="Only sessions reported today (UTC)")
    ] = False,
) -> None:
    """List distinct session ids of a website."""
    repository = build_session_repository()
    try:
        if today:
            session_ids = repository.get_session_ids_today(user_id, website_id)
        else:
            session_ids = repository.get_all_session_ids(user_id, website_id)
    except SessionStoreError as e:
        fail("Failed to list sessions", e)
    finally:
        repository.client.close()
    print(json.dumps(session_ids, indent=2))


def sessions_show(
    user_id: Annotated[str, typer.Argument(help="Owning user id")],
    session_id: Annotated[str, typer.Argument(help="Session id")],
) -> None:
    """Show one stored document of a session and its document count."""
    repository = build_session_repository()
    try:
        session = repository.get_session(user_id, session_id)
        count = repository.get_session_count(user_id, session_id)
    except NotFoundError:
        fail(f"Session '{session_id}' not found")
    except SessionStoreError as e:
        fail("Failed to read session", e)
    finally:
        repository.client.close()
    print(json.dumps({"documents": count, "session": session.to_document()}, indent=2))


def sessions_events(
    user_id: Annotated[str, typer.Argument(help="Owning user id")],
    session_id: Annotated[str, typer.Argument(help="Session id")],
    limit: Annotated[
        int, typer.Option("--limit", "-l", min=0, help="Events per page (0 for all)")
    ] = 20,
    skip: Annotated[int, typer.Option("--skip", "-s", min=0, help="Events to skip")] = 0,
) -> None:
    """Show a page of events recorded for a session."""
    repository = build_session_repository()
    try:
        events = repository.get_events_paged(user_id, session_id, limit=limit, skip=skip)
    except SessionStoreError as e:
        fail("Failed to read events", e)
    finally:
        repository.client.close()
    print(json.dumps([event.model_dump(mode="json") for event in events], indent=2))


def sessions_first_seen(
    session_id: Annotated[str, typer.Argument(help="Session id")],
) -> None:
    """Show the first-seen timestamp recorded for a session."""
    store = build_timestamp_store()
    try:
        first_seen = store.get_first_timestamp(session_id)
    except NotFoundError:
        fail(f"No first-seen timestamp for '{session_id}' (never recorded or expired)")
    except SessionStoreError as e:
        fail("Failed to read timestamp", e)
    finally:
        store.client.close()
    print(json.dumps({"session_id": session_id, "first_seen": first_seen}))
