"""Decide whether a release milestone is due."""

from datetime import date, timezone
from typing import Any, Dict, Optional

from milestonecheck.clock import Clock, SystemClock
from milestonecheck.errors import MilestoneLookupError
from milestonecheck.github.client import GitHubClient
from milestonecheck.github.models import Credential, Milestone, Repository
from milestonecheck.trace.schema import EventType, new_event
from milestonecheck.trace.store_jsonl import JsonlTraceStore


def due_date(milestone: Milestone) -> Optional[date]:
    """Return the milestone's due date as a UTC calendar date.

    Args:
        milestone: Milestone snapshot.

    Returns:
        The date of ``due_on`` at UTC offset 0, or None if no due date is set.
    """
    if milestone.due_on is None:
        return None
    due_on = milestone.due_on
    if due_on.tzinfo is None:
        due_on = due_on.replace(tzinfo=timezone.utc)
    return due_on.astimezone(timezone.utc).date()


def is_due(due: Optional[date], today: date) -> bool:
    """A milestone is due on its due date and every day after."""
    return due is not None and today >= due


def _emit(trace_store: Optional[JsonlTraceStore], event_type: EventType, payload: Dict[str, Any]):
    if trace_store is not None:
        trace_store.append(new_event(event_type, payload))


def is_milestone_due_today(
    repository: Repository,
    credential: Optional[Credential],
    version: str,
    *,
    clock: Optional[Clock] = None,
    client: Optional[GitHubClient] = None,
    trace_store: Optional[JsonlTraceStore] = None,
) -> bool:
    """Check whether the milestone titled ``version`` is due today or past due.

    The due date is taken in UTC while "today" comes from ``clock``, which
    defaults to the local date of this process.

    Args:
        repository: Repository owning the milestone.
        credential: Access token, or None for anonymous access.
        version: Milestone title to look up.
        clock: Source of today's date. Defaults to SystemClock.
        client: GitHub client to use. One is built from ``credential`` if None.
        trace_store: Optional trace store for lookup and decision events.

    Returns:
        True if the milestone has a due date that is today or earlier.

    Raises:
        MilestoneLookupError: If the milestone cannot be retrieved.
    """
    if clock is None:
        clock = SystemClock()

    _emit(
        trace_store,
        EventType.LOOKUP,
        {
            "repo": repository.full_name,
            "version": version,
            "authenticated": credential is not None,
        },
    )

    owns_client = client is None
    if client is None:
        client = GitHubClient(credential=credential)
    try:
        milestone = client.get_milestone(repository, version)
    except MilestoneLookupError as e:
        _emit(
            trace_store,
            EventType.ERROR,
            {
                "repo": repository.full_name,
                "version": version,
                "error": type(e).__name__,
                "reason": e.reason,
                "message": str(e),
            },
        )
        raise
    finally:
        if owns_client:
            client.close()

    _emit(
        trace_store,
        EventType.OBSERVATION,
        {
            "repo": repository.full_name,
            "title": milestone.title,
            "number": milestone.number,
            "state": milestone.state,
            "due_on": milestone.due_on.isoformat() if milestone.due_on else None,
        },
    )

    due = due_date(milestone)
    today = clock.today()
    result = is_due(due, today)

    _emit(
        trace_store,
        EventType.DECISION,
        {
            "repo": repository.full_name,
            "version": version,
            "due_date": due.isoformat() if due else None,
            "today": today.isoformat(),
            "due": result,
        },
    )
    return result
