"""Tests for the milestone due evaluation."""

from datetime import date, datetime, timedelta, timezone

import pytest

from milestonecheck.clock import FixedClock, SystemClock
from milestonecheck.errors import MilestoneNotFoundError, MilestoneTransportError
from milestonecheck.evaluator import due_date, is_due, is_milestone_due_today
from milestonecheck.github.client import GitHubClient
from milestonecheck.github.models import Credential, Milestone

from conftest import API_URL, milestone_payload, stub_session

TODAY = date(2024, 3, 1)


class StubClient:
    """Returns a fixed milestone, or raises for unknown titles."""

    def __init__(self, milestone):
        self.milestone = milestone
        self.calls = []
        self.closed = False

    def get_milestone(self, repository, title):
        self.calls.append((repository, title))
        if self.milestone is None or self.milestone.title != title:
            raise MilestoneNotFoundError(repository, title)
        return self.milestone

    def close(self):
        self.closed = True


def _milestone(due_on):
    return Milestone(title="1.2.0", number=2, state="open", due_on=due_on)


def _due_in(days):
    due = datetime(TODAY.year, TODAY.month, TODAY.day, tzinfo=timezone.utc) + timedelta(days=days)
    return _milestone(due)


def _check(repository, milestone, today=TODAY):
    return is_milestone_due_today(
        repository, None, "1.2.0", clock=FixedClock(today), client=StubClient(milestone)
    )


def test_no_due_date_is_never_due(repository):
    assert _check(repository, _milestone(None)) is False
    assert _check(repository, _milestone(None), today=date(2999, 1, 1)) is False


def test_due_today_is_due(repository):
    assert _check(repository, _due_in(0)) is True


def test_due_tomorrow_is_not_due(repository):
    assert _check(repository, _due_in(1)) is False


def test_due_yesterday_is_due(repository):
    assert _check(repository, _due_in(-1)) is True


def test_long_past_due_is_still_due(repository):
    assert _check(repository, _due_in(-365)) is True


def test_sagan_scenario(repository):
    milestone = _milestone(datetime(2024, 3, 1, tzinfo=timezone.utc))
    assert _check(repository, milestone, today=date(2024, 3, 1)) is True
    assert _check(repository, milestone, today=date(2024, 2, 28)) is False


def test_due_date_is_taken_in_utc():
    # 07:00 in Tokyo on March 1st is still February 29th in UTC.
    tokyo = timezone(timedelta(hours=9))
    assert due_date(_milestone(datetime(2024, 3, 1, 7, 0, tzinfo=tokyo))) == date(2024, 2, 29)

    # Late evening in New York is already the next day in UTC.
    new_york = timezone(timedelta(hours=-5))
    assert due_date(_milestone(datetime(2024, 2, 29, 22, 0, tzinfo=new_york))) == date(2024, 3, 1)


def test_naive_due_on_is_treated_as_utc():
    assert due_date(_milestone(datetime(2024, 3, 1, 23, 59))) == date(2024, 3, 1)


def test_due_date_absent():
    assert due_date(_milestone(None)) is None


def test_is_due():
    assert is_due(date(2024, 3, 1), date(2024, 3, 1))
    assert is_due(date(2024, 2, 29), date(2024, 3, 1))
    assert not is_due(date(2024, 3, 2), date(2024, 3, 1))
    assert not is_due(None, date(2024, 3, 1))


def test_not_found_propagates(repository):
    with pytest.raises(MilestoneNotFoundError) as excinfo:
        is_milestone_due_today(
            repository, None, "9.9.9", clock=FixedClock(TODAY), client=StubClient(_due_in(0))
        )
    assert isinstance(excinfo.value, LookupError)


def test_transport_failure_propagates_without_fallback(repository):
    class FailingClient(StubClient):
        def get_milestone(self, repository, title):
            raise MilestoneTransportError(repository, title, "connection reset")

    with pytest.raises(MilestoneTransportError):
        is_milestone_due_today(
            repository, None, "1.2.0", clock=FixedClock(TODAY), client=FailingClient(None)
        )


def test_repeated_evaluation_is_stable(repository):
    client = StubClient(_due_in(0))
    first = is_milestone_due_today(repository, None, "1.2.0", clock=FixedClock(TODAY), client=client)
    second = is_milestone_due_today(repository, None, "1.2.0", clock=FixedClock(TODAY), client=client)
    assert first is second is True
    assert len(client.calls) == 2


def test_injected_client_is_not_closed(repository):
    client = StubClient(_due_in(0))
    _ = is_milestone_due_today(repository, None, "1.2.0", clock=FixedClock(TODAY), client=client)
    assert client.closed is False


def test_default_client_uses_credential(repository, monkeypatch):
    session, adapter = stub_session(
        lambda request: (200, [milestone_payload("1.2.0", "2024-03-01T00:00:00Z")])
    )
    built = {}

    def make_client(credential=None):
        built["credential"] = credential
        return GitHubClient(credential=credential, base_url=API_URL, session=session)

    monkeypatch.setattr("milestonecheck.evaluator.GitHubClient", make_client)
    credential = Credential.from_token("ghp_abc123")

    assert is_milestone_due_today(repository, credential, "1.2.0", clock=FixedClock(TODAY)) is True
    assert built["credential"] is credential
    assert "Authorization" in adapter.sent[0][0].headers


def test_system_clock_uses_local_date():
    assert SystemClock().today() == date.today()
