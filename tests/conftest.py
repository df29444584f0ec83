"""Shared fixtures: a requests transport stub so no test touches the network."""

import json
from base64 import b64encode

import pytest
import requests
from requests.adapters import HTTPAdapter

from milestonecheck.github.models import Repository

API_URL = "https://api.github.test"


def basic_header(username, password):
    token = b64encode(f"{username}:{password}".encode("latin1")).decode("ascii")
    return f"Basic {token}"


def make_response(request, status_code, payload):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload).encode("utf-8")
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    response.request = request
    response.url = request.url
    return response


class StubAdapter(HTTPAdapter):
    """Transport adapter that records requests and replays canned responses.

    ``responder`` receives the PreparedRequest and returns either
    ``(status_code, payload)`` or an exception instance to raise.
    """

    def __init__(self, responder):
        super().__init__()
        self.responder = responder
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append((request, kwargs))
        result = self.responder(request)
        if isinstance(result, Exception):
            raise result
        status_code, payload = result
        return make_response(request, status_code, payload)


def stub_session(responder):
    session = requests.Session()
    session.trust_env = False
    adapter = StubAdapter(responder)
    session.mount("https://", adapter)
    return session, adapter


def milestone_payload(title, due_on=None, number=1, state="open"):
    return {
        "url": f"{API_URL}/repos/spring-io/sagan/milestones/{number}",
        "number": number,
        "title": title,
        "state": state,
        "open_issues": 0,
        "closed_issues": 3,
        "due_on": due_on,
    }


@pytest.fixture
def repository():
    return Repository(owner="spring-io", name="sagan")


@pytest.fixture
def milestones():
    return [
        milestone_payload("1.1.0", "2024-01-15T08:00:00Z", number=1, state="closed"),
        milestone_payload("1.2.0", "2024-03-01T00:00:00Z", number=2),
        milestone_payload("2.0.0", None, number=3),
    ]
