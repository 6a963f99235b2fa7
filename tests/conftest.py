# tests/conftest.py
import json

import pytest
import requests

from budgetbuddy.api import ApiClient
from budgetbuddy.auth import AuthController
from budgetbuddy.session_store import MemorySessionStore
from budgetbuddy.state import AuthFormState
from budgetbuddy.transactions import TransactionFetcher

AUTH_URL = "http://auth.test:8080"
FINANCE_URL = "http://finance.test:8081"


def make_response(status_code=200, payload=None, text=None):
    resp = requests.Response()
    resp.status_code = status_code
    if payload is not None:
        resp._content = json.dumps(payload).encode("utf-8")
        resp.headers["Content-Type"] = "application/json"
    else:
        resp._content = (text or "").encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """Stands in for requests.Session: records calls, replays queued outcomes.

    Each queued outcome is a Response, an exception instance to raise, or a
    callable taking the call dict and returning one of those.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def request(self, method, url, **kwargs):
        call = dict(kwargs, method=method, url=url)
        self.calls.append(call)
        if not self.outcomes:
            raise AssertionError(f"unexpected request: {method} {url}")
        outcome = self.outcomes.pop(0)
        if callable(outcome) and not isinstance(outcome, requests.Response):
            outcome = outcome(call)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def auth_session():
    return FakeSession()


@pytest.fixture
def finance_session():
    return FakeSession()


@pytest.fixture
def auth_client(auth_session):
    return ApiClient(AUTH_URL, timeout=5, session=auth_session)


@pytest.fixture
def finance_client(finance_session):
    return ApiClient(FINANCE_URL, timeout=5, session=finance_session)


@pytest.fixture
def store():
    return MemorySessionStore()


@pytest.fixture
def form():
    return AuthFormState()


@pytest.fixture
def controller(auth_client, store, form):
    return AuthController(auth_client, store, form)


@pytest.fixture
def fetcher(finance_client, auth_client):
    return TransactionFetcher(finance_client, auth=auth_client)
