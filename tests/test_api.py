# tests/test_api.py
import pytest
import requests

from budgetbuddy.api import ApiClient, classify_failure
from budgetbuddy.config import Settings
from budgetbuddy.errors import (
    CONNECTIVITY_MESSAGE,
    SERVER_FALLBACK_MESSAGE,
    ConnectivityError,
    ServerError,
    UnknownError,
)

from conftest import FakeSession, make_response


# ---------------- classify_failure ----------------
def test_classify_connection_error():
    error = classify_failure(exc=requests.ConnectionError("refused"))
    assert isinstance(error, ConnectivityError)
    assert error.message == CONNECTIVITY_MESSAGE


def test_classify_server_message():
    error = classify_failure(response=make_response(401, {"message": "bad credentials"}))
    assert isinstance(error, ServerError)
    assert error.message == "bad credentials"
    assert error.status_code == 401


def test_classify_server_non_string_message():
    error = classify_failure(response=make_response(400, {"message": {"field": "email"}}))
    assert error.message == SERVER_FALLBACK_MESSAGE


def test_classify_unknown_shapes():
    assert isinstance(classify_failure(), UnknownError)
    assert isinstance(classify_failure(exc=requests.exceptions.InvalidURL("nope")), UnknownError)
    assert isinstance(classify_failure(response=make_response(200, {})), UnknownError)


# ---------------- ApiClient ----------------
def test_client_builds_urls_and_headers():
    session = FakeSession(make_response(200, []))
    client = ApiClient("http://finance.test:8081/", timeout=3, session=session)

    client.get("/transactions", token="t", params={"type": "income"})

    call = session.calls[0]
    assert call["url"] == "http://finance.test:8081/transactions"
    assert call["headers"] == {"Accept": "application/json", "Authorization": "Bearer t"}
    assert call["params"] == {"type": "income"}
    assert call["timeout"] == 3


def test_client_returns_error_responses():
    session = FakeSession(make_response(404, text="not found"))
    client = ApiClient("http://x", session=session)

    response = client.get("/nowhere")

    assert response.status_code == 404


def test_client_maps_timeout():
    client = ApiClient("http://x", session=FakeSession(requests.Timeout("slow")))
    with pytest.raises(ConnectivityError):
        client.post("/login", json={})


# ---------------- Settings ----------------
def test_settings_defaults():
    settings = Settings.from_env({})
    assert settings.auth_url == "http://localhost:8080"
    assert settings.finance_url == "http://localhost:8081"
    assert settings.timeout == 10
    assert settings.token_file is None
    assert settings.log_level == "INFO"


def test_settings_from_env():
    settings = Settings.from_env({
        "BUDGETBUDDY_AUTH_URL": "http://users:9000/",
        "BUDGETBUDDY_FINANCE_URL": "http://finance:9001",
        "BUDGETBUDDY_TIMEOUT": "2.5",
        "BUDGETBUDDY_TOKEN_FILE": "data/session.json",
        "BUDGETBUDDY_LOG_LEVEL": "debug",
    })
    assert settings.auth_url == "http://users:9000"
    assert settings.finance_url == "http://finance:9001"
    assert settings.timeout == 2.5
    assert settings.token_file == "data/session.json"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_settings_rejects_bad_timeout(raw):
    with pytest.raises(ValueError):
        Settings.from_env({"BUDGETBUDDY_TIMEOUT": raw})
