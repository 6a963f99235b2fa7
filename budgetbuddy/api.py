# budgetbuddy/api.py
import logging

import requests

from .errors import ConnectivityError, ServerError, UnknownError

logger = logging.getLogger("budgetbuddy-client")


# ---------------- Helpers ----------------
def safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        return None


def classify_failure(exc=None, response=None):
    """Map a raw transport outcome to an AuthError.

    ``exc`` is whatever requests raised (if anything), ``response`` is the
    response that came back (if any). The result is returned, not raised.
    """
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return ConnectivityError()

    if exc is None and response is not None and not response.ok:
        payload = safe_json(response)
        message = None
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            message = payload["message"].strip() or None
        return ServerError(message, status_code=response.status_code)

    if exc is not None:
        return UnknownError(f"Unexpected error: {exc}")
    return UnknownError()


# ---------------- Client ----------------
class ApiClient:
    """JSON-over-HTTP client for one backend service."""

    def __init__(self, base_url, timeout=10, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def url(self, path):
        return self.base_url + path

    def request(self, method, path, token=None, json=None, params=None):
        """Send one request and return the response, whatever its status.

        Connection failures and timeouts are raised as ConnectivityError;
        any other requests failure as UnknownError.
        """
        headers = {"Accept": "application/json"}
        if json is not None:
            headers["Content-Type"] = "application/json"
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = self.url(path)
        try:
            response = self.session.request(
                method.upper(), url,
                headers=headers, json=json, params=params, timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"❌ {method.upper()} {url} failed: {e}")
            raise classify_failure(exc=e) from e

        logger.debug(f"{method.upper()} {url} -> {response.status_code}")
        return response

    def get(self, path, token=None, params=None):
        return self.request("GET", path, token=token, params=params)

    def post(self, path, json=None, token=None):
        return self.request("POST", path, token=token, json=json)
