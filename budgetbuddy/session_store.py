# budgetbuddy/session_store.py
import json
import logging
import os

logger = logging.getLogger("budgetbuddy-client")

TOKEN_KEY = "token"


def _check_token(token):
    if not isinstance(token, str) or not token:
        raise ValueError("session token must be a non-empty string")


class SessionStore:
    """Single durable slot holding the session token.

    There is no expiry: a stored token stays valid until it is overwritten
    or cleared.
    """

    def get(self):
        raise NotImplementedError

    def set(self, token):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    def __init__(self, token=None):
        self._token = None
        if token is not None:
            self.set(token)

    def get(self):
        return self._token

    def set(self, token):
        _check_token(token)
        self._token = token

    def clear(self):
        self._token = None


class StreamlitSessionStore(SessionStore):
    """Keeps the token in a mutable mapping, e.g. Streamlit's ``st.session_state``."""

    def __init__(self, state, key=TOKEN_KEY):
        self.state = state
        self.key = key

    def get(self):
        return self.state.get(self.key) or None

    def set(self, token):
        _check_token(token)
        self.state[self.key] = token

    def clear(self):
        self.state[self.key] = None


class FileSessionStore(SessionStore):
    """Token persisted as JSON on disk so it survives restarts."""

    def __init__(self, path, key=TOKEN_KEY):
        self.path = path
        self.key = key

    def _load(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            # Undecodable or unreadable file reads as "no session"
            logger.warning(f"Could not read session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4)

    def get(self):
        token = self._load().get(self.key)
        return token if isinstance(token, str) and token else None

    def set(self, token):
        _check_token(token)
        data = self._load()
        data[self.key] = token
        self._save(data)

    def clear(self):
        data = self._load()
        data.pop(self.key, None)
        self._save(data)
