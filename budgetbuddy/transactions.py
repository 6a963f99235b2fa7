# budgetbuddy/transactions.py
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .api import safe_json
from .errors import BudgetBuddyError, FetchError, MissingTokenError

logger = logging.getLogger("budgetbuddy-client")

TRANSACTION_TYPES = ("income", "expense")


# ---------------- Models ----------------
@dataclass(frozen=True)
class Transaction:
    id: int
    type: Optional[str]
    amount: float
    description: str
    date: str
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    tags: Tuple[str, ...] = ()
    note: str = ""

    @classmethod
    def from_dict(cls, data, default_type=None):
        """Build a Transaction from one item of the /transactions payload.

        Raises ValueError if the item does not look like a transaction.
        """
        if not isinstance(data, dict):
            raise ValueError(f"transaction must be an object, got {type(data).__name__}")

        tx_type = data.get("type") or default_type
        if tx_type is not None and tx_type not in TRANSACTION_TYPES:
            raise ValueError(f"unknown transaction type: {tx_type!r}")

        tags = data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError("tags must be a list of strings")

        date = data.get("date")
        if not isinstance(date, str) or not date:
            raise ValueError("date must be an ISO-8601 string")

        return cls(
            id=_int(data.get("id"), "id"),
            type=tx_type,
            amount=_number(data.get("amount"), "amount"),
            description=_str(data.get("description"), "description"),
            date=date,
            category_id=_optional_int(data.get("category_id"), "category_id"),
            subcategory_id=_optional_int(data.get("subcategory_id"), "subcategory_id"),
            tags=tuple(tags),
            note=_str(data.get("note"), "note"),
        )


@dataclass(frozen=True)
class Profile:
    email: str
    name: str


def _int(value, name):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    return value


def _optional_int(value, name):
    return None if value is None else _int(value, name)


def _number(value, name):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number")
    return float(value)


def _str(value, name):
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def parse_transactions(payload, default_type=None):
    """Parse the whole payload or nothing: one bad item fails the lot."""
    if not isinstance(payload, list):
        raise ValueError("transactions payload must be a JSON array")
    return [Transaction.from_dict(item, default_type=default_type) for item in payload]


# ---------------- Fetcher ----------------
class TransactionFetcher:
    """Authenticated reads against the backend.

    ``finance`` serves /transactions; ``auth`` (optional) serves /profile.
    Every call is a fresh request; see get_user_profile for the cached profile.
    """

    def __init__(self, finance, auth=None):
        self.finance = finance
        self.auth = auth

    def fetch_transactions(self, token, tx_type=None):
        if not token:
            raise MissingTokenError()
        if tx_type is not None and tx_type not in TRANSACTION_TYPES:
            raise ValueError(f"tx_type must be one of {TRANSACTION_TYPES}, got {tx_type!r}")

        params = {"type": tx_type} if tx_type else None
        response = self.finance.get("/transactions", token=token, params=params)
        if not response.ok:
            raise FetchError(response.text, status_code=response.status_code)

        try:
            transactions = parse_transactions(safe_json(response), default_type=tx_type)
        except ValueError as e:
            logger.error(f"Malformed /transactions payload: {e}")
            raise FetchError(response.text, status_code=response.status_code) from e

        logger.info(f"📥 Fetched {len(transactions)} transactions")
        return transactions

    def fetch_profile(self, token):
        if not token:
            raise MissingTokenError()
        if self.auth is None:
            raise RuntimeError("fetch_profile needs an auth service client")

        response = self.auth.get("/profile", token=token)
        if not response.ok:
            raise FetchError(response.text, status_code=response.status_code)

        body = safe_json(response)
        if not isinstance(body, dict) or not isinstance(body.get("email"), str):
            raise FetchError(response.text, status_code=response.status_code)
        return Profile(email=body["email"], name=body.get("name") or "")


# ---------------- Per-user cache ----------------
PROFILE_CACHE_KEY = "user_profile"


def get_user_profile(state, token, fetcher):
    """Profile for ``token``, fetched once and kept in ``state``.

    A failed fetch is cached as well and re-raised until the cache is cleared.
    """
    cached = state.get(PROFILE_CACHE_KEY)
    if cached is not None and cached[0] == token:
        _, profile, error = cached
    else:
        try:
            profile, error = fetcher.fetch_profile(token), None
        except BudgetBuddyError as e:
            profile, error = None, e
        state[PROFILE_CACHE_KEY] = (token, profile, error)

    if error is not None:
        raise error
    return profile


def clear_user_cache(state):
    """Drop cached per-user data, e.g. after a new login."""
    state.pop(PROFILE_CACHE_KEY, None)
