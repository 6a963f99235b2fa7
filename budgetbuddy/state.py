# budgetbuddy/state.py
"""Observable UI state: the auth form and the transaction panel.

The view only reads from these objects; AuthController and the panel's
mount() are the only writers.
"""
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import BudgetBuddyError, MissingTokenError, UnknownError

logger = logging.getLogger("budgetbuddy-client")

LOGIN = "login"
REGISTER = "register"
FORM_TYPES = (LOGIN, REGISTER)


class AuthPhase(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class PanelPhase(Enum):
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


# ---------------- Auth form ----------------
@dataclass
class AuthFormState:
    form_type: str = LOGIN
    email: str = ""
    password: str = ""
    name: str = ""
    confirm_password: str = ""
    is_loading: bool = False
    error_message: Optional[str] = None
    success_message: Optional[str] = None
    is_authenticated: bool = False
    phase: AuthPhase = AuthPhase.IDLE

    def switch_form(self, form_type):
        """Change between login and register, resetting every transient field."""
        if form_type not in FORM_TYPES:
            raise ValueError(f"Unknown form type: {form_type!r}")
        self.form_type = form_type
        self.email = ""
        self.password = ""
        self.name = ""
        self.confirm_password = ""
        self.error_message = None
        self.success_message = None
        self.is_authenticated = False
        self.phase = AuthPhase.IDLE

    def begin_submit(self):
        """Enter SUBMITTING. Returns False if a submission is already in flight."""
        if self.is_loading:
            return False
        self.is_loading = True
        self.phase = AuthPhase.SUBMITTING
        return True

    def end_submit(self):
        self.is_loading = False

    def succeed(self, message):
        self.is_authenticated = True
        self.error_message = None
        self.success_message = message
        self.phase = AuthPhase.AUTHENTICATED

    def fail(self, message):
        self.is_authenticated = False
        self.success_message = None
        self.error_message = message
        self.phase = AuthPhase.FAILED


# ---------------- Transaction panel ----------------
class CancelToken:
    """Marks the lifetime of the view that owns a fetch."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()


@dataclass
class TransactionPanel:
    phase: Optional[PanelPhase] = None
    transactions: List = field(default_factory=list)
    error: Optional[BudgetBuddyError] = None
    cancel_token: CancelToken = field(default_factory=CancelToken)

    @property
    def error_message(self):
        return self.error.message if self.error is not None else None

    @property
    def is_empty(self):
        """True only for a successful fetch that returned nothing."""
        return self.phase is PanelPhase.LOADED and not self.transactions

    def mount(self, store, fetcher):
        """Run the one-shot fetch. Later calls are no-ops."""
        if self.phase is not None:
            logger.debug("Transaction panel already mounted, skipping fetch")
            return self.phase

        self.phase = PanelPhase.LOADING
        try:
            token = store.get()
            if not token:
                raise MissingTokenError()
            transactions = fetcher.fetch_transactions(token)
        except BudgetBuddyError as e:
            self._resolve(error=e)
        except Exception:
            logger.exception("❌ Transaction panel failed unexpectedly")
            self._resolve(error=UnknownError())
        else:
            self._resolve(transactions=transactions)
        return self.phase

    def unmount(self):
        self.cancel_token.cancel()

    def _resolve(self, transactions=None, error=None):
        if self.cancel_token.cancelled:
            logger.warning("⚠️ Transaction panel torn down before fetch resolved, discarding result")
            return
        if error is not None:
            logger.error(f"Transaction fetch failed: {error.message}")
            self.error = error
            self.phase = PanelPhase.ERRORED
        else:
            self.transactions = list(transactions)
            self.phase = PanelPhase.LOADED
