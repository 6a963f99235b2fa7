# budgetbuddy/errors.py
"""Error taxonomy for the client.

Every error carries a user-facing ``message`` that the view shows verbatim.
"""

# ---------------- User-facing messages ----------------
PASSWORD_MISMATCH_MESSAGE = "Passwords do not match"
CONNECTIVITY_MESSAGE = "Could not reach the server. Check your connection and try again."
SERVER_FALLBACK_MESSAGE = "Request failed. Please try again."
UNKNOWN_MESSAGE = "Something went wrong. Please try again."
MISSING_TOKEN_MESSAGE = "You are not logged in. Please log in to see your transactions."


class BudgetBuddyError(Exception):
    default_message = UNKNOWN_MESSAGE

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(BudgetBuddyError):
    """Base for everything a login/register submission can fail with."""


class ValidationError(AuthError):
    """Local precondition failed; nothing was sent."""
    default_message = PASSWORD_MISMATCH_MESSAGE


class ConnectivityError(AuthError):
    """No response was received (refused, DNS, timeout)."""
    default_message = CONNECTIVITY_MESSAGE


class ServerError(AuthError):
    default_message = SERVER_FALLBACK_MESSAGE

    def __init__(self, message=None, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class UnknownError(AuthError):
    default_message = UNKNOWN_MESSAGE


class MissingTokenError(BudgetBuddyError):
    """An authenticated read was attempted with no stored token."""
    default_message = MISSING_TOKEN_MESSAGE


class FetchError(BudgetBuddyError):
    """Authenticated read reached the server but failed. ``message`` is the raw body."""

    def __init__(self, body="", status_code=None):
        super().__init__(body or f"Request failed with status {status_code}")
        self.body = body
        self.status_code = status_code
