# budgetbuddy/auth.py
import logging
from dataclasses import dataclass

from .api import classify_failure, safe_json
from .errors import AuthError, UnknownError, ValidationError
from .state import REGISTER, AuthFormState

logger = logging.getLogger("budgetbuddy-client")

LOGIN_SUCCESS_MESSAGE = "Login successful!"
REGISTER_SUCCESS_MESSAGE = "Registration successful!"


@dataclass(frozen=True)
class Session:
    token: str


class AuthController:
    """Submits login/register requests and turns the outcome into session state.

    ``client`` is an ApiClient pointed at the auth service, ``store`` a
    SessionStore and ``form`` the AuthFormState the view renders.
    """

    def __init__(self, client, store, form=None):
        self.client = client
        self.store = store
        self.form = form if form is not None else AuthFormState()

    # ---------------- Public API ----------------
    def submit(self):
        """Submit whatever the form currently holds."""
        f = self.form
        if f.form_type == REGISTER:
            return self.submit_register(f.email, f.password, f.name, f.confirm_password)
        return self.submit_login(f.email, f.password)

    def submit_login(self, email, password):
        return self._submit(
            "/login",
            {"email": email, "password": password},
            LOGIN_SUCCESS_MESSAGE,
        )

    def submit_register(self, email, password, name, confirm_password):
        def passwords_match():
            if password != confirm_password:
                raise ValidationError()

        return self._submit(
            "/register",
            {"email": email, "password": password, "name": name},
            REGISTER_SUCCESS_MESSAGE,
            validate=passwords_match,
        )

    # ---------------- Internals ----------------
    def _submit(self, path, payload, success_message, validate=None):
        if not self.form.begin_submit():
            logger.warning(f"⚠️ Submission to {path} already in progress, ignoring")
            return None

        try:
            if validate is not None:
                validate()
            session = self._exchange(path, payload)
        except AuthError as e:
            logger.error(f"❌ {path} failed: {e.message}")
            self.form.fail(e.message)
            raise
        except Exception as e:
            logger.exception(f"❌ {path} failed unexpectedly")
            error = UnknownError()
            self.form.fail(error.message)
            raise error from e
        finally:
            self.form.end_submit()

        self.form.succeed(success_message)
        logger.info(f"✅ {path} succeeded for {payload['email']}")
        return session

    def _exchange(self, path, payload):
        response = self.client.post(path, json=payload)
        if not response.ok:
            raise classify_failure(response=response)

        body = safe_json(response)
        token = body.get("token") if isinstance(body, dict) else None
        if not isinstance(token, str) or not token:
            raise UnknownError("Server response did not contain a session token")

        self.store.set(token)
        return Session(token=token)
