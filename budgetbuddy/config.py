# budgetbuddy/config.py
import os
from dataclasses import dataclass
from typing import Optional

# ---------------- Defaults ----------------
DEFAULT_AUTH_URL = "http://localhost:8080"
DEFAULT_FINANCE_URL = "http://localhost:8081"
DEFAULT_TIMEOUT = 10
DEFAULT_TOKEN_FILE = None
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    auth_url: str = DEFAULT_AUTH_URL
    finance_url: str = DEFAULT_FINANCE_URL
    timeout: float = DEFAULT_TIMEOUT
    token_file: Optional[str] = DEFAULT_TOKEN_FILE
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ=None):
        """Build settings from BUDGETBUDDY_* environment variables.

        Auth and finance services may live on different hosts/ports, so each
        has its own variable.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("BUDGETBUDDY_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except (TypeError, ValueError):
            raise ValueError(f"BUDGETBUDDY_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError(f"BUDGETBUDDY_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            auth_url=env.get("BUDGETBUDDY_AUTH_URL", DEFAULT_AUTH_URL).rstrip("/"),
            finance_url=env.get("BUDGETBUDDY_FINANCE_URL", DEFAULT_FINANCE_URL).rstrip("/"),
            timeout=timeout,
            token_file=env.get("BUDGETBUDDY_TOKEN_FILE") or DEFAULT_TOKEN_FILE,
            log_level=env.get("BUDGETBUDDY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )
