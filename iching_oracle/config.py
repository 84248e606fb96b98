from __future__ import annotations

import os
from dataclasses import dataclass

import dotenv

DEFAULT_RANDOM_ORG_URL = "https://www.random.org/integers/"
DEFAULT_USER_AGENT = "iching-oracle/0.2 (+https://www.random.org/clients/)"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from the environment (and a `.env` file if present)."""

    random_org_url: str = DEFAULT_RANDOM_ORG_URL
    remote_timeout: float = 10.0
    method: str = "yarrow-stalks"
    randomness: str = "random"
    log_level: str = "WARNING"
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, *, load_dotenv: bool = True) -> "Settings":
        if load_dotenv:
            dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))

        timeout_raw = os.getenv("ICHING_REMOTE_TIMEOUT", str(cls.remote_timeout))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"ICHING_REMOTE_TIMEOUT must be a number, got {timeout_raw!r}") from None
        if timeout <= 0:
            raise ValueError("ICHING_REMOTE_TIMEOUT must be positive")

        log_level = os.getenv("ICHING_LOG_LEVEL", cls.log_level).strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"ICHING_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")

        # the method and randomness names are validated by the enums that consume them
        return cls(
            random_org_url=os.getenv("ICHING_RANDOM_ORG_URL", cls.random_org_url),
            remote_timeout=timeout,
            method=os.getenv("ICHING_METHOD", cls.method).strip().lower(),
            randomness=os.getenv("ICHING_RANDOMNESS", cls.randomness).strip().lower(),
            log_level=log_level,
            user_agent=os.getenv("ICHING_USER_AGENT", cls.user_agent),
        )
