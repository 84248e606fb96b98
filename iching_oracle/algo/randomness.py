"""Sources of uniform integer draws consumed by the line generators."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

import numpy as np
import requests

from ..config import DEFAULT_RANDOM_ORG_URL, DEFAULT_USER_AGENT, Settings
from .errors import SourceUnavailable

logger = logging.getLogger(__name__)

# random.org refuses larger batches in a single request
MAX_REMOTE_BATCH = 10_000


class RandomnessMode(Enum):
    RANDOM = "random"
    PSEUDORANDOM = "pseudorandom"

    def __str__(self) -> str:
        return self.value


class RandomnessSource(ABC):
    mode: RandomnessMode

    @abstractmethod
    def draw_uniform(self, n: int) -> int:
        """Return an integer uniformly distributed in [0, n)."""
        raise NotImplementedError

    def draw_many(self, n: int, count: int) -> List[int]:
        if count < 0:
            raise ValueError("count must be non-negative")
        return [self.draw_uniform(n) for _ in range(count)]

    @staticmethod
    def validate(n: int) -> None:
        if n < 1:
            raise ValueError(f"draw range must be at least 1, got {n}")

    def close(self) -> None:
        """Release whatever the source holds open."""


class LocalSource(RandomnessSource):
    """Pseudorandom draws from a numpy generator."""

    mode = RandomnessMode.PSEUDORANDOM

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)

    def draw_uniform(self, n: int) -> int:
        self.validate(n)
        return int(self._rng.integers(0, n))

    def draw_many(self, n: int, count: int) -> List[int]:
        self.validate(n)
        if count < 0:
            raise ValueError("count must be non-negative")
        return [int(v) for v in self._rng.integers(0, n, size=count)]


class RemoteSource(RandomnessSource):
    """True-random draws from the random.org integer generator.

    Every request is bounded by ``timeout``; any failure, including a
    response that does not contain exactly the requested integers in range,
    raises :class:`SourceUnavailable`. Nothing is retried.
    """

    mode = RandomnessMode.RANDOM

    def __init__(
        self,
        url: str = DEFAULT_RANDOM_ORG_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.url = url
        self.timeout = float(timeout)
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.user_agent = user_agent

    def draw_uniform(self, n: int) -> int:
        return self.draw_many(n, 1)[0]

    def close(self) -> None:
        # a session passed in belongs to the caller
        if self._owns_session:
            self.session.close()

    def draw_many(self, n: int, count: int) -> List[int]:
        self.validate(n)
        if count < 0:
            raise ValueError("count must be non-negative")
        if count == 0:
            return []
        if n == 1:
            return [0] * count

        values: List[int] = []
        while len(values) < count:
            batch = min(MAX_REMOTE_BATCH, count - len(values))
            values.extend(self._fetch(n, batch))
        return values

    def _params(self, n: int, count: int) -> dict:
        return {
            "num": count,
            "min": 0,
            "max": n - 1,
            "col": 1,
            "base": 10,
            "format": "plain",
            "rnd": "new",
        }

    def _fetch(self, n: int, count: int) -> List[int]:
        logger.debug("Requesting %d integer(s) in [0, %d) from %s", count, n, self.url)
        try:
            resp = self.session.get(
                self.url,
                params=self._params(n, count),
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.Timeout as exc:
            logger.warning("Random source timed out after %.1fs", self.timeout)
            raise SourceUnavailable(f"random.org request timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            logger.warning("Random source request failed: %s", exc)
            raise SourceUnavailable(f"random.org request failed: {exc}") from exc
        return self.parse_response(resp.text, n, count)

    @staticmethod
    def parse_response(body: str, n: int, count: int) -> List[int]:
        tokens = body.split()
        if len(tokens) != count:
            raise SourceUnavailable(f"expected {count} integer(s) from random.org, got {len(tokens)}")
        try:
            values = [int(token) for token in tokens]
        except ValueError:
            raise SourceUnavailable(f"malformed random.org response: {body[:80]!r}") from None
        for value in values:
            if not 0 <= value < n:
                raise SourceUnavailable(f"random.org returned {value}, outside [0, {n})")
        return values


def create_source(
    mode: RandomnessMode | str,
    settings: Optional[Settings] = None,
    *,
    seed: Optional[int] = None,
) -> RandomnessSource:
    """Build the source for ``mode``; ``seed`` only applies to the local generator."""
    mode = RandomnessMode(mode)
    settings = settings or Settings()
    if mode is RandomnessMode.RANDOM:
        return RemoteSource(
            url=settings.random_org_url,
            timeout=settings.remote_timeout,
            user_agent=settings.user_agent,
        )
    if mode is RandomnessMode.PSEUDORANDOM:
        return LocalSource(seed=seed)
    raise ValueError(f"Unknown randomness mode: {mode}")
