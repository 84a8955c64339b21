"""HTTP client with retry/backoff and request metrics."""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from . import config
from .errors import ProviderTransportError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = (429, 500, 502, 503, 504)


@dataclass
class RequestMetrics:
    network_nearby: int = 0
    network_details: int = 0
    retries: int = 0

    @property
    def total_count(self) -> int:
        return self.network_nearby + self.network_details

    def inc_network(self, kind: str) -> None:
        if kind == "nearby":
            self.network_nearby += 1
        elif kind == "details":
            self.network_details += 1
        else:
            raise ValueError(f"Unknown request kind: {kind}")


class HttpClient:
    def __init__(
        self,
        api_key: str,
        timeout: int = config.HTTP_TIMEOUT_SECONDS,
        retry_max: int = config.HTTP_RETRY_MAX,
        backoff_base: float = config.HTTP_BACKOFF_BASE,
        backoff_max: float = config.HTTP_BACKOFF_MAX,
        metrics: Optional[RequestMetrics] = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.retry_max = max(1, int(retry_max))
        self.backoff_base = backoff_base
        self.backoff_max = backoff_max
        self.metrics = metrics
        self.session = requests.Session()

    def get_json(self, url: str, params: Dict[str, Any], kind: str) -> Dict[str, Any]:
        query = dict(params)
        query["key"] = self.api_key

        for attempt in range(1, self.retry_max + 1):
            if self.metrics is not None:
                self.metrics.inc_network(kind)
            try:
                resp = self.session.get(url, params=query, timeout=self.timeout)
            except requests.Timeout as exc:
                logger.warning("Timeout after %ss from %s (attempt %s)", self.timeout, url, attempt)
                if attempt >= self.retry_max:
                    raise ProviderTransportError(f"Request to {url} timed out") from exc
                self._note_retry()
                self._sleep_backoff(attempt)
                continue
            except requests.RequestException as exc:
                logger.warning("Request to %s failed: %s (attempt %s)", url, exc, attempt)
                if attempt >= self.retry_max:
                    raise ProviderTransportError(f"Request to {url} failed: {exc}") from exc
                self._note_retry()
                self._sleep_backoff(attempt)
                continue

            status = resp.status_code
            if status == 200:
                try:
                    payload = resp.json()
                except ValueError as exc:
                    logger.error("Non-JSON response from %s", url)
                    raise ProviderTransportError(f"Non-JSON response from {url}") from exc
                if not isinstance(payload, dict):
                    logger.error("Unexpected JSON payload from %s: %s", url, type(payload).__name__)
                    raise ProviderTransportError(f"Unexpected JSON payload from {url}")
                return payload

            if status in RETRYABLE_STATUSES:
                logger.warning("HTTP %s from %s (attempt %s)", status, url, attempt)
                if attempt >= self.retry_max:
                    raise ProviderTransportError(f"HTTP {status} from {url}")
                self._note_retry()
                if not self._sleep_retry_after(resp):
                    self._sleep_backoff(attempt)
                continue

            # Non-retryable
            logger.error("HTTP %s from %s", status, url)
            raise ProviderTransportError(f"HTTP {status} from {url}")

        raise RuntimeError("Unexpected HTTP retry loop exit")

    def _note_retry(self) -> None:
        if self.metrics is not None:
            self.metrics.retries += 1

    def _sleep_backoff(self, attempt: int) -> None:
        base = min(self.backoff_base * (2 ** (attempt - 1)), self.backoff_max)
        jitter = random.uniform(0, self.backoff_base)
        time.sleep(base + jitter)

    def _sleep_retry_after(self, resp: requests.Response) -> bool:
        retry_after = resp.headers.get("Retry-After")
        if not retry_after:
            return False
        try:
            delay = float(retry_after)
        except ValueError:
            return False
        delay = max(0.0, min(delay, self.backoff_max))
        time.sleep(delay)
        return True
