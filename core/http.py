from __future__ import annotations
import logging, httpx
from typing import Any, Mapping, Optional

from core.errors import DecodeError, RateLimitExceeded, TransportError, UpstreamStatusError
from core.ratelimit import Admission, NoLimit

logger = logging.getLogger("HttpClient")

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "X-Requested-With": "XMLHttpRequest",
}

class HttpClient:
    """Single-shot HTTP caller gated by an admission policy (no retries)."""

    def __init__(self, base_url: str, timeout: float = 15.0, limiter: Optional[Admission] = None,
                 api_key: str = "", client: Optional[httpx.Client] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.limiter: Admission = limiter if limiter is not None else NoLimit()
        self.api_key = api_key
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=timeout)

    def request(self, method: str, path: str, params: Optional[Mapping[str, str]] = None) -> httpx.Response:
        if not self.limiter.try_acquire():
            logger.warning(f"⛔ Rate limit reached, {method} {path} not sent")
            raise RateLimitExceeded(path)

        query = dict(params or {})
        if self.api_key:
            query["api_key"] = self.api_key
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(f"{method} {url} ({len(query)} params)")
        try:
            return self.client.request(method, url, params=query, headers=DEFAULT_HEADERS)
        except httpx.HTTPError as e:
            raise TransportError(path, str(e)) from e

    def get_json(self, path: str, params: Optional[Mapping[str, str]] = None) -> Any:
        r = self.request("GET", path, params)
        if r.status_code != httpx.codes.OK:
            raise UpstreamStatusError(r.status_code, r.text)
        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(path, str(e)) from e

    def use_client(self, client: httpx.Client) -> None:
        # le client injecté reste à la charge de l'appelant
        if self._owns_client:
            self.client.close()
        self.client = client
        self._owns_client = False

    def close(self):
        if self._owns_client:
            self.client.close()
