"""Vision service client with configurable retry and timeout."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, Optional, Protocol

import requests

from machine_scan.core.constants import SERVICE_BASE_URL, SERVICE_ENDPOINT

logger = logging.getLogger(__name__)


class APIError(RuntimeError):
    """Raised for vision service failures after retries."""


class ClassificationCapability(Protocol):
    """Anything that can classify a machine recognition request."""

    async def classify(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Return the service response; raise APIError on transport failure."""
        ...


class VisionServiceAPI:
    """Thin wrapper around the machine analysis endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = SERVICE_BASE_URL,
        endpoint: str = SERVICE_ENDPOINT,
        max_retries: int = 1,
        timeout_seconds: float = 60,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.endpoint = "/" + endpoint.lstrip("/")
        self.max_retries = max(1, max_retries)
        self.timeout_seconds = timeout_seconds

    @property
    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _request(self, method: str, path: str, json_data: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = requests.request(
                    method=method,
                    url=url,
                    headers=self._headers,
                    json=json_data,
                    timeout=self.timeout_seconds,
                )
                if response.status_code in (429, 500, 502, 503, 504):
                    raise requests.HTTPError(response.text, response=response)
                response.raise_for_status()

                if not response.text:
                    return {}
                return response.json()
            except (requests.RequestException, ValueError, TypeError) as exc:
                last_error = exc
                logger.info("Attempt %d/%d for %s %s failed: %s", attempt, self.max_retries, method, path, exc)
                if attempt >= self.max_retries:
                    break
                time.sleep(min(2**attempt, 8))

        raise APIError(f"API request failed for {method} {path}: {last_error}")

    def post(self, path: str, payload: Dict[str, Any]) -> Any:
        return self._request("POST", path, json_data=payload)

    def analyze_machine(self, request: Dict[str, Any]) -> Any:
        return self.post(self.endpoint, request)

    async def classify(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Run the blocking request off the event loop."""
        return await asyncio.to_thread(self.analyze_machine, request)
