"""HTTP client with fixed timeout and bounded retry."""

import json
import time
from typing import Any, Callable, Dict, Optional
import requests
from loguru import logger


class ApiError(Exception):
    """Normalized error for any failed request."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_response(cls, response: requests.Response) -> "ApiError":
        body = _decode_body(response)
        try:
            serialized = json.dumps(body)
        except (TypeError, ValueError):
            serialized = str(body)
        return cls(f"API Error: {response.status_code} - {serialized}", response.status_code, body)


def _decode_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """Wraps outbound calls to the API base URL.

    Every failure, transport or HTTP status, is retried the same way: up to
    `max_retries` more attempts with a fixed `retry_delay` between them.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        max_retries: int = 3,
        retry_delay: float = 5,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.session = session or requests.Session()
        self._sleep = sleep

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def health_check(self) -> bool:
        """Return True only if GET /health reports status 'ok'."""
        try:
            response = self.request("get", "/health")
        except ApiError as e:
            logger.error(f"Health check failed: {e}")
            return False
        return isinstance(response, dict) and response.get("status") == "ok"

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Perform a request, retrying on failure. Returns the decoded body."""
        attempt = 0
        while True:
            try:
                return self._send(method, path, body, headers)
            except ApiError as e:
                if attempt >= self.max_retries:
                    logger.debug(f"{method.upper()} {path} gave up after {attempt + 1} attempts: {e}")
                    raise
                attempt += 1
                logger.warning(f"Request failed, retrying ({attempt}/{self.max_retries})...")
                self._sleep(self.retry_delay)

    def _send(self, method: str, path: str, body: Any, headers: Optional[Dict[str, str]]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method.upper(),
                url,
                json=body,
                headers=headers or {},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"{method.upper()} {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise ApiError.from_response(response)
        return _decode_body(response)
