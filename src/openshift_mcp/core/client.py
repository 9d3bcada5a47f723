import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .config import OpenShiftConfig
from .errors import (
    OpenShiftConnectionError,
    OpenShiftHTTPError,
    OpenShiftParseError,
    OpenShiftTimeoutError,
    TransportError,
)
from .links import HttpMethod, LinkRequest
from .models import RestResponse
from .observability import log_event

IDEMPOTENT_METHODS = frozenset({"GET", "PUT", "DELETE"})


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})
    retry_methods: frozenset[str] = IDEMPOTENT_METHODS


class OpenShiftClient:
    """
    Shared HTTP client for the OpenShift broker REST API.
    - Handles auth, base URL, timeouts, retries
    - Executes resolved link requests and returns the broker envelope
    - No resource logic; resources own link negotiation and caching
    """

    def __init__(
        self,
        *,
        server_url: str,
        login: str,
        password: str,
        timeout_seconds: float = 180.0,
        verify_ssl: bool = True,
        proxy: Optional[str] = None,
        retry: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        server_url = (server_url or "").rstrip("/")

        if not server_url:
            raise ValueError("server_url must be provided.")
        if not login or not password:
            raise ValueError("login and password must be provided.")

        self.server_url = server_url
        self.login = login
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("openshift_mcp.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.server_url,
            auth=httpx.BasicAuth(login, password),
            headers={"Accept": "application/json"},
            timeout=timeout_seconds,
            verify=verify_ssl,
            proxy=proxy,
        )

    @classmethod
    def from_config(cls, config: OpenShiftConfig, **kwargs) -> "OpenShiftClient":
        return cls(
            server_url=config.server_url,
            login=config.login,
            password=config.password,
            timeout_seconds=config.timeout_seconds,
            verify_ssl=config.verify_ssl,
            proxy=config.proxy,
            **kwargs,
        )

    @property
    def api_url(self) -> str:
        return f"{self.server_url}/broker/rest/api"

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "OpenShiftClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Core request method.
        - Retries idempotent requests on network/timeouts and 502/503/504
        - Raises OpenShiftHTTPError on non-2xx HTTP responses
        - Raises OpenShiftTimeoutError / OpenShiftConnectionError after retries
        - Raises OpenShiftParseError if the response isn't a JSON object
        """
        method = method.upper()
        may_retry = method in self.retry.retry_methods
        attempt = 0

        while True:
            start = time.perf_counter()
            try:
                resp = await self.http.request(method, url, params=params, json=json)
            except httpx.HTTPError as exc:
                self._log_call(operation, method, url, "exception", start, attempt, exc)
                if (
                    isinstance(exc, (httpx.TimeoutException, httpx.NetworkError))
                    and may_retry
                    and attempt < self.retry.max_retries
                ):
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise self._to_transport_error(exc, method, url) from exc

            self._log_call(operation, method, url, resp.status_code, start, attempt)

            if (
                resp.status_code in self.retry.retry_statuses
                and may_retry
                and attempt < self.retry.max_retries
            ):
                await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                attempt += 1
                continue

            if resp.status_code < 200 or resp.status_code >= 300:
                raise self._to_http_error(resp, method=method)

            return self._safe_json(resp)

    async def execute(self, request: LinkRequest) -> RestResponse:
        """Perform one resolved link request and return the broker envelope."""
        if request.method in (HttpMethod.GET, HttpMethod.DELETE):
            payload = await self.request(
                request.method.value,
                request.url,
                params=request.params or None,
                operation=request.link_name,
            )
        else:
            payload = await self.request(
                request.method.value,
                request.url,
                json=request.params,
                operation=request.link_name,
            )
        return self._to_response(payload, request.url)

    async def get_api(self) -> RestResponse:
        """Fetch the API root whose links start every navigation."""
        payload = await self.request("GET", self.api_url, operation="API")
        return self._to_response(payload, self.api_url)

    def _to_response(self, payload: Dict[str, Any], url: str) -> RestResponse:
        try:
            return RestResponse.model_validate(payload)
        except ValidationError as exc:
            raise OpenShiftParseError(
                f"Unexpected response envelope from {url}: {exc}"
            ) from exc

    def _log_call(
        self,
        operation: Optional[str],
        method: str,
        url: str,
        status: Any,
        start: float,
        attempt: int,
        exc: Optional[BaseException] = None,
    ) -> None:
        # structured-ish log without secrets
        log_event(
            "op_call",
            operation=operation,
            method=method,
            endpoint=httpx.URL(url).path,
            status=status,
            duration_ms=int((time.perf_counter() - start) * 1000),
            attempt=attempt,
            error_type=type(exc).__name__ if exc else None,
        )

    @staticmethod
    def _to_transport_error(exc: httpx.HTTPError, method: str, url: str) -> TransportError:
        if isinstance(exc, httpx.TimeoutException):
            return OpenShiftTimeoutError(f"Timeout calling {method} {url}: {exc}")
        if isinstance(exc, httpx.NetworkError):
            return OpenShiftConnectionError(
                f"Network error calling {method} {url}: {exc}"
            )
        return TransportError(f"HTTPX error calling {method} {url}: {exc}")

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise OpenShiftParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise OpenShiftParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(self, resp: httpx.Response, *, method: str) -> OpenShiftHTTPError:
        url = str(resp.request.url)
        messages: List[Dict[str, Any]] = []
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
        except ValueError:
            parsed = None
            response_text = (resp.text or "")[:500]

        if isinstance(parsed, dict):
            raw_messages = parsed.get("messages")
            if isinstance(raw_messages, list):
                messages = [m for m in raw_messages if isinstance(m, dict)]
            texts = [m.get("text") for m in messages if m.get("text")]
            # Broker errors carry their explanation in messages[].text
            message = texts[0] if texts else parsed.get("status") or message

        return OpenShiftHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            messages=messages,
            response_text=response_text,
        )


__all__ = ["OpenShiftClient", "RetryConfig", "IDEMPOTENT_METHODS"]
