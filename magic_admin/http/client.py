"""
HTTP client for the Magic Admin API.
"""

import json
import uuid
from typing import Any, Dict, Optional

import httpx

from magic_admin.errors import APIConnectionError, APIError, error_for_status
from magic_admin.http.response import MagicResponse
from magic_admin.logging import get_logger, request_id_var
from magic_admin.retry import RetryConfig, RetryError, call_with_retry
from magic_admin.version import VERSION

SECRET_KEY_HEADER = "X-Magic-Secret-Key"
RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


class RetryableStatus(Exception):
    """Raised inside the retry loop for responses worth another attempt."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"Magic API returned {response.status_code}")
        self.response = response


class HTTPClient:
    """Blocking client that sends authenticated requests to the Magic API."""

    def __init__(self,
                 base_url: str,
                 secret_key: str,
                 retries: int = 3,
                 timeout: float = 5.0,
                 backoff: float = 0.02,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.retries = retries
        self.timeout = timeout
        self.backoff = backoff
        self.retry_config = RetryConfig.from_retries(retries, backoff)
        self.logger = get_logger("magic_admin.http")

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                SECRET_KEY_HEADER: secret_key,
                "Accept": "application/json",
                "User-Agent": f"magic-admin-python/{VERSION}",
            },
        )

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> MagicResponse:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Optional[Dict[str, Any]] = None) -> MagicResponse:
        return self.request("POST", path, data=data)

    def request(self,
                method: str,
                path: str,
                params: Optional[Dict[str, Any]] = None,
                data: Optional[Dict[str, Any]] = None) -> MagicResponse:
        """Send a request, retrying per the configured policy, and map the outcome."""
        method = method.upper()
        token = request_id_var.set(str(uuid.uuid4()))
        try:
            response = self._send_with_retry(method, path, params, data)
            return self._parse_response(response, params, data)
        finally:
            request_id_var.reset(token)

    def _send_with_retry(self,
                         method: str,
                         path: str,
                         params: Optional[Dict[str, Any]],
                         data: Optional[Dict[str, Any]]) -> httpx.Response:
        idempotent = method in IDEMPOTENT_METHODS
        retry_on = (httpx.TransportError, RetryableStatus) if idempotent else (httpx.TransportError,)

        def _send() -> httpx.Response:
            self.logger.debug("Sending Magic API request", method=method, path=path)
            response = self._client.request(method, path, params=params, json=data)
            if idempotent and response.status_code in RETRY_STATUS_CODES:
                raise RetryableStatus(response)
            return response

        try:
            return call_with_retry(_send, retry_on, self.retry_config, name=f"{method} {path}")
        except RetryError as e:
            if isinstance(e.last_exception, RetryableStatus):
                return e.last_exception.response
            self.logger.error(
                "Magic API unreachable",
                method=method,
                path=path,
                attempts=e.attempts,
                error=str(e.last_exception)
            )
            raise APIConnectionError(
                f"Could not connect to Magic API: {e.last_exception}",
                http_request_params=params,
                http_request_data=data,
            ) from e.last_exception

    def _parse_response(self,
                        response: httpx.Response,
                        params: Optional[Dict[str, Any]],
                        data: Optional[Dict[str, Any]]) -> MagicResponse:
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = None
            if response.is_success:
                raise APIError(
                    "Magic API returned a non-JSON response",
                    http_status=response.status_code,
                    http_request_params=params,
                    http_request_data=data,
                )

        if response.is_success:
            self.logger.info(
                "Magic API request succeeded",
                method=response.request.method,
                path=response.request.url.path,
                status_code=response.status_code
            )
            return MagicResponse.from_json(response.status_code, response.text, body)

        body = body if isinstance(body, dict) else {}
        error_class = error_for_status(response.status_code)
        self.logger.warning(
            "Magic API request failed",
            method=response.request.method,
            path=response.request.url.path,
            status_code=response.status_code,
            error_code=body.get("error_code")
        )
        raise error_class(
            body.get("message") or f"Magic API returned {response.status_code}",
            http_status=response.status_code,
            http_code=body.get("error_code"),
            http_message=body.get("message"),
            http_request_params=params,
            http_request_data=data,
        )

    def close(self) -> None:
        """Release pooled connections."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
