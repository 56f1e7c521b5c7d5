"""
HTTP client for the Google Classroom REST API.

Wraps httpx calls to the Classroom v1 endpoints and converts transport and
HTTP failures into ``RemoteCallError`` so callers see one error type.
"""
from __future__ import annotations

import logging
import os
import typing as t
from urllib.parse import quote

import httpx

from orchestrator.errors import RemoteCallError

logger = logging.getLogger(__name__)

# Service URL - configurable via environment variable
CLASSROOM_API_URL = os.getenv("CLASSROOM_API_URL", "https://classroom.googleapis.com")

# Timeout settings for CRUD operations (in seconds)
STANDARD_TIMEOUT = 30.0


def path_segment(value: t.Any) -> str:
    """Quote an identifier for use as one URL path segment."""
    return quote(str(value), safe="")


def _error_detail(response: httpx.Response) -> str:
    """Pull the message out of a Google-style error body, if present."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message") or response.text
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return response.text


class ClassroomClient:
    """
    Minimal Classroom REST client.

    When ``http_client`` is given it is used for every request (and left open);
    otherwise a short-lived ``httpx.Client`` is created per request.
    """

    def __init__(
        self,
        base_url: t.Optional[str] = None,
        access_token: t.Optional[str] = None,
        http_client: t.Optional[httpx.Client] = None,
        timeout: float = STANDARD_TIMEOUT,
    ) -> None:
        self.base_url = (base_url or CLASSROOM_API_URL).rstrip("/")
        self.access_token = access_token if access_token is not None else os.getenv("CLASSROOM_ACCESS_TOKEN")
        self.http_client = http_client
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _send(self, client: httpx.Client, method: str, url: str, **kwargs: t.Any) -> httpx.Response:
        return client.request(method, url, headers=self._headers(), **kwargs)

    def request(
        self,
        method: str,
        path: str,
        params: t.Optional[dict[str, t.Any]] = None,
        json: t.Optional[t.Any] = None,
    ) -> t.Any:
        """Send one request and return the decoded JSON body ({} when empty)."""
        url = f"{self.base_url}{path}"
        kwargs: dict[str, t.Any] = {}
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json
        logger.debug("Classroom request %s %s params=%s body=%s", method, url, params, json)

        try:
            if self.http_client is not None:
                response = self._send(self.http_client, method, url, **kwargs)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = self._send(client, method, url, **kwargs)
            logger.debug("Classroom response %s %s -> %s", method, url, response.status_code)
            response.raise_for_status()
        except httpx.TimeoutException:
            raise RemoteCallError(f"Classroom API call timed out after {self.timeout} seconds")
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Classroom API error %s %s -> %s %s",
                method, url, e.response.status_code, e.response.text,
            )
            raise RemoteCallError(
                f"HTTP error from Classroom API: {e.response.status_code} {_error_detail(e.response)}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise RemoteCallError(f"Error calling Classroom API: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RemoteCallError(f"Classroom API returned a non-JSON body: {e}") from e

    def get(self, path: str, params: t.Optional[dict[str, t.Any]] = None) -> t.Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: t.Any) -> t.Any:
        return self.request("POST", path, json=json)

    def delete(self, path: str) -> t.Any:
        return self.request("DELETE", path)
