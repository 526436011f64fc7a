"""HTTP client for the third-party cricket API.

Adds the access token to every outbound call (as a trailing path segment or a
query parameter) and turns upstream failures into the exceptions in errors.py.
"""

import logging
from typing import Any, Mapping

import httpx

from config import Settings
from errors import TransportError, UpstreamHTTPError, UpstreamSoftError

logger = logging.getLogger(__name__)

# Messages the upstream pairs with "status": false on a 200 response.
SOFT_FAILURE_MESSAGES = frozenset({"Something went wrong."})


def is_soft_failure(body: Any, messages: frozenset[str] = SOFT_FAILURE_MESSAGES) -> bool:
    return isinstance(body, dict) and body.get("status") is False and body.get("msg") in messages


class UpstreamClient:
    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self._http = http
        self._settings = settings

    def build_url(self, path: str) -> tuple[str, dict[str, str]]:
        """Return (url, token params) for an upstream path."""
        token = self._settings.require_token()
        url = f"{self._settings.api_base_url.rstrip('/')}/{path.strip('/')}"
        if self._settings.token_placement == "path":
            return f"{url}/{token}", {}
        return url, {self._settings.token_param: token}

    def _redact(self, url: httpx.URL | str) -> str:
        text = str(url)
        token = self._settings.api_token
        return text.replace(token, "***") if token else text

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        form: Mapping[str, Any] | None = None,
    ) -> tuple[int, Any]:
        """Send one request and return (status_code, parsed JSON body).

        Raises UpstreamHTTPError on non-2xx, UpstreamSoftError on a 2xx body
        carrying the failure marker, TransportError on network or parse failures.
        """
        url, token_params = self.build_url(path)
        query = {**(params or {}), **token_params}

        try:
            resp = await self._http.request(method, url, params=query or None, data=form)
        except httpx.HTTPError as e:
            logger.error("Error fetching from %s: %s", path, e)
            raise TransportError(path, str(e) or type(e).__name__) from e

        logger.info("Proxied %s %s -> %d", method, self._redact(resp.request.url), resp.status_code)

        if not resp.is_success:
            logger.error("API error response from %s: %s", path, resp.text)
            try:
                details = resp.json()
            except ValueError:
                details = None
            raise UpstreamHTTPError(resp.status_code, resp.reason_phrase, details=details)

        try:
            body = resp.json()
        except ValueError as e:
            logger.error("Invalid JSON from %s: %s", path, e)
            raise TransportError(path, "upstream returned invalid JSON") from e

        if is_soft_failure(body):
            logger.warning("Upstream soft failure from %s: %s", path, body.get("msg"))
            raise UpstreamSoftError(body)

        return resp.status_code, body

    async def get_json(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        _, body = await self.request_json("GET", path, params=params)
        return body
