"""
Thin HTTP layer shared by every provider client.

Wraps httpx.Client and turns transport problems into the package's
exception types, so provider code only deals with text and JSON:
- 429                → TooManyRequestsError
- any other ≥ 400    → RequestError(status_code=...)
- httpx.HTTPError    → RequestError
- bad JSON body      → MalformedResponseError
"""

from typing import Any, Optional

import httpx

from .exceptions import MalformedResponseError, RequestError, TooManyRequestsError
from .logger import get_module_logger
from .preprocessor import decode_html

logger = get_module_logger("http_client")

DEFAULT_TIMEOUT = 10.0

# Translation sites serve a stripped-down page to unknown clients.
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
}


class HttpClient:
    """
    Sends requests for one provider and decodes the answers.

    An injected httpx.Client is used as-is and never closed here; otherwise
    one is created from ``proxy``/``timeout`` and closed by close().
    """

    def __init__(
        self,
        provider: str,
        proxy: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
        headers: Optional[dict] = None
    ):
        self.provider = provider
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                proxy=proxy,
                timeout=timeout,
                headers={**DEFAULT_HEADERS, **(headers or {})},
                follow_redirects=True,
            )
        self._client = client

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{self.provider}: {method} {url} failed: {e}")
            raise RequestError(
                f"Request to {self.provider} failed: {e}",
                provider=self.provider,
                details={"url": url, "error": str(e)}
            ) from e

        if response.status_code == 429:
            logger.warning(f"{self.provider}: rate limited (429)")
            raise TooManyRequestsError(provider=self.provider, details={"url": str(response.url)})
        if response.status_code >= 400:
            logger.error(f"{self.provider}: {method} {response.url} returned {response.status_code}")
            raise RequestError(
                f"{self.provider} returned HTTP {response.status_code}",
                provider=self.provider,
                status_code=response.status_code,
                details={"url": str(response.url), "body": response.text[:500]}
            )
        return response

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{self.provider} returned a body that is not JSON",
                provider=self.provider,
                details={"body": response.text[:500]}
            ) from e

    def get_text(self, url: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> str:
        """GET a page and return its decoded body."""
        response = self._send("GET", url, params=params, headers=headers)
        return decode_html(response.content, response.charset_encoding)

    def get_json(self, url: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> Any:
        return self._json(self._send("GET", url, params=params, headers=headers))

    def post_json(
        self,
        url: str,
        json: Any = None,
        params: Optional[dict] = None,
        headers: Optional[dict] = None
    ) -> Any:
        """POST a JSON body and decode the JSON answer."""
        return self._json(self._send("POST", url, json=json, params=params, headers=headers))

    def post_form(
        self,
        url: str,
        data: Optional[dict] = None,
        params: Optional[dict] = None,
        headers: Optional[dict] = None
    ) -> Any:
        """POST form fields and decode the JSON answer."""
        return self._json(self._send("POST", url, data=data, params=params, headers=headers))
