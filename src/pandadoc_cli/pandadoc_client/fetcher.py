"""
Credential-injecting HTTP transport.

The client never handles secrets. It asks a CredentialFetcher whether a
named credential exists and hands it every request; the fetcher resolves the
secret and places it on the request according to the token's placement
policy.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Protocol
from urllib.parse import urlencode, urlsplit

import requests

from ..config import TokenConfig
from .errors import PandaDocConnectionError, PandaDocError

logger = logging.getLogger(__name__)


@dataclass
class FetchResponse:
    """Transport-neutral HTTP response."""

    status_code: int
    content: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)


class CredentialFetcher(Protocol):
    """Performs requests with a named credential attached."""

    def has_credential(self, name: str) -> bool:
        ...

    def fetch(
        self,
        name: str,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: str | bytes | None = None,
        timeout: float | None = None,
    ) -> FetchResponse:
        ...


class RequestsCredentialFetcher:
    """
    CredentialFetcher backed by a requests Session.

    Tokens are read from the environment variable named in each TokenConfig
    at fetch time, and only sent to the token's allowed domains.
    """

    def __init__(
        self,
        tokens: dict[str, TokenConfig],
        session: requests.Session | None = None,
    ):
        self.tokens = tokens
        self.session = session or requests.Session()

    def _secret(self, name: str) -> str | None:
        token = self.tokens.get(name)
        if token is None or not token.env:
            return None
        return os.environ.get(token.env) or None

    def has_credential(self, name: str) -> bool:
        return self._secret(name) is not None

    def fetch(
        self,
        name: str,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: str | bytes | None = None,
        timeout: float | None = None,
    ) -> FetchResponse:
        token = self.tokens.get(name)
        secret = self._secret(name)
        if token is None or secret is None:
            raise PandaDocError(f"Credential '{name}' is not configured")

        host = urlsplit(url).hostname or ""
        if not token.allows_host(host):
            raise PandaDocError(f"Credential '{name}' is not allowed for host '{host}'")

        request_headers = dict(headers or {})
        request_url = url
        placement = token.placement
        if placement.type == "header":
            request_headers[placement.name] = placement.render(secret)
        elif placement.type == "query":
            sep = "&" if urlsplit(url).query else "?"
            request_url = f"{url}{sep}{urlencode({placement.name: secret})}"
        else:
            raise PandaDocError(f"Unsupported token placement: {placement.type}")

        try:
            response = self.session.request(
                method=method,
                url=request_url,
                headers=request_headers,
                data=body,
                timeout=timeout,
            )
        except requests.exceptions.ConnectionError as e:
            raise PandaDocConnectionError(f"Failed to connect to {host}: {e}")
        except requests.exceptions.Timeout as e:
            raise PandaDocConnectionError(f"Request to {host} timed out: {e}")
        except requests.exceptions.RequestException as e:
            raise PandaDocError(f"Request failed: {e}")

        return FetchResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )
