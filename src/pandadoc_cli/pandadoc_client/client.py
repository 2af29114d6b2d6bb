"""
PandaDoc API client implementation.
"""

import json
import logging
from typing import Any

from ..config import DEFAULT_CREDENTIAL, Config, TokenConfig
from ..schemas.params import (
    DOCUMENT_LIST_PARAMS,
    DOWNLOAD_PARAMS,
    FOLDER_LIST_PARAMS,
    encode_query,
    translate,
)
from .errors import PandaDocAPIError, PandaDocConfigError
from .fetcher import CredentialFetcher, FetchResponse, RequestsCredentialFetcher

logger = logging.getLogger(__name__)

API_KEY_URL = "https://app.pandadoc.com/a/#/settings/integrations/api"


def _error_body(response: FetchResponse) -> dict:
    """Parsed error body, or {} when it is not a JSON object."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def remediation_text(credential: str, token: TokenConfig | None = None) -> str:
    """Setup instructions shown when the credential is missing."""
    env = token.env if token else "PANDADOC_API_KEY"
    return "\n".join(
        [
            "PandaDoc token not configured.",
            "",
            "Add to your config file (~/.config/pandadoc/config.yaml) under tokens:",
            "",
            f"  {credential}:",
            f"    env: {env}",
            "    type: api_key",
            "    domains:",
            "      - api.pandadoc.com",
            "    placement:",
            "      type: header",
            "      name: Authorization",
            '      format: "API-Key {token}"',
            "",
            "Then set environment variable:",
            f"  {env}=your-api-key",
            "",
            f"Get your API key from: {API_KEY_URL}",
        ]
    )


class PandaDocClient:
    """
    Client for the PandaDoc public API.

    Features:
    - v1 and v2 endpoints behind one request method
    - Uniform error unwrapping (detail > message > error > HTTP status)
    - Raw byte downloads with a longer timeout
    - No retries: every failure surfaces immediately
    """

    BASE_URL = "https://api.pandadoc.com/public/v1"
    BASE_URL_V2 = "https://api.pandadoc.com/public/v2"
    DEFAULT_TIMEOUT = 15
    DOWNLOAD_TIMEOUT = 60

    def __init__(
        self,
        fetcher: CredentialFetcher,
        credential: str = DEFAULT_CREDENTIAL,
        base_url: str = BASE_URL,
        base_url_v2: str = BASE_URL_V2,
        timeout: float = DEFAULT_TIMEOUT,
        download_timeout: float = DOWNLOAD_TIMEOUT,
        remediation: str | None = None,
    ):
        """
        Initialize PandaDoc client.

        Args:
            fetcher: Transport that attaches the named credential
            credential: Name of the credential to request with
            base_url: v1 API base URL
            base_url_v2: v2 API base URL
            timeout: Timeout for JSON calls in seconds
            download_timeout: Timeout for file downloads in seconds
            remediation: Setup text shown if the credential is missing

        Raises:
            PandaDocConfigError: If the fetcher has no such credential
        """
        if not fetcher.has_credential(credential):
            raise PandaDocConfigError(
                "PandaDoc token not configured",
                remediation=remediation or remediation_text(credential),
            )

        self.fetcher = fetcher
        self.credential = credential
        self.base_urls = {
            "v1": base_url.rstrip("/"),
            "v2": base_url_v2.rstrip("/"),
        }
        self.timeout = timeout
        self.download_timeout = download_timeout

    @classmethod
    def from_config(cls, config: Config) -> "PandaDocClient":
        """Build a client using the requests-backed fetcher."""
        token = config.tokens.get(config.credential)
        return cls(
            fetcher=RequestsCredentialFetcher(config.tokens),
            credential=config.credential,
            base_url=config.api.base_url,
            base_url_v2=config.api.base_url_v2,
            timeout=config.api.timeout_seconds,
            download_timeout=config.api.download_timeout_seconds,
            remediation=remediation_text(config.credential, token),
        )

    def _url(self, endpoint: str, query: str | None, api_version: str) -> str:
        url = f"{self.base_urls[api_version]}{endpoint}"
        if query:
            url = f"{url}?{query}"
        return url

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        query: str | None = None,
        api_version: str = "v1",
    ) -> Any:
        """
        Make a JSON API request.

        Args:
            endpoint: Path below the API base URL, e.g. "/documents"
            method: HTTP method
            body: JSON-serialisable body, or an already encoded string
            headers: Extra headers; override the JSON content type
            timeout: Seconds, defaults to the client timeout
            query: Already encoded query string
            api_version: "v1" or "v2"

        Returns:
            Parsed JSON, or {"success": True} for 204 No Content

        Raises:
            PandaDocAPIError: Non-2xx response
            PandaDocConnectionError: Network failure or timeout
        """
        url = self._url(endpoint, query, api_version)
        request_headers = {"Content-Type": "application/json"}
        request_headers.update(headers or {})
        if body is not None and not isinstance(body, (str, bytes)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")

        logger.debug(f"{method} {url}")
        response = self.fetcher.fetch(
            self.credential,
            url,
            method=method,
            headers=request_headers,
            body=body,
            timeout=timeout or self.timeout,
        )
        logger.debug(f"{method} {url} -> {response.status_code}")

        if response.status_code == 204:
            return {"success": True}

        if not response.ok:
            error = _error_body(response)
            message = (
                error.get("detail")
                or error.get("message")
                or error.get("error")
                or f"HTTP {response.status_code}"
            )
            raise PandaDocAPIError(response.status_code, str(message), data=error)

        return response.json()

    def download(self, endpoint: str, query: str | None = None) -> bytes:
        """
        Download a file and return its raw bytes unprocessed.

        Raises:
            PandaDocAPIError: Non-2xx response
        """
        url = self._url(endpoint, query, "v1")
        logger.debug(f"GET {url} (download)")
        response = self.fetcher.fetch(
            self.credential,
            url,
            method="GET",
            timeout=self.download_timeout,
        )

        if not response.ok:
            error = _error_body(response)
            message = error.get("detail") or error.get("message") or "Download failed"
            raise PandaDocAPIError(response.status_code, str(message), data=error)

        return response.content

    def list_documents(self, params: dict[str, Any] | None = None) -> dict:
        """
        List documents.

        Args:
            params: Logical filters (q, status, templateId, createdFrom, ...);
                status shorthands like "sent" are expanded
        """
        query = encode_query(translate(params or {}, DOCUMENT_LIST_PARAMS))
        return self.request("/documents", query=query)

    def get_document(self, document_id: str) -> dict:
        """Get document status."""
        return self.request(f"/documents/{document_id}")

    def get_document_details(self, document_id: str) -> dict:
        """Get document details (recipients, fields, pricing)."""
        return self.request(f"/documents/{document_id}/details")

    def download_document(
        self,
        document_id: str,
        watermark: Any = None,
        separate_files: Any = None,
    ) -> bytes:
        """Download document PDF."""
        params = {"watermark": watermark, "separateFiles": separate_files or None}
        query = encode_query(translate(params, DOWNLOAD_PARAMS))
        return self.download(f"/documents/{document_id}/download", query=query)

    def download_protected_document(self, document_id: str) -> bytes:
        """Download a completed document with its completion certificate."""
        return self.download(f"/documents/{document_id}/download-protected")

    def send_document(self, document_id: str, options: dict[str, Any] | None = None) -> dict:
        """Send a draft document to its recipients."""
        return self.request(
            f"/documents/{document_id}/send",
            method="POST",
            body=options or {},
        )

    def list_templates(self, params: dict[str, Any] | None = None) -> dict:
        """List templates. Param names use the generic camelCase -> snake_case rule."""
        query = encode_query(translate(params or {}))
        return self.request("/templates", query=query)

    def list_document_folders(self, params: dict[str, Any] | None = None) -> dict:
        """List document folders."""
        query = encode_query(translate(params or {}, FOLDER_LIST_PARAMS))
        return self.request("/documents/folders", query=query)

    def get_current_member(self) -> dict:
        return self.request("/members/current")

    def get_document_audit_trail(self, document_id: str) -> dict:
        # Only available on the v2 API
        return self.request(f"/documents/{document_id}/audit-trail", api_version="v2")

    def list_document_fields(self, document_id: str) -> dict:
        return self.request(f"/documents/{document_id}/fields")
