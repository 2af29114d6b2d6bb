"""
PandaDoc API Client.

Provides:
- List documents, templates and folders with filters
- Get document status, details, fields and audit trail
- Download document PDFs (plain or with completion certificate)
- Send documents for signing

Credentials are attached by an injected CredentialFetcher and are never
visible to the client itself.
"""

from .client import PandaDocClient, remediation_text
from .errors import (
    PandaDocAPIError,
    PandaDocConfigError,
    PandaDocConnectionError,
    PandaDocError,
)
from .fetcher import CredentialFetcher, FetchResponse, RequestsCredentialFetcher

__all__ = [
    "PandaDocClient",
    "remediation_text",
    "PandaDocError",
    "PandaDocAPIError",
    "PandaDocConfigError",
    "PandaDocConnectionError",
    "CredentialFetcher",
    "FetchResponse",
    "RequestsCredentialFetcher",
]
