"""
Test doubles for the client and CLI.

- StubFetcher: CredentialFetcher returning queued responses
- CountingClient: client stand-in that records (and rejects) any call
"""

import json

from pandadoc_cli.pandadoc_client import FetchResponse


class StubFetcher:
    """CredentialFetcher that returns queued responses and records calls."""

    def __init__(self, responses=None, has_token=True):
        self.responses = list(responses or [])
        self.has_token = has_token
        self.calls = []

    def has_credential(self, name):
        return self.has_token

    def fetch(self, name, url, method="GET", headers=None, body=None, timeout=None):
        self.calls.append(
            {
                "name": name,
                "url": url,
                "method": method,
                "headers": headers or {},
                "body": body,
                "timeout": timeout,
            }
        )
        return self.responses.pop(0)


class CountingClient:
    """Stand-in for PandaDocClient that counts and rejects every call."""

    def __init__(self):
        self.calls = 0

    def __getattr__(self, name):
        def _call(*args, **kwargs):
            self.calls += 1
            raise AssertionError(f"unexpected client call: {name}")

        return _call


def json_response(data, status=200) -> FetchResponse:
    return FetchResponse(status_code=status, content=json.dumps(data).encode())
