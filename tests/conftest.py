"""Test fixtures and utilities."""

import pytest

from pandadoc_cli.config import Config
from pandadoc_cli.pandadoc_client import PandaDocClient

from fixtures import StubFetcher


@pytest.fixture
def config(tmp_path) -> Config:
    """Default config with downloads going to a temp dir."""
    return Config(download_dir=tmp_path / "downloads")


@pytest.fixture
def stub_fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def client(stub_fetcher) -> PandaDocClient:
    return PandaDocClient(stub_fetcher)


@pytest.fixture
def sample_document() -> dict:
    """Sample document status response."""
    return {
        "id": "msFYActMfJHqNTKH8YSvF1",
        "name": "Sample Contract",
        "status": "document.sent",
        "date_created": "2024-11-18T14:05:12.000000Z",
        "date_modified": "2024-11-19T08:15:01.123456Z",
        "expiration_date": None,
        "version": "2",
    }


@pytest.fixture
def sample_document_details(sample_document) -> dict:
    """Sample document details response."""
    return {
        **sample_document,
        "recipients": [
            {
                "first_name": "Jane",
                "last_name": "Roe",
                "email": "jane@example.com",
                "role": "Signer",
                "has_completed": True,
            },
            {
                "first_name": "John",
                "last_name": "Doe",
                "email": "john@example.com",
                "is_sender": True,
            },
            {
                "first_name": "Alex",
                "last_name": "Poe",
                "email": "alex@example.com",
            },
        ],
        "tokens": [{"name": f"Field {i}", "value": f"v{i}"} for i in range(12)],
        "grand_total": {"amount": "1200.00", "currency": "EUR"},
    }
