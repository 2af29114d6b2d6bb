"""
PandaDoc client exceptions.
"""

from typing import Any


class PandaDocError(Exception):
    """Base exception for PandaDoc client errors.

    Carries the HTTP status and parsed error body when the failure came from
    the API, so the CLI can render them.
    """

    def __init__(self, message: str, status_code: int | None = None, data: Any = None):
        self.message = message
        self.status_code = status_code
        self.data = data
        super().__init__(message)


class PandaDocAPIError(PandaDocError):
    """API returned an error response."""

    def __init__(self, status_code: int, message: str, data: Any = None):
        super().__init__(message, status_code=status_code, data=data)


class PandaDocConnectionError(PandaDocError):
    """Failed to reach PandaDoc (network failure or timeout)."""

    pass


class PandaDocConfigError(PandaDocError):
    """Credential is not configured.

    ``remediation`` holds setup instructions for the user.
    """

    def __init__(self, message: str, remediation: str = ""):
        self.remediation = remediation
        super().__init__(message)
