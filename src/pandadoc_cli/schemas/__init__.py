"""
SSOT schemas shared by the client and the CLI.

- Document status codes, labels and shorthand aliases
- Logical -> wire parameter tables and query encoding
"""

from .params import (
    DOCUMENT_LIST_PARAMS,
    DOWNLOAD_PARAMS,
    FOLDER_LIST_PARAMS,
    ParamTable,
    camel_to_snake,
    encode_query,
    translate,
)
from .status import (
    STATUS_ALIASES,
    STATUS_LABELS,
    DocumentStatus,
    resolve_status_alias,
    status_label,
)

__all__ = [
    "DOCUMENT_LIST_PARAMS",
    "DOWNLOAD_PARAMS",
    "FOLDER_LIST_PARAMS",
    "ParamTable",
    "camel_to_snake",
    "encode_query",
    "translate",
    "STATUS_ALIASES",
    "STATUS_LABELS",
    "DocumentStatus",
    "resolve_status_alias",
    "status_label",
]
