"""
Query parameter translation.

Commands build request params keyed by logical camelCase names
(``templateId``, ``createdFrom``). Each endpoint declares a ParamTable
mapping those to the wire names the API expects (``template_id``,
``created_from``). Endpoints without a table fall back to a generic
camelCase -> snake_case conversion.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from .status import resolve_status_alias

# Characters encodeURIComponent leaves alone, on top of quote()'s "_.-~".
_URI_COMPONENT_SAFE = "!*'()"

_UPPERCASE_RE = re.compile(r"[A-Z]")


@dataclass(frozen=True)
class ParamTable:
    """Declarative mapping from logical keys to wire keys.

    Keys missing from ``keys`` pass through unchanged. ``normalizers`` may
    rewrite the value of a logical key before it is emitted.
    """

    keys: Mapping[str, str]
    normalizers: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def wire_key(self, key: str) -> str:
        return self.keys.get(key, key)


def _normalize_status(value: Any) -> Any:
    if isinstance(value, str):
        return resolve_status_alias(value)
    return value


DOCUMENT_LIST_PARAMS = ParamTable(
    keys={
        "q": "q",
        "status": "status",
        "statusNe": "status__ne",
        "tag": "tag",
        "templateId": "template_id",
        "folderUuid": "folder_uuid",
        "count": "count",
        "page": "page",
        "orderBy": "order_by",
        "deleted": "deleted",
        "id": "id",
        "membership": "membership",
        "completedFrom": "completed_from",
        "completedTo": "completed_to",
        "createdFrom": "created_from",
        "createdTo": "created_to",
        "modifiedFrom": "modified_from",
        "modifiedTo": "modified_to",
        "contactId": "contact_id",
    },
    normalizers={
        "status": _normalize_status,
        "statusNe": _normalize_status,
    },
)

FOLDER_LIST_PARAMS = ParamTable(
    keys={
        "parentUuid": "parent_uuid",
        "count": "count",
        "page": "page",
    },
)

DOWNLOAD_PARAMS = ParamTable(
    keys={
        "watermark": "watermark",
        "separateFiles": "separate_files",
    },
)


def camel_to_snake(key: str) -> str:
    """``templateId`` -> ``template_id``. Each capital becomes ``_`` + lowercase."""
    return _UPPERCASE_RE.sub(lambda m: f"_{m.group(0).lower()}", key)


def is_empty(value: Any) -> bool:
    return value is None or value == ""


def translate(params: Mapping[str, Any], table: ParamTable | None = None) -> dict[str, Any]:
    """
    Translate logical params to wire params.

    Args:
        params: Logical params in caller order
        table: Endpoint table, or None for the camelCase -> snake_case rule

    Returns:
        Wire params with empty values dropped, in the original order
    """
    wire: dict[str, Any] = {}
    for key, value in params.items():
        if is_empty(value):
            continue
        if table is None:
            wire[camel_to_snake(key)] = value
            continue
        normalize = table.normalizers.get(key)
        if normalize is not None:
            value = normalize(value)
        wire[table.wire_key(key)] = value
    return wire


def _stringify(value: Any) -> str:
    # Booleans go out the way the API documents them.
    if value is True:
        return "true"
    if value is False:
        return "false"
    return str(value)


def encode_query(params: Mapping[str, Any]) -> str:
    """Percent-encode params into ``k=v&k=v``, skipping empty values."""
    pairs = []
    for key, value in params.items():
        if is_empty(value):
            continue
        pairs.append(
            f"{quote(str(key), safe=_URI_COMPONENT_SAFE)}="
            f"{quote(_stringify(value), safe=_URI_COMPONENT_SAFE)}"
        )
    return "&".join(pairs)
