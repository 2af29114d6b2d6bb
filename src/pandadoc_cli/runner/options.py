"""
Per-command option tables.

Each table maps the CLI spellings of an option (short and long) to the
logical request param the client expects. Flags become True; value options
take the first string value given.
"""

from dataclasses import dataclass
from typing import Any

from .args import ParsedCommand


@dataclass(frozen=True)
class Option:
    names: tuple[str, ...]
    key: str
    flag: bool = False


LIST_OPTIONS = (
    Option(("q", "query"), "q"),
    Option(("s", "status"), "status"),
    Option(("status-ne",), "statusNe"),
    Option(("t", "tag"), "tag"),
    Option(("template",), "templateId"),
    Option(("folder",), "folderUuid"),
    Option(("n", "count"), "count"),
    Option(("p", "page"), "page"),
    Option(("order",), "orderBy"),
    Option(("deleted",), "deleted", flag=True),
    Option(("created-from",), "createdFrom"),
    Option(("created-to",), "createdTo"),
    Option(("modified-from",), "modifiedFrom"),
    Option(("modified-to",), "modifiedTo"),
    Option(("completed-from",), "completedFrom"),
    Option(("completed-to",), "completedTo"),
    Option(("contact",), "contactId"),
)

TEMPLATE_OPTIONS = (
    Option(("q", "query"), "q"),
    Option(("t", "tag"), "tag"),
    Option(("n", "count"), "count"),
    Option(("p", "page"), "page"),
    Option(("deleted",), "deleted", flag=True),
)

FOLDER_OPTIONS = (
    Option(("parent",), "parentUuid"),
    Option(("n", "count"), "count"),
    Option(("p", "page"), "page"),
)

# Only these fields are forwarded in the send request body.
SEND_OPTIONS = (
    Option(("m", "message"), "message"),
    Option(("subject",), "subject"),
    Option(("silent",), "silent", flag=True),
)


def collect_params(parsed: ParsedCommand, options: tuple[Option, ...]) -> dict[str, Any]:
    """Build logical params from the options present, in table order."""
    params: dict[str, Any] = {}
    for option in options:
        if option.flag:
            if parsed.flag(*option.names):
                params[option.key] = True
            continue
        value = parsed.value(*option.names)
        if value is not None:
            params[option.key] = value
    return params
