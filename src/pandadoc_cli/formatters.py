"""
Human-readable rendering of PandaDoc API responses.

Every formatter takes the parsed JSON as returned by the API and returns a
string. Fields are read with .get() and never required: missing scalars
render as "N/A", missing field values as "(empty)".
"""

from datetime import datetime, timezone
from typing import Any

from .schemas.status import status_label

NOT_AVAILABLE = "N/A"
EMPTY_VALUE = "(empty)"
MAX_DETAIL_FIELDS = 10

# Fixed English month names so output does not depend on the host locale.
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _parse_datetime(value: str) -> datetime:
    raw = value.strip()
    if raw.endswith("Z") or raw.endswith("z"):
        raw = raw[:-1] + "+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed


def format_date(value: Any) -> str:
    """
    Render an ISO-8601 timestamp as "18 Nov 2024, 14:05".

    Offsets are converted to UTC. Empty values give "N/A" and unparsable
    values are returned as-is.
    """
    if not value:
        return NOT_AVAILABLE
    try:
        dt = _parse_datetime(str(value))
    except ValueError:
        return str(value)
    return f"{dt.day} {_MONTHS[dt.month - 1]} {dt.year}, {dt.hour:02d}:{dt.minute:02d}"


def _text(value: Any) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def _field_value(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_VALUE
    return str(value)


def format_document(doc: dict) -> str:
    """Short multi-line summary of a document."""
    lines = [
        _text(doc.get("name")),
        f"  ID: {_text(doc.get('id'))}",
        f"  Status: {status_label(doc.get('status'))}",
        f"  Created: {format_date(doc.get('date_created'))}",
        f"  Modified: {format_date(doc.get('date_modified'))}",
    ]
    if doc.get("date_completed"):
        lines.append(f"  Completed: {format_date(doc['date_completed'])}")
    if doc.get("expiration_date"):
        lines.append(f"  Expires: {format_date(doc['expiration_date'])}")
    if doc.get("version"):
        lines.append(f"  Version: {doc['version']}")
    return "\n".join(lines) + "\n"


def _recipient_state(recipient: dict) -> str:
    if recipient.get("has_completed"):
        return "Completed"
    if recipient.get("is_sender"):
        return "Sender"
    return "Pending"


def format_document_details(doc: dict) -> str:
    """Markdown-style report with recipients, fields and grand total."""
    lines = [
        f"# {_text(doc.get('name'))}",
        "",
        f"**ID:** {_text(doc.get('id'))}",
        f"**Status:** {status_label(doc.get('status'))}",
        f"**Created:** {format_date(doc.get('date_created'))}",
        f"**Modified:** {format_date(doc.get('date_modified'))}",
    ]
    if doc.get("date_completed"):
        lines.append(f"**Completed:** {format_date(doc['date_completed'])}")
    if doc.get("expiration_date"):
        lines.append(f"**Expires:** {format_date(doc['expiration_date'])}")

    recipients = doc.get("recipients") or []
    if recipients:
        lines.append("")
        lines.append(f"## Recipients ({len(recipients)})")
        for r in recipients:
            name = " ".join(p for p in (r.get("first_name"), r.get("last_name")) if p)
            lines.append(
                f"- {name or NOT_AVAILABLE} <{_text(r.get('email'))}> "
                f"[{r.get('role') or 'Recipient'}] - {_recipient_state(r)}"
            )

    tokens = doc.get("tokens") or []
    if tokens:
        lines.append("")
        lines.append(f"## Fields ({len(tokens)})")
        for token in tokens[:MAX_DETAIL_FIELDS]:
            lines.append(f"- {_text(token.get('name'))}: {_field_value(token.get('value'))}")
        if len(tokens) > MAX_DETAIL_FIELDS:
            lines.append(f"  ... and {len(tokens) - MAX_DETAIL_FIELDS} more fields")

    grand_total = doc.get("grand_total")
    if grand_total:
        currency = grand_total.get("currency") or "USD"
        lines.append("")
        lines.append(f"**Grand Total:** {currency} {_text(grand_total.get('amount'))}")

    return "\n".join(lines) + "\n"


def format_document_list(result: dict) -> str:
    docs = result.get("results") or []
    parts = [f"Found {len(docs)} document(s)\n"]
    parts.extend(format_document(doc) for doc in docs)
    return "\n".join(parts)


def format_template_list(result: dict) -> str:
    templates = result.get("results") or []
    parts = [f"Found {len(templates)} template(s)\n"]
    for tmpl in templates:
        lines = [
            _text(tmpl.get("name")),
            f"  ID: {_text(tmpl.get('id'))}",
            f"  Created: {format_date(tmpl.get('date_created'))}",
            f"  Modified: {format_date(tmpl.get('date_modified'))}",
        ]
        tags = tmpl.get("tags") or []
        if tags:
            lines.append(f"  Tags: {', '.join(str(t) for t in tags)}")
        parts.append("\n".join(lines) + "\n")
    return "\n".join(parts)


def format_folder_list(result: dict) -> str:
    folders = result.get("results") or []
    parts = [f"Found {len(folders)} folder(s)\n"]
    for folder in folders:
        parts.append(
            f"{_text(folder.get('name'))}\n"
            f"  UUID: {_text(folder.get('uuid'))}\n"
            f"  Created: {format_date(folder.get('date_created'))}\n"
        )
    return "\n".join(parts)


def format_member(member: dict) -> str:
    name = " ".join(p for p in (member.get("first_name"), member.get("last_name")) if p)
    lines = [
        name or NOT_AVAILABLE,
        f"  Email: {_text(member.get('email'))}",
        f"  Member ID: {_text(member.get('id'))}",
    ]
    workspace = member.get("workspace")
    if workspace:
        lines.append(f"  Workspace: {_text(workspace.get('name'))}")
    return "\n".join(lines)


def _event_actor(event: dict) -> str:
    actor = event.get("actor")
    if isinstance(actor, dict) and actor.get("email"):
        return actor["email"]
    return event.get("user_email") or "System"


def format_audit_trail(result: dict) -> str:
    """Audit events, newest-first order as returned by the API."""
    events = result.get("results") or result.get("events") or []
    parts = [f"Audit Trail ({len(events)} events)\n"]
    for event in events:
        lines = [
            f"{format_date(event.get('date') or event.get('timestamp'))} - "
            f"{_text(event.get('event_type') or event.get('action'))}",
            f"  By: {_event_actor(event)}",
        ]
        description = event.get("details") or event.get("description")
        if description:
            lines.append(f"  {description}")
        parts.append("\n".join(lines) + "\n")
    return "\n".join(parts)


def format_fields(result: dict) -> str:
    fields = result.get("fields") or []
    lines = [f"Document Fields ({len(fields)})", ""]
    for f in fields:
        lines.append(f"{_text(f.get('name'))}: {_field_value(f.get('value'))}")
    return "\n".join(lines)


def format_send_result(document_id: str, result: dict) -> str:
    lines = [
        "Document sent successfully!",
        f"  Document ID: {document_id}",
    ]
    if result.get("status"):
        lines.append(f"  Status: {status_label(result['status'])}")
    return "\n".join(lines)
