"""
Document lifecycle status codes (SSOT).

PandaDoc reports document state as a dotted wire value such as
``document.sent``. This module owns the full set of known values, their
display labels, and the lowercase shorthands accepted by ``--status``.
"""

from enum import Enum


class DocumentStatus(str, Enum):
    """Document lifecycle state as sent on the wire."""

    DRAFT = "document.draft"
    SENT = "document.sent"
    COMPLETED = "document.completed"
    UPLOADED = "document.uploaded"
    ERROR = "document.error"
    VIEWED = "document.viewed"
    WAITING_APPROVAL = "document.waiting_approval"
    APPROVED = "document.approved"
    REJECTED = "document.rejected"
    WAITING_PAY = "document.waiting_pay"
    PAID = "document.paid"
    VOIDED = "document.voided"
    DECLINED = "document.declined"
    EXTERNAL_REVIEW = "document.external_review"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS: dict[DocumentStatus, str] = {
    DocumentStatus.DRAFT: "Draft",
    DocumentStatus.SENT: "Sent",
    DocumentStatus.COMPLETED: "Completed",
    DocumentStatus.UPLOADED: "Uploaded",
    DocumentStatus.ERROR: "Error",
    DocumentStatus.VIEWED: "Viewed",
    DocumentStatus.WAITING_APPROVAL: "Waiting Approval",
    DocumentStatus.APPROVED: "Approved",
    DocumentStatus.REJECTED: "Rejected",
    DocumentStatus.WAITING_PAY: "Waiting Payment",
    DocumentStatus.PAID: "Paid",
    DocumentStatus.VOIDED: "Voided",
    DocumentStatus.DECLINED: "Declined",
    DocumentStatus.EXTERNAL_REVIEW: "External Review",
}

# Shorthands accepted by --status. Not every status has one.
STATUS_ALIASES: dict[str, DocumentStatus] = {
    "draft": DocumentStatus.DRAFT,
    "sent": DocumentStatus.SENT,
    "completed": DocumentStatus.COMPLETED,
    "viewed": DocumentStatus.VIEWED,
    "approved": DocumentStatus.APPROVED,
    "rejected": DocumentStatus.REJECTED,
    "voided": DocumentStatus.VOIDED,
    "declined": DocumentStatus.DECLINED,
    "paid": DocumentStatus.PAID,
}


def resolve_status_alias(value: str) -> str:
    """Expand a shorthand like ``sent`` to ``document.sent``.

    Unknown values are returned unchanged so raw wire values still work.
    """
    status = STATUS_ALIASES.get(value.lower())
    if status is None:
        return value
    return status.value


def status_label(code: str | None) -> str:
    """Display label for a wire status, or the raw code if unknown."""
    if code is None:
        return "N/A"
    try:
        return DocumentStatus(code).label
    except ValueError:
        return str(code)
