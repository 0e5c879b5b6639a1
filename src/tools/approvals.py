"""
Mock pending-approval sink for custom appointment requests.

In production the request would be posted to the provider's inbox and
confirmed out of band; nothing here books the time.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, TypedDict

from src.schemas.booking_schema import CustomRequest

logger = logging.getLogger(__name__)


class ApprovalRecord(TypedDict):
    """Pending approval record created from a custom request."""

    approval_ref: str
    date: str
    time: str
    duration_class: str
    notes: str
    status: str
    submitted_at: str


_pending: dict[str, ApprovalRecord] = {}


def submit_for_approval(request: CustomRequest) -> ApprovalRecord:
    """Queue a custom request for the provider to accept or decline."""
    ref = f"REQ-{uuid.uuid4().hex[:6].upper()}"
    record: ApprovalRecord = {
        "approval_ref": ref,
        "date": request.date.isoformat(),
        "time": request.time,
        "duration_class": request.duration_class.value,
        "notes": request.notes,
        "status": "pending",
        "submitted_at": datetime.now(timezone.utc).isoformat(),
    }
    _pending[ref] = record
    logger.info("Custom request %s queued for %s at %s", ref, record["date"], record["time"])
    return record


def get_approval(approval_ref: str) -> Optional[ApprovalRecord]:
    """Retrieve a pending approval by reference."""
    return _pending.get(approval_ref)


def list_pending() -> list[ApprovalRecord]:
    """All requests still awaiting the provider."""
    return [r for r in _pending.values() if r["status"] == "pending"]


def reset() -> None:
    """Clear all approvals. Used by test fixtures for isolation."""
    _pending.clear()
