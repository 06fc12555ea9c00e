"""Audit trail for remote write operations (create/update/delete/reconcile)."""

from __future__ import annotations
import datetime
import hashlib
import hmac
import json
import logging
import os
from pathlib import Path
from typing import Any, Literal

logger = logging.getLogger(__name__)

AUDIT_LOG_DIR = Path(os.environ.get("DIRECTUS_AUDIT_LOG_DIR", ".runtime/audit"))
AUDIT_LOG_FILE = AUDIT_LOG_DIR / "resource-events.jsonl"

EventType = Literal["create", "update", "delete", "reconcile"]


def _get_signing_key() -> bytes:
    """Get the audit signing key from the environment (read lazily per event)."""
    return os.environ.get("DIRECTUS_AUDIT_SIGNING_KEY", "").strip().encode("utf-8")


def _ensure_audit_dir() -> None:
    """Create audit directory with restricted permissions."""
    AUDIT_LOG_DIR.mkdir(parents=True, exist_ok=True)
    AUDIT_LOG_DIR.chmod(0o700)


def _sign_event(event: dict[str, Any]) -> str:
    """Generate HMAC-SHA256 signature for audit event."""
    signing_key = _get_signing_key()
    if not signing_key:
        return ""
    # Canonical JSON representation for signing
    canonical = json.dumps(event, sort_keys=True, separators=(",", ":"))
    return hmac.new(signing_key, canonical.encode("utf-8"), hashlib.sha256).hexdigest()


def log_resource_event(
    event_type: EventType,
    resource_type: str,
    identifier: str | None,
    *,
    operator: str = "automation",
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Append a resource event to the audit trail with timestamp and signature.

    Args:
        event_type: Kind of write (create, update, delete, reconcile)
        resource_type: Resource type name (e.g., "directus_policy")
        identifier: Identifier of the affected resource (None if creation failed)
        operator: Who performed the operation
        details: Additional context (payload keys, relation changes, errors)
        success: Whether the operation succeeded
    """
    _ensure_audit_dir()

    event = {
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "event_type": event_type,
        "resource_type": resource_type,
        "identifier": identifier,
        "operator": operator,
        "success": success,
        "details": details or {},
    }

    signature = _sign_event(event)
    if signature:
        event["signature"] = signature

    # Append to JSONL file (one JSON object per line)
    with AUDIT_LOG_FILE.open("a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")

    AUDIT_LOG_FILE.chmod(0o600)


def safe_log_resource_event(
    event_type: EventType,
    resource_type: str,
    identifier: str | None,
    *,
    operator: str = "automation",
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> bool:
    """Log a resource event without ever raising.

    Audit failures are reported as warnings and never break the resource
    operation that triggered them.

    Returns:
        True if event was logged successfully, False if logging failed
    """
    try:
        log_resource_event(
            event_type,
            resource_type,
            identifier,
            operator=operator,
            details=details,
            success=success,
        )
        return True
    except (OSError, TypeError, ValueError) as e:
        logger.warning(f"Failed to write {event_type} audit event for {resource_type} {identifier}: {e}")
        return False


def verify_audit_log() -> tuple[int, int]:
    """Verify all signatures in the audit log.

    Returns:
        Tuple of (total_events, valid_signatures)
    """
    if not AUDIT_LOG_FILE.exists():
        return 0, 0

    total = 0
    valid = 0

    with AUDIT_LOG_FILE.open("r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            total += 1
            try:
                event = json.loads(line)
                stored_sig = event.pop("signature", "")
                if not stored_sig:
                    continue
                computed_sig = _sign_event(event)
                if computed_sig and hmac.compare_digest(stored_sig, computed_sig):
                    valid += 1
            except (json.JSONDecodeError, KeyError):
                continue

    return total, valid
