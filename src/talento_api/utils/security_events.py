"""Audit trail for logins, registrations and bulk employee changes.

Records go to the ``security`` logger rather than module loggers, so a
deployment can ship them to their own file or collector. Each record carries
the structured event under ``record.security_event``.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class SecurityEventType(str, Enum):
    """Auditable actions, grouped by the surface that triggers them."""

    # REST API, employee self-service
    EMPLOYEE_REGISTERED = "employee_registered"
    EMPLOYEE_LOGIN_SUCCESS = "employee_login_success"
    EMPLOYEE_LOGIN_FAILED = "employee_login_failed"

    # Console accounts
    ADMIN_REGISTERED = "admin_registered"
    ADMIN_REGISTRATION_REFUSED = "admin_registration_refused"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_LOCKED = "login_locked"
    LOGOUT = "logout"

    # Console data changes
    EMPLOYEE_DELETED = "employee_deleted"
    BULK_IMPORT = "bulk_import"

    @property
    def channel(self) -> str:
        """``api`` for employee events, ``console`` for everything else."""
        return "api" if self.name.startswith("EMPLOYEE_") and self.name != "EMPLOYEE_DELETED" else "console"


security_logger = logging.getLogger("security")


def log_security_event(
    event_type: SecurityEventType,
    user_id: int | str | None = None,
    user_email: str | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Write one audit record.

    Args:
        event_type: What happened
        user_id: Administrator or employee id of the actor, if known
        user_email: Email of the actor as typed or stored
        ip_address: Client address from ``get_real_client_ip``
        details: Event-specific values such as import counts
        success: False for refused or failed attempts, logged as warnings
    """
    event: dict[str, Any] = {
        "event_type": event_type.value,
        "channel": event_type.channel,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "success": success,
        "actor": {
            "user_id": None if user_id is None else str(user_id),
            "email": user_email,
            "ip_address": ip_address,
        },
        "details": details or {},
    }

    level = logging.INFO if success else logging.WARNING
    outcome = "ok" if success else "failed"
    security_logger.log(
        level,
        f"{event_type.channel}:{event_type.value} ({outcome})",
        extra={"security_event": event},
    )
