"""CSRF protection for admin console forms."""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, Request, status

from talento_api.config import get_settings

# CSRF token validity duration
CSRF_TOKEN_LIFETIME = timedelta(hours=8)

# Token format: token:timestamp:signature
CSRF_TOKEN_DELIMITER = ":"
CSRF_TOKEN_PARTS = 3

CSRF_SESSION_KEY = "csrf_token"
CSRF_FORM_FIELD = "csrf_token"


def _sign(message: str) -> str:
    settings = get_settings()
    return hmac.new(
        settings.session_secret.encode(),
        message.encode(),
        hashlib.sha256,
    ).hexdigest()


def generate_csrf_token() -> str:
    """Generate a signed CSRF token.

    Returns:
        Token in the form token:timestamp:signature
    """
    token = secrets.token_urlsafe(32)
    timestamp = int(datetime.now(timezone.utc).timestamp())
    signature = _sign(f"{token}{CSRF_TOKEN_DELIMITER}{timestamp}")
    return CSRF_TOKEN_DELIMITER.join([token, str(timestamp), signature])


def verify_csrf_token(signed_token: str) -> bool:
    """Verify a CSRF token signature and expiry.

    Args:
        signed_token: The signed CSRF token (token:timestamp:signature)

    Returns:
        True if valid, False otherwise
    """
    try:
        parts = signed_token.split(CSRF_TOKEN_DELIMITER)
        if len(parts) != CSRF_TOKEN_PARTS:
            return False

        token, timestamp_str, provided_signature = parts
        timestamp = int(timestamp_str)

        created_at = datetime.fromtimestamp(timestamp, tz=timezone.utc)
        if datetime.now(timezone.utc) - created_at > CSRF_TOKEN_LIFETIME:
            return False

        expected_signature = _sign(f"{token}{CSRF_TOKEN_DELIMITER}{timestamp}")
        return hmac.compare_digest(provided_signature, expected_signature)
    except (ValueError, TypeError):
        return False


def get_csrf_token(request: Request) -> str:
    """Return the session's CSRF token, issuing a new one when missing or stale."""
    token = request.session.get(CSRF_SESSION_KEY)
    if not token or not verify_csrf_token(token):
        token = generate_csrf_token()
        request.session[CSRF_SESSION_KEY] = token
    return token


async def validate_csrf(request: Request) -> None:
    """Validate the CSRF token of a console form submission.

    The token may arrive as a form field or as an X-CSRF-Token header (used by
    the dashboard's AJAX chat). It must verify and match the session token.

    Raises:
        HTTPException: If CSRF validation fails
    """
    if request.method in ("GET", "HEAD", "OPTIONS"):
        return

    submitted = request.headers.get("X-CSRF-Token")
    if not submitted:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            form = await request.form()
            value = form.get(CSRF_FORM_FIELD)
            submitted = value if isinstance(value, str) else None

    if not submitted:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="CSRF token missing",
        )

    if not verify_csrf_token(submitted):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired CSRF token",
        )

    expected = request.session.get(CSRF_SESSION_KEY)
    if not expected or not hmac.compare_digest(submitted, expected):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="CSRF token mismatch",
        )
