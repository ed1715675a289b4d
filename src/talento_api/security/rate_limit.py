"""Rate limiting configuration for security-sensitive endpoints."""

from ipaddress import ip_address

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from talento_api.config import get_settings


def get_real_client_ip(request: Request) -> str:
    """Extract the client IP, honouring X-Forwarded-For only from loopback proxies.

    Args:
        request: The incoming request object.

    Returns:
        The client IP address.
    """
    direct_ip = get_remote_address(request)

    try:
        from_local_proxy = ip_address(direct_ip).is_loopback
    except ValueError:
        from_local_proxy = False

    if from_local_proxy:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            client_ip = forwarded_for.split(",")[0].strip()
            try:
                ip_address(client_ip)
                return client_ip
            except ValueError:
                pass

    return direct_ip


def _get_rate_limit_settings() -> dict[str, str]:
    """Get rate limit strings from configuration."""
    settings = get_settings()
    return {
        "default": f"{settings.rate_limit_default}/minute",
        "auth_login": f"{settings.rate_limit_auth_login}/minute",
        "auth_register": f"{settings.rate_limit_auth_register}/minute",
        "ai_query": f"{settings.rate_limit_ai_query}/minute",
    }


_rate_limits = _get_rate_limit_settings()

# In-memory storage; the app runs as a single process
limiter = Limiter(
    key_func=get_real_client_ip,
    default_limits=[_rate_limits["default"]],
)

AUTH_LOGIN_LIMIT = _rate_limits["auth_login"]
AUTH_REGISTER_LIMIT = _rate_limits["auth_register"]
AI_QUERY_LIMIT = _rate_limits["ai_query"]
