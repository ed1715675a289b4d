"""Security package."""

from talento_api.security.auth import (
    create_employee_token,
    get_current_employee,
    require_administrator,
)
from talento_api.security.password import PasswordService

__all__ = [
    "PasswordService",
    "create_employee_token",
    "get_current_employee",
    "require_administrator",
]
