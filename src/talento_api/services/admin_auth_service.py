"""Admin console accounts: first-admin registration and password login with lockout."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.config import Settings, get_settings
from talento_api.exceptions import (
    AccountLockedError,
    AdministratorAlreadyExistsError,
    AuthenticationError,
)
from talento_api.models.domain.admin_user import AdminUser, UserRole
from talento_api.models.dto.auth import AdminRegisterRequest
from talento_api.models.orm.admin_user import AdminUserORM
from talento_api.models.orm.base import utc_now
from talento_api.repositories.unit_of_work import UnitOfWork
from talento_api.security.password import PasswordService
from talento_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AdminAuthService:
    """Authentication for administrators of the web console."""

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings | None = None,
        password_service: PasswordService | None = None,
    ) -> None:
        """Initialize service with database session."""
        self.session = session
        self.uow = UnitOfWork(session)
        self.settings = settings or get_settings()
        self.password_service = password_service or PasswordService()

    async def administrator_exists(self) -> bool:
        """Whether any administrator account exists."""
        return await self.uow.admin_users.exists_with_role(UserRole.ADMINISTRATOR)

    async def register_first_admin(
        self,
        data: AdminRegisterRequest,
        ip_address: str | None = None,
    ) -> AdminUser:
        """Create the one and only administrator.

        Args:
            data: Validated registration form
            ip_address: Client IP for the security log

        Returns:
            The new administrator

        Raises:
            AdministratorAlreadyExistsError: If an administrator already exists
        """
        if await self.administrator_exists():
            log_security_event(
                SecurityEventType.ADMIN_REGISTRATION_REFUSED,
                user_email=data.email,
                ip_address=ip_address,
                success=False,
            )
            raise AdministratorAlreadyExistsError()

        user = await self.uow.admin_users.create(
            email=data.email.strip().lower(),
            name=f"{data.first_names.strip()} {data.last_names.strip()}",
            password_hash=self.password_service.hash_password(data.password),
            role=UserRole.ADMINISTRATOR.value,
        )
        await self.uow.save_changes()

        log_security_event(
            SecurityEventType.ADMIN_REGISTERED,
            user_id=user.id,
            user_email=user.email,
            ip_address=ip_address,
        )
        return AdminUser.model_validate(user)

    async def authenticate(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
    ) -> AdminUser:
        """Verify administrator credentials.

        Five consecutive failures (configurable) lock the account for five
        minutes (configurable). An expired lock is cleared on the next
        attempt, and a successful login resets the failure counter.

        Raises:
            AccountLockedError: If the account is locked
            AuthenticationError: If the credentials are wrong or the role is not Administrator
        """
        user = await self.uow.admin_users.get_by_email(email)
        if user is None:
            log_security_event(
                SecurityEventType.LOGIN_FAILED,
                user_email=email,
                ip_address=ip_address,
                details={"reason": "unknown_user"},
                success=False,
            )
            raise AuthenticationError("Email o contraseña incorrectos.")

        if await self._is_locked(user):
            log_security_event(
                SecurityEventType.LOGIN_LOCKED,
                user_id=user.id,
                user_email=user.email,
                ip_address=ip_address,
                success=False,
            )
            raise AccountLockedError()

        if not self.password_service.verify_password(password, user.password_hash):
            await self.uow.admin_users.record_failed_login(
                user,
                max_attempts=self.settings.max_login_attempts,
                lockout_minutes=self.settings.lockout_duration_minutes,
            )
            await self.uow.save_changes()
            log_security_event(
                SecurityEventType.LOGIN_FAILED,
                user_id=user.id,
                user_email=user.email,
                ip_address=ip_address,
                details={"failed_attempts": user.failed_login_attempts},
                success=False,
            )
            if user.is_locked:
                logger.warning(f"Admin account locked after failed logins: id={user.id}")
                raise AccountLockedError()
            raise AuthenticationError("Email o contraseña incorrectos.")

        if user.role != UserRole.ADMINISTRATOR.value:
            log_security_event(
                SecurityEventType.LOGIN_FAILED,
                user_id=user.id,
                user_email=user.email,
                ip_address=ip_address,
                details={"reason": "role"},
                success=False,
            )
            raise AuthenticationError("No tiene permisos de administrador.")

        if self.password_service.needs_rehash(user.password_hash):
            user.password_hash = self.password_service.hash_password(password)
        await self.uow.admin_users.record_successful_login(user)
        await self.uow.save_changes()

        log_security_event(
            SecurityEventType.LOGIN_SUCCESS,
            user_id=user.id,
            user_email=user.email,
            ip_address=ip_address,
        )
        return AdminUser.model_validate(user)

    async def _is_locked(self, user: AdminUserORM) -> bool:
        """Check the lock, clearing it when the window has passed."""
        if not user.is_locked:
            return False
        if user.locked_until is not None and _as_utc(user.locked_until) > utc_now():
            return True
        await self.uow.admin_users.unlock(user)
        return False
