"""Admin user repository."""

from datetime import timedelta

from sqlalchemy import func, select

from talento_api.models.domain.admin_user import UserRole
from talento_api.models.orm.admin_user import AdminUserORM
from talento_api.models.orm.base import utc_now
from talento_api.repositories.base import BaseRepository


class AdminUserRepository(BaseRepository[AdminUserORM]):
    """Repository for admin console accounts."""

    model = AdminUserORM

    async def get_by_email(self, email: str) -> AdminUserORM | None:
        """Get admin user by email (case-insensitive).

        Args:
            email: User email address

        Returns:
            AdminUserORM or None if not found
        """
        result = await self.session.execute(
            select(AdminUserORM).where(func.lower(AdminUserORM.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def exists_with_role(self, role: UserRole) -> bool:
        """Check whether any account holds the given role."""
        return await self.exists(AdminUserORM.role == role.value)

    async def record_failed_login(
        self,
        user: AdminUserORM,
        max_attempts: int,
        lockout_minutes: int,
    ) -> AdminUserORM:
        """Record a failed login attempt, locking the account at the threshold.

        Args:
            user: Account that failed to authenticate
            max_attempts: Failures that trigger a lock
            lockout_minutes: Lock duration

        Returns:
            Updated AdminUserORM
        """
        user.failed_login_attempts += 1

        if user.failed_login_attempts >= max_attempts:
            user.is_locked = True
            user.locked_until = utc_now() + timedelta(minutes=lockout_minutes)

        await self.session.flush()
        return user

    async def record_successful_login(self, user: AdminUserORM) -> AdminUserORM:
        """Reset the failure counter and stamp the login time."""
        user.failed_login_attempts = 0
        user.is_locked = False
        user.locked_until = None
        user.last_login_at = utc_now()

        await self.session.flush()
        return user

    async def unlock(self, user: AdminUserORM) -> AdminUserORM:
        """Clear an account lock and its failure counter."""
        user.is_locked = False
        user.locked_until = None
        user.failed_login_attempts = 0

        await self.session.flush()
        return user
