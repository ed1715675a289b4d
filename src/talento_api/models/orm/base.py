"""Declarative base, shared mixins and the audit timestamp hook."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, event
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class IntIdMixin:
    """Integer autoincrement primary key."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class TimestampMixin:
    """Audit timestamps.

    Values are assigned by the session's before_flush hook below, so every
    save path (services, import, scripts) stamps rows the same way.
    """

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


@event.listens_for(Session, "before_flush")
def _stamp_audit_timestamps(session: Session, flush_context, instances) -> None:
    now = utc_now()
    for obj in session.new:
        if isinstance(obj, TimestampMixin):
            obj.created_at = now
    for obj in session.dirty:
        if isinstance(obj, TimestampMixin) and session.is_modified(obj, include_collections=False):
            obj.updated_at = now
