"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-01-15 00:00:00.000000

"""
from datetime import datetime, timezone
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEPARTMENTS = [
    (1, "Contabilidad", "Gestión contable y financiera"),
    (2, "Logística", "Cadena de suministro y distribución"),
    (3, "Marketing", "Mercadeo y comunicaciones"),
    (4, "Operaciones", "Operación del negocio"),
    (5, "Recursos Humanos", "Gestión del talento humano"),
    (6, "Tecnología", "Sistemas y desarrollo de software"),
    (7, "Ventas", "Gestión comercial"),
]

JOB_TITLES = [
    (1, "Administrador", "Administración de procesos"),
    (2, "Analista", "Análisis de información"),
    (3, "Auxiliar", "Apoyo operativo"),
    (4, "Coordinador", "Coordinación de equipos"),
    (5, "Desarrollador", "Desarrollo de software"),
    (6, "Ingeniero", "Ingeniería de soluciones"),
    (7, "Soporte Técnico", "Soporte a usuarios"),
]


def _catalog_table(name: str) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(250), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )


def _seed(name: str, rows: list[tuple[int, str, str]]) -> None:
    table = sa.table(
        name,
        sa.column("id", sa.Integer),
        sa.column("name", sa.String),
        sa.column("description", sa.String),
        sa.column("created_at", sa.DateTime(timezone=True)),
    )
    now = datetime.now(timezone.utc)
    op.bulk_insert(
        table,
        [{"id": i, "name": n, "description": d, "created_at": now} for i, n, d in rows],
    )
    # Explicit ids do not advance the PostgreSQL sequence
    if op.get_bind().dialect.name == "postgresql":
        op.execute(
            f"SELECT setval(pg_get_serial_sequence('{name}', 'id'), (SELECT MAX(id) FROM {name}))"
        )


def upgrade() -> None:
    _catalog_table("departments")
    _catalog_table("job_titles")

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("document", sa.String(20), nullable=False),
        sa.Column("first_names", sa.String(100), nullable=False),
        sa.Column("last_names", sa.String(100), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=False),
        sa.Column("address", sa.String(200), nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("email", sa.String(150), nullable=False),
        sa.Column("salary", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("education_level", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("professional_profile", sa.String(500), nullable=True),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("job_title_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["department_id"], ["departments.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["job_title_id"], ["job_titles.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employees_document", "employees", ["document"], unique=True)
    op.create_index("ix_employees_email", "employees", ["email"], unique=True)
    op.create_index("ix_employees_status", "employees", ["status"])
    op.create_index("ix_employees_department_id", "employees", ["department_id"])
    op.create_index("ix_employees_job_title_id", "employees", ["job_title_id"])

    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False, server_default="Administrator"),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("failed_login_attempts", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("locked_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_users_email", "admin_users", ["email"], unique=True)

    _seed("departments", DEPARTMENTS)
    _seed("job_titles", JOB_TITLES)


def downgrade() -> None:
    op.drop_index("ix_admin_users_email", table_name="admin_users")
    op.drop_table("admin_users")
    op.drop_index("ix_employees_job_title_id", table_name="employees")
    op.drop_index("ix_employees_department_id", table_name="employees")
    op.drop_index("ix_employees_status", table_name="employees")
    op.drop_index("ix_employees_email", table_name="employees")
    op.drop_index("ix_employees_document", table_name="employees")
    op.drop_table("employees")
    op.drop_table("job_titles")
    op.drop_table("departments")
