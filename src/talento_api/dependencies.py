"""Centralized dependency injection factories for FastAPI.

This module provides reusable service factory functions for dependency injection,
shared by the public API and the admin console routers.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from talento_api.database import get_db
from talento_api.services.admin_auth_service import AdminAuthService
from talento_api.services.ai_service import AIQueryService
from talento_api.services.auth_service import AuthService
from talento_api.services.catalog_service import CatalogService
from talento_api.services.employee_service import EmployeeService
from talento_api.services.import_service import ExcelImportService
from talento_api.services.pdf_service import PdfService


# =============================================================================
# Public API Service Factories
# =============================================================================


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db)


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db)


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    """Get CatalogService instance."""
    return CatalogService(db)


def get_pdf_service() -> PdfService:
    """Get PdfService instance."""
    return PdfService()


# =============================================================================
# Admin Console Service Factories
# =============================================================================


def get_admin_auth_service(db: AsyncSession = Depends(get_db)) -> AdminAuthService:
    """Get AdminAuthService instance."""
    return AdminAuthService(db)


def get_import_service(db: AsyncSession = Depends(get_db)) -> ExcelImportService:
    """Get ExcelImportService instance."""
    return ExcelImportService(db)


def get_ai_service(db: AsyncSession = Depends(get_db)) -> AIQueryService:
    """Get AIQueryService instance."""
    return AIQueryService(db)
