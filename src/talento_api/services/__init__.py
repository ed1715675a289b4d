"""Services package."""

from talento_api.services.admin_auth_service import AdminAuthService
from talento_api.services.ai_service import AIQueryService
from talento_api.services.auth_service import AuthService
from talento_api.services.catalog_service import CatalogService
from talento_api.services.email_service import EmailService
from talento_api.services.employee_service import EmployeeService
from talento_api.services.import_service import ExcelImportService
from talento_api.services.pdf_service import PdfService

__all__ = [
    "AdminAuthService",
    "AIQueryService",
    "AuthService",
    "CatalogService",
    "EmailService",
    "EmployeeService",
    "ExcelImportService",
    "PdfService",
]
