"""Data Transfer Objects package."""

from talento_api.models.dto.ai import AIQueryResult, AskAIRequest
from talento_api.models.dto.auth import (
    AdminLoginRequest,
    AdminRegisterRequest,
    EmployeeLoginRequest,
    EmployeeRegisterRequest,
    TokenResponse,
)
from talento_api.models.dto.catalog import DepartmentResponse, JobTitleResponse
from talento_api.models.dto.common import ApiResponse
from talento_api.models.dto.dashboard import DashboardStats, GroupCount
from talento_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeProfileResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from talento_api.models.dto.imports import ImportResult

__all__ = [
    "AIQueryResult",
    "AskAIRequest",
    "AdminLoginRequest",
    "AdminRegisterRequest",
    "EmployeeLoginRequest",
    "EmployeeRegisterRequest",
    "TokenResponse",
    "DepartmentResponse",
    "JobTitleResponse",
    "ApiResponse",
    "DashboardStats",
    "GroupCount",
    "EmployeeCreate",
    "EmployeeProfileResponse",
    "EmployeeResponse",
    "EmployeeUpdate",
    "ImportResult",
]
