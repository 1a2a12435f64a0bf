"""
Employee Use Cases

Direct employee management by HR and admins.
"""

from .create_employee_use_case import CreateEmployeeUseCase
from .deactivate_employee_use_case import DeactivateEmployeeUseCase
from .delete_employee_use_case import DeleteEmployeeUseCase
from .dtos import (
    DeactivateEmployeeResponse,
    DeleteEmployeeResponse,
    EmployeeDetailsResponse,
    EmployeeSummary,
)
from .get_employee_use_case import GetEmployeeUseCase

__all__ = [
    "CreateEmployeeUseCase",
    "GetEmployeeUseCase",
    "DeactivateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "EmployeeSummary",
    "EmployeeDetailsResponse",
    "DeactivateEmployeeResponse",
    "DeleteEmployeeResponse",
]
