"""
Employee Use Case DTOs (Data Transfer Objects)
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from src.app.use_cases.documents.dtos import DocumentResponse


class EmployeeSummary(BaseModel):
    id: str
    first_name: str
    last_name: str
    work_email: Optional[str]
    job_title: Optional[str]
    work_location: Optional[str]
    status: str
    created_at: str


class EmployeeDetailsResponse(BaseModel):
    """Full employee record; the SSN is only ever returned masked"""

    id: str
    status: str
    ssn_masked: Optional[str]
    profile: Dict[str, Any]
    collections: Dict[str, List[Dict[str, Any]]]
    documents: List[DocumentResponse]


class DeactivateEmployeeResponse(BaseModel):
    id: str
    status: str
    account_deactivated: bool


class DeleteEmployeeResponse(BaseModel):
    id: str
    deleted: bool
    documents_removed: int
