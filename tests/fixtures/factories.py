from datetime import date
from typing import Dict, Optional
from uuid import UUID

from src.api.utils.jwt import create_access_token
from src.domain.entities import (
    Document,
    DocumentType,
    Employee,
    EmployeeStatus,
    FormAssignment,
    FormStatus,
    RequiredDocumentType,
    StateLicense,
    StorageType,
    User,
    UserRole,
)


def bearer(user_id: UUID, role: str, employee_id: Optional[UUID] = None) -> Dict[str, str]:
    token = create_access_token(user_id=user_id, role=role, employee_id=employee_id)
    return {"Authorization": f"Bearer {token}"}


async def _persist(db_session, entity):
    db_session.add(entity)
    await db_session.commit()
    await db_session.refresh(entity)
    return entity


async def create_staff_user(db_session, role: UserRole, email: str) -> User:
    return await _persist(db_session, User(email=email, password_hash="unused", role=role))


async def create_employee(
    db_session,
    status: EmployeeStatus = EmployeeStatus.prospective,
    first_name: str = "Jane",
    last_name: str = "Doe",
    work_email: Optional[str] = None,
    **fields,
) -> Employee:
    employee = Employee(
        first_name=first_name,
        last_name=last_name,
        work_email=work_email,
        status=status,
        **fields,
    )
    return await _persist(db_session, employee)


async def create_onboarding_user(db_session, employee: Employee) -> User:
    user = User(
        email=employee.work_email or f"{employee.id.hex}@clinic.com",
        password_hash="unused",
        role=UserRole.prospective_employee,
        employee_id=employee.id,
    )
    return await _persist(db_session, user)


async def require_document_type(
    db_session, document_type: DocumentType, name: str
) -> RequiredDocumentType:
    return await _persist(
        db_session, RequiredDocumentType(document_type=document_type, name=name)
    )


async def add_document(
    db_session, employee_id: UUID, document_type: DocumentType, archived: bool = False
) -> Document:
    document = Document(
        employee_id=employee_id,
        document_type=document_type,
        document_name=f"{document_type.value}.pdf",
        file_name=f"{document_type.value}.pdf",
        file_size=9,
        mime_type="application/pdf",
        storage_type=StorageType.local,
        storage_key=f"documents/{employee_id}/{document_type.value}.pdf",
        archived=archived,
    )
    return await _persist(db_session, document)


async def add_form(
    db_session,
    employee_id: UUID,
    template_name: str,
    status: FormStatus = FormStatus.completed,
) -> FormAssignment:
    return await _persist(
        db_session,
        FormAssignment(employee_id=employee_id, template_name=template_name, status=status),
    )


async def add_state_license(
    db_session,
    employee_id: UUID,
    license_number: str,
    expiration_date: Optional[date],
    state: str = "CA",
) -> StateLicense:
    return await _persist(
        db_session,
        StateLicense(
            employee_id=employee_id,
            license_number=license_number,
            state=state,
            expiration_date=expiration_date,
        ),
    )
