"""
Completion Gates

Documents and forms completeness, always re-derived from persisted state.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from libs.result import Error
from src.app.services.onboarding_steps import CompletionGate
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import FormStatus


@dataclass(frozen=True)
class GateStatus:
    complete: bool
    remaining: int = 0
    missing: List[str] = field(default_factory=list)
    message: Optional[str] = None


def _plural(count: int, noun: str) -> str:
    return noun if count == 1 else f"{noun}s"


async def documents_status(uow: UnitOfWork, employee_id: UUID) -> GateStatus:
    """Every required document type has at least one non-archived upload"""
    required = await uow.documents.get_required_types()
    uploaded = {
        document.document_type
        for document in await uow.documents.get_by_employee(employee_id)
    }
    missing = [item.name for item in required if item.document_type not in uploaded]
    if not missing:
        return GateStatus(complete=True)

    remaining = len(missing)
    return GateStatus(
        complete=False,
        remaining=remaining,
        missing=missing,
        message=f"Please upload {remaining} more required "
        f"{_plural(remaining, 'document')}",
    )


async def forms_status(uow: UnitOfWork, employee_id: UUID) -> GateStatus:
    """Every required form assignment is completed"""
    assignments = await uow.form_assignments.get_by_employee(employee_id)
    missing = [
        assignment.template_name
        for assignment in assignments
        if assignment.is_required and assignment.status != FormStatus.completed
    ]
    if not missing:
        return GateStatus(complete=True)

    remaining = len(missing)
    return GateStatus(
        complete=False,
        remaining=remaining,
        missing=missing,
        message=f"Please complete {remaining} more required "
        f"{_plural(remaining, 'form')}",
    )


async def gate_status(
    uow: UnitOfWork, employee_id: UUID, gate: CompletionGate
) -> GateStatus:
    if gate == CompletionGate.documents:
        return await documents_status(uow, employee_id)
    return await forms_status(uow, employee_id)


def gate_error(gate: CompletionGate, status: GateStatus) -> Error:
    code = (
        "DOCUMENTS_INCOMPLETE" if gate == CompletionGate.documents else "FORMS_INCOMPLETE"
    )
    return Error(
        code,
        status.message,
        details=[{"field": gate.value, "message": status.message}],
    )
