"""
Submit Onboarding Use Case

Atomically commits the onboarding form and hands the employee to HR.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from config import ApplicationConfig
from src.app.services.completeness import gate_error, gate_status
from src.app.services.draft_reducer import merge_draft
from src.app.services.encryption import FieldEncryptor, normalize_ssn, reveal_draft
from src.app.services.notifier import Notification, Notifier, notify_safely
from src.app.services.onboarding_steps import (
    PLACEHOLDER_NPI,
    CompletionGate,
    parse_collections,
    parse_employee_fields,
    validate_full_form,
)
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import today, utcnow
from src.domain.compliance import license_status
from src.domain.entities import OWNED_COLLECTIONS, AuditEvent, EmployeeStatus
from src.domain.lifecycle import (
    LifecycleAction,
    blocked_transition_error,
    can_transition,
    sources_for,
    target_of,
)

from .dtos import SubmitOnboardingResponse
from .validate_step_use_case import validation_error

logger = logging.getLogger(__name__)

LICENSE_COLLECTIONS = ("state_licenses", "dea_licenses", "board_certifications")

# Fields that keep their stored value when the form leaves them blank
KEEP_WHEN_BLANK = ("work_email", "caqh_enabled")


def _conflict(field: str, message: str) -> Error:
    return Error(
        "CONFLICT",
        message,
        reason=field,
        details=[{"field": field, "message": message}],
    )


# Unique constraints (by SQLite column or Postgres constraint name) and the field they guard
INTEGRITY_FIELDS = (
    ("uq_state_license_number", "state_licenses", "State license number is already registered"),
    ("state_licenses.", "state_licenses", "State license number is already registered"),
    ("dea_licenses", "dea_licenses", "DEA registration number is already registered"),
    ("work_email", "work_email", "Work email is already in use"),
    ("npi_number", "npi_number", "NPI number is already registered"),
)


def integrity_conflict(error: IntegrityError) -> Error:
    detail = str(error.orig)
    for marker, field, message in INTEGRITY_FIELDS:
        if marker in detail:
            return _conflict(field, message)
    return Error(
        "CONFLICT",
        "Submitted data conflicts with an existing record",
        reason="integrity_error",
    )


def normalize_employee_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop placeholder/blank values that must not overwrite stored data"""
    normalized = dict(fields)
    if "npi_number" in normalized:
        npi = normalized["npi_number"]
        if not npi or npi == PLACEHOLDER_NPI:
            normalized["npi_number"] = None
    for key in KEEP_WHEN_BLANK:
        if key in normalized and normalized[key] is None:
            del normalized[key]
    return normalized


class SubmitOnboardingUseCase:
    """
    Use case for final onboarding submission.

    Business Rules:
    - Status must be prospective, or information_needed for a resubmission
    - Form state = stored draft merged with the submitted payload
    - Full validation of every step; all field errors are returned together
    - Documents and forms completeness re-derived from persisted state
    - Placeholder/empty NPI is dropped; SSN is encrypted
    - Work email, NPI, state license (per state) and DEA numbers must be
      unique, including within the payload
    - Root fields and every owned collection are written in one transaction;
      any failure rolls the whole submission back
    - Guarded transition to pending_approval; open information requests are
      fulfilled and the draft removed
    - HR is notified after commit (best-effort)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: Optional[Notifier] = None,
        encryptor: Optional[FieldEncryptor] = None,
    ):
        self.uow = uow
        self.notifier = notifier
        self.encryptor = encryptor or FieldEncryptor()

    async def execute(
        self, user_id: UUID, employee_id: UUID, payload: Dict[str, Any]
    ) -> Result[SubmitOnboardingResponse]:
        async with self.uow:
            employee = await self.uow.employees.get_by_id(employee_id)
            if employee is None:
                return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))

            if not can_transition(LifecycleAction.submit, employee.status):
                return Return.err(
                    blocked_transition_error(LifecycleAction.submit, employee.status)
                )
            is_resubmission = employee.status == EmployeeStatus.information_needed

            draft = await self.uow.drafts.get_by_employee(employee_id)
            form_state = merge_draft(
                reveal_draft(draft.data if draft else None, self.encryptor), payload
            )

            errors = validate_full_form(form_state)
            if errors:
                return Return.err(validation_error(errors))

            for gate in CompletionGate:
                status = await gate_status(self.uow, employee_id, gate)
                if not status.complete:
                    return Return.err(gate_error(gate, status))

            fields = normalize_employee_fields(parse_employee_fields(form_state))
            collections = parse_collections(form_state)

            conflict = await self._find_conflict(employee_id, fields, collections)
            if conflict is not None:
                return Return.err(conflict)

            ssn = fields.pop("ssn", None)
            if ssn:
                employee.ssn_encrypted = self.encryptor.encrypt(normalize_ssn(ssn))
            for name, value in fields.items():
                setattr(employee, name, value)

            try:
                await self.uow.employees.update(employee)
                await self.uow.records.replace_all(
                    employee_id, self._build_records(employee_id, collections)
                )
            except IntegrityError as e:
                logger.warning(f"Submission for employee {employee_id} conflicted: {e}")
                return Return.err(integrity_conflict(e))

            submitted_at = utcnow()
            moved = await self.uow.employees.transition_status(
                employee_id,
                sources_for(LifecycleAction.submit),
                target_of(LifecycleAction.submit),
                {"submitted_at": submitted_at},
            )
            if not moved:
                current = await self.uow.employees.get_status(employee_id)
                if current is None:
                    return Return.err(Error("EMPLOYEE_NOT_FOUND", "Employee not found"))
                return Return.err(blocked_transition_error(LifecycleAction.submit, current))

            await self.uow.information_requests.mark_fulfilled(employee_id)
            await self.uow.drafts.delete_by_employee(employee_id)

            audit = AuditEvent(
                entity_type="employee",
                entity_id=employee_id,
                performed_by=user_id,
                action="submit",
                event_metadata={
                    "resubmission": is_resubmission,
                    "collections": {
                        name: len(items) for name, items in collections.items()
                    },
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()
            logger.info(f"Employee {employee_id} submitted onboarding for approval")

            await notify_safely(
                self.notifier,
                Notification(
                    kind="onboarding_submitted",
                    recipient=ApplicationConfig.HR_NOTIFICATION_EMAIL,
                    subject=f"Onboarding ready for review: {employee.full_name}",
                    body=f"{employee.full_name} submitted onboarding for approval.",
                    context={"employee_id": str(employee_id)},
                ),
            )

            return Return.ok(
                SubmitOnboardingResponse(
                    employee_id=str(employee_id),
                    status=EmployeeStatus.pending_approval.value,
                    submitted_at=submitted_at.isoformat(),
                    message="Onboarding submitted for HR review",
                )
            )

    async def _find_conflict(
        self,
        employee_id: UUID,
        fields: Dict[str, Any],
        collections: Dict[str, List[Dict[str, Any]]],
    ) -> Optional[Error]:
        work_email = fields.get("work_email")
        if work_email:
            other = await self.uow.employees.get_by_work_email(work_email)
            if other is not None and other.id != employee_id:
                return _conflict(
                    "work_email", f"Work email {work_email} is already in use"
                )

        npi = fields.get("npi_number")
        if npi:
            other = await self.uow.employees.get_by_npi(npi)
            if other is not None and other.id != employee_id:
                return _conflict(
                    "npi_number",
                    f"NPI number {npi} is already registered to another employee",
                )

        seen = set()
        for index, item in enumerate(collections.get("state_licenses", [])):
            field = f"state_licenses.{index}.license_number"
            key = (item["state"], item["license_number"])
            if key in seen:
                return _conflict(
                    field,
                    f"License {item['license_number']} ({item['state']}) is listed more than once",
                )
            seen.add(key)
            existing = await self.uow.records.find_state_license(*key)
            if existing is not None and existing.employee_id != employee_id:
                return _conflict(
                    field,
                    f"License {item['license_number']} is already registered in {item['state']}",
                )

        seen = set()
        for index, item in enumerate(collections.get("dea_licenses", [])):
            field = f"dea_licenses.{index}.license_number"
            number = item["license_number"]
            if number in seen:
                return _conflict(field, f"DEA number {number} is listed more than once")
            seen.add(number)
            existing = await self.uow.records.find_dea_license(number)
            if existing is not None and existing.employee_id != employee_id:
                return _conflict(field, f"DEA number {number} is already registered")

        return None

    @staticmethod
    def _build_records(
        employee_id: UUID, collections: Dict[str, List[Dict[str, Any]]]
    ) -> Dict[str, list]:
        current_day = today()
        records: Dict[str, list] = {}
        for name, items in collections.items():
            table = OWNED_COLLECTIONS[name]
            built = []
            for item in items:
                record = table(employee_id=employee_id, **item)
                if name in LICENSE_COLLECTIONS:
                    record.status = license_status(record.expiration_date, current_day)
                built.append(record)
            records[name] = built
        return records
