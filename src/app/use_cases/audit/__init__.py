"""
Audit Use Cases

Audit trail of lifecycle and compliance actions.
"""

from .get_audit_events_use_case import GetAuditEventsUseCase

__all__ = [
    "GetAuditEventsUseCase",
]
