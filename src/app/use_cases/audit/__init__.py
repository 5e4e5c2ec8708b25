"""
Audit Use Cases
"""

from .get_audit_events_use_case import AuditEventView, GetAuditEventsUseCase

__all__ = ["AuditEventView", "GetAuditEventsUseCase"]
