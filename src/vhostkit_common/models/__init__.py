"""Shared Pydantic models."""

from vhostkit_common.models.audit_event import AuditEvent, StepRecord
from vhostkit_common.models.site import DomainSpec, PhpTarget

__all__ = ["AuditEvent", "DomainSpec", "PhpTarget", "StepRecord"]
