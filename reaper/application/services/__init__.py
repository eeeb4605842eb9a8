"""Application services: quota, pause gate, audit trail, authorization."""

from reaper.application.services.audit_logger import AuditLogger
from reaper.application.services.authorization_service import PermissionDeleteAuthorizer
from reaper.application.services.pause_gate import PauseGate
from reaper.application.services.quota_calculator import QuotaCalculator

__all__ = [
    "AuditLogger",
    "PauseGate",
    "PermissionDeleteAuthorizer",
    "QuotaCalculator",
]
