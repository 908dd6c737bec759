"""
Service layer helpers that orchestrate collaborators and domain logic.
"""

from .permissions import AuthorizedBookingService, PermissionGate, RolePermissionTable
from .scheduling import AppointmentStore, SchedulingService, StaffDirectory, TimeOffStore

__all__ = [
    "AppointmentStore",
    "AuthorizedBookingService",
    "PermissionGate",
    "RolePermissionTable",
    "SchedulingService",
    "StaffDirectory",
    "TimeOffStore",
]
