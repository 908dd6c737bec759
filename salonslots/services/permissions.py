"""
Caller-side permission gate for appointment commands.

The scheduling engine assumes its caller is authorised. This module is that
caller: it asks the gate first and only then hands the request to
``SchedulingService``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, Mapping, Protocol, Set

from ..domain.exceptions import PermissionDeniedError
from ..domain.models import TimeInterval
from ..domain.results import BookingCommand, CommandResult
from .scheduling import SchedulingService

logger = logging.getLogger(__name__)

APPOINTMENTS_AREA = "appointments"

DEFAULT_ROLE_PERMISSIONS: Dict[str, Set[str]] = {
    "salon_owner": {"appointments:view", "appointments:create", "appointments:edit", "appointments:delete"},
    "manager": {"appointments:view", "appointments:create", "appointments:edit", "appointments:delete"},
    "receptionist": {"appointments:view", "appointments:create", "appointments:edit"},
    "staff": {"appointments:view"},
}


class PermissionGate(Protocol):
    """Boolean capability check."""

    def can(self, actor_role: str, area: str, action: str) -> bool:
        """Return True if ``actor_role`` may perform ``action`` in ``area``."""


class RolePermissionTable:
    """Static role matrix of ``area:action`` grants."""

    def __init__(self, grants: Mapping[str, Iterable[str]] | None = None) -> None:
        source = DEFAULT_ROLE_PERMISSIONS if grants is None else grants
        self._grants: Dict[str, Set[str]] = {
            role.lower(): {grant.lower() for grant in role_grants}
            for role, role_grants in source.items()
        }

    def can(self, actor_role: str, area: str, action: str) -> bool:
        grants = self._grants.get(actor_role.lower(), set())
        return f"{area}:{action}".lower() in grants

    def roles(self) -> Set[str]:
        return set(self._grants)


class AuthorizedBookingService:
    """Checks the permission gate, then delegates to the scheduling service."""

    def __init__(self, scheduling: SchedulingService, gate: PermissionGate) -> None:
        self._scheduling = scheduling
        self._gate = gate

    def create(
        self,
        actor_role: str,
        staff_id: str,
        day: date,
        candidate: TimeInterval,
    ) -> CommandResult:
        self._authorize(actor_role, BookingCommand.CREATE)
        return self._scheduling.create_command(staff_id, day, candidate)

    def move(
        self,
        actor_role: str,
        appointment_id: str,
        new_staff_id: str,
        new_date: date,
        new_candidate: TimeInterval,
    ) -> CommandResult:
        self._authorize(actor_role, BookingCommand.MOVE)
        return self._scheduling.move_command(appointment_id, new_staff_id, new_date, new_candidate)

    def _authorize(self, actor_role: str, command: BookingCommand) -> None:
        action = command.permission_action
        if not self._gate.can(actor_role, APPOINTMENTS_AREA, action):
            logger.warning("Role %r may not %s appointments", actor_role, action)
            raise PermissionDeniedError(
                f"Role '{actor_role}' is not allowed to {action} appointments"
            )
