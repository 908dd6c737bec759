"""
Adapters layer - Collaborator implementations backed by local data.
"""

from .memory_store import Appointment, InMemoryScheduleStore, StaffMember, TimeOffRequest
from .schedule_file import ScheduleFile, load_schedule_file

__all__ = [
    "Appointment",
    "InMemoryScheduleStore",
    "ScheduleFile",
    "StaffMember",
    "TimeOffRequest",
    "load_schedule_file",
]
