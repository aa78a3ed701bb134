"""
Data shared by the scheduler core and the desktop shell.
"""

from .offsets import OffsetValidationError, format_offset, parse_offset, parse_offsets  # noqa: F401
from .reminder_definition import AuthorizationOptions, AuthorizationStatus, ReminderSpec  # noqa: F401
