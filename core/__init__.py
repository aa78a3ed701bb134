"""
Session reminder scheduler: the Qt-free core plus the desktop shell modules.
"""

from .controller import ControllerPhase, SchedulerController, StartResult  # noqa: F401
from .errors import (  # noqa: F401
    AlreadyActiveError,
    NotActiveError,
    PermissionDeniedError,
    ScheduleError,
    SchedulerError,
    SessionCancelledError,
)
from .memory_gateway import InMemoryNotificationGateway  # noqa: F401
from .session_state import SessionState  # noqa: F401
