"""
zihou package.

Desktop shell of the work-session reminder app: logging setup and the
application entry point.
"""

__all__ = [
    "logger",
    "main",
]
