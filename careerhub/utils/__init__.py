"""
Utility modules for CareerHub.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from careerhub.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
)
from careerhub.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    QUALIFICATION_THRESHOLD,
    ApplicationKind,
    ApplicationStatus,
    AuditAction,
    Collections,
    NotificationType,
    UserType,
)
from careerhub.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "QUALIFICATION_THRESHOLD",
    "ApplicationKind",
    "ApplicationStatus",
    "AuditAction",
    "Collections",
    "NotificationType",
    "UserType",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
]
