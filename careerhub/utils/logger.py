"""
Logging infrastructure for CareerHub.

Uses Loguru for console and file logging. Decisions on applicants
(submissions, status changes, withdrawals, rankings) are written as
structured JSON records to a separate audit sink.
"""

import sys
from typing import Any

from loguru import logger

from careerhub.utils.config import LoggingSettings, get_settings
from careerhub.utils.constants import AuditAction

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = frozenset({
    "password", "secret", "token", "api_key", "credential",
    "email", "phone", "cover_letter",
})


def _is_audit_record(record: dict) -> bool:
    return "audit_action" in record["extra"]


def _add_file_sinks(log_settings: LoggingSettings, diagnose: bool) -> None:
    log_file = log_settings.file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=diagnose,
        enqueue=True,
    )

    # One JSON object per line: action, actor details and timestamp live in record.extra
    logger.add(
        log_file.parent / "audit.log",
        level="INFO",
        filter=_is_audit_record,
        serialize=True,
        rotation=log_settings.rotation,
        retention=log_settings.audit_retention,
        enqueue=True,
    )


def setup_logging() -> None:
    """
    Configure application-wide logging.

    Installs the console sink and, unless file output is disabled, the
    rotating application log and the audit log next to it.
    """
    settings = get_settings()
    log_settings = settings.logging

    logger.remove()

    # Variable values only appear in tracebacks while developing
    diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=diagnose,
        )

    if log_settings.file_output:
        _add_file_sinks(log_settings, diagnose)

    logger.info(f"Logging initialized - Level: {log_settings.level}")


def get_logger(name: str) -> Any:
    """Get a logger bound to ``name`` (typically ``__name__``)."""
    return logger.bind(name=name)


def _sanitize_for_logging(data: Any) -> Any:
    """Redact credentials and student contact details from nested data."""
    if isinstance(data, dict):
        return {
            k: REDACTED if any(s in k.lower() for s in SENSITIVE_KEYS) else _sanitize_for_logging(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_sanitize_for_logging(item) for item in data]
    return data


def audit_log(action: AuditAction | str, details: dict[str, Any]) -> None:
    """
    Record an applicant decision in the audit log.

    The action and the sanitized details are attached to the record as
    ``audit_action`` and ``audit`` extras, so the audit sink serializes
    them as fields rather than as message text.

    Args:
        action: The decision being recorded
        details: Ids and values describing the decision
    """
    action = AuditAction(action)
    sanitized = _sanitize_for_logging(details)
    logger.bind(audit_action=action.value, audit=sanitized).info(action.value)


class LoggerMixin:
    """Gives a class a ``logger`` bound to its class name."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
