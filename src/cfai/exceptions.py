"""Custom exception hierarchy for cfai."""

from __future__ import annotations

from typing import Any


class CfaiError(Exception):
    """Base exception for all cfai errors."""


class ConfigError(CfaiError):
    """Raised when required settings are missing or invalid."""


class AnalysisError(CfaiError):
    """Raised when the conversational analysis service call fails."""


class RemoteApiError(CfaiError):
    """Raised when a Cloudflare API operation fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ActionValidationError(CfaiError):
    """Raised when an action is unsupported or its parameters are unusable."""


class ConfirmationError(CfaiError):
    """Raised when the confirmation channel itself fails (e.g. stdin closed).

    The executor sets ``report`` to the outcomes recorded before the failure,
    so changes that already reached the zone can still be audited.
    """

    def __init__(self, message: str, report: Any = None) -> None:
        super().__init__(message)
        self.report = report
