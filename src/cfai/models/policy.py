"""Policy models — risk tiers attached to suggested actions."""

from __future__ import annotations

import enum


class RiskTier(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"
