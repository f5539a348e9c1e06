"""Action models — output of the action extractor."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cfai.models.policy import RiskTier


class ActionKind(str, enum.Enum):
    TLS_SETTING_CHANGE = "TLS_SETTING_CHANGE"
    RESOURCE_SETTING_CHANGE = "RESOURCE_SETTING_CHANGE"
    DNS_RECORD_CREATE = "DNS_RECORD_CREATE"
    DNS_RECORD_UPDATE = "DNS_RECORD_UPDATE"
    DNS_RECORD_DELETE = "DNS_RECORD_DELETE"
    CACHE_PURGE = "CACHE_PURGE"
    ACCESS_RULE_CHANGE = "ACCESS_RULE_CHANGE"
    UNSUPPORTED = "UNSUPPORTED"


class Action(BaseModel):
    """A single proposed configuration change.

    ``parameters`` is kept exactly as the assistant produced it; required keys
    are only checked when the action is dispatched.
    """

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    type_token: str = ""
    description: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)
    risk: RiskTier = RiskTier.UNKNOWN


class ActionPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    actions: list[Action] = Field(default_factory=list)
    explanation: str | None = None
