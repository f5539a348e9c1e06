"""Extracts a typed action plan from free-form assistant output.

Model output is loosely structured: it may be chatty prose wrapping a fenced
```json block, a bare JSON document, or plain conversation with nothing to
act on. Extraction tries the first fenced block, then the whole text, and
otherwise yields an empty plan. It never raises.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from cfai.models.action import Action, ActionKind, ActionPlan
from cfai.policy.risk_levels import risk_from_string

logger = logging.getLogger(__name__)

FENCE_OPEN = "```json"
FENCE_CLOSE = "```"

KIND_TOKENS: dict[str, ActionKind] = {
    "ssl_set": ActionKind.TLS_SETTING_CHANGE,
    "setting_update": ActionKind.RESOURCE_SETTING_CHANGE,
    "dns_create": ActionKind.DNS_RECORD_CREATE,
    "dns_update": ActionKind.DNS_RECORD_UPDATE,
    "dns_delete": ActionKind.DNS_RECORD_DELETE,
    "cache_purge": ActionKind.CACHE_PURGE,
    "firewall_rule": ActionKind.ACCESS_RULE_CHANGE,
}


class _WireAction(BaseModel):
    type: str
    description: str = Field(min_length=1)
    params: dict[str, Any] | None = None
    risk: str | None = None

    @field_validator("description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be blank")
        return value

    @field_validator("params", mode="before")
    @classmethod
    def _null_params(cls, value: Any) -> Any:
        return {} if value is None else value


class _WirePlan(BaseModel):
    actions: list[_WireAction] | None = None
    explanation: str | None = None


def kind_from_token(token: str) -> ActionKind:
    return KIND_TOKENS.get(token.strip().lower(), ActionKind.UNSUPPORTED)


def _decode(payload: str) -> ActionPlan | None:
    try:
        data = json.loads(payload)
        wire = _WirePlan.model_validate(data)
    except (json.JSONDecodeError, ValidationError, RecursionError) as exc:
        logger.debug("Payload is not an action plan: %s", exc)
        return None

    actions = [
        Action(
            kind=kind_from_token(item.type),
            type_token=item.type,
            description=item.description,
            parameters=item.params or {},
            risk=risk_from_string(item.risk),
        )
        for item in wire.actions or []
    ]
    return ActionPlan(actions=actions, explanation=wire.explanation)


def _fenced_block(text: str) -> str | None:
    start = text.find(FENCE_OPEN)
    if start == -1:
        return None
    body_start = start + len(FENCE_OPEN)
    end = text.find(FENCE_CLOSE, body_start)
    if end == -1:
        return None
    return text[body_start:end].strip()


def extract(text: str) -> ActionPlan:
    block = _fenced_block(text)
    if block is not None:
        plan = _decode(block)
        if plan is not None:
            return plan
        logger.debug("Fenced block did not decode, trying whole text")

    # the whole original text, not the remainder after the fenced block
    plan = _decode(text.strip())
    if plan is not None:
        return plan
    return ActionPlan()
