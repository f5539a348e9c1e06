"""Execution models — output of the risk-gated executor."""

from __future__ import annotations

import enum
from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field

from cfai.models.action import Action, ActionKind
from cfai.models.policy import RiskTier


class OutcomeStatus(str, enum.Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class Outcome(BaseModel):
    index: int
    kind: ActionKind
    description: str
    risk: RiskTier
    status: OutcomeStatus
    message: str = ""
    error: str = ""
    finished_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @classmethod
    def success(cls, index: int, action: Action, message: str) -> Outcome:
        return cls._for(index, action, OutcomeStatus.SUCCEEDED, message=message)

    @classmethod
    def failure(cls, index: int, action: Action, error: str) -> Outcome:
        return cls._for(index, action, OutcomeStatus.FAILED, error=error)

    @classmethod
    def skipped(cls, index: int, action: Action, reason: str) -> Outcome:
        return cls._for(index, action, OutcomeStatus.SKIPPED, message=reason)

    @classmethod
    def _for(
        cls, index: int, action: Action, status: OutcomeStatus, **detail: str
    ) -> Outcome:
        return cls(
            index=index,
            kind=action.kind,
            description=action.description,
            risk=action.risk,
            status=status,
            **detail,
        )

    @property
    def detail(self) -> str:
        return self.error if self.status == OutcomeStatus.FAILED else self.message


class ExecutionReport(BaseModel):
    outcomes: list[Outcome] = Field(default_factory=list)

    def record(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> int:
        return self._count(OutcomeStatus.SUCCEEDED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return len(self.outcomes)
