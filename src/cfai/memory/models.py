"""Pydantic models for audit log records."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class RunRecord(BaseModel):
    id: str
    zone_id: str
    query: str = ""
    explanation: str = ""
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    total: int = 0
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class OutcomeRecord(BaseModel):
    run_id: str
    position: int
    kind: str
    description: str
    risk: str
    status: str
    detail: str = ""
