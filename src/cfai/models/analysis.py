"""Analysis models — output of the conversational analysis service."""

from __future__ import annotations

from pydantic import BaseModel


class AnalysisResult(BaseModel):
    content: str
    tokens_used: int | None = None
