"""Pydantic models for Cloudflare API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CfError(BaseModel):
    code: int = 0
    message: str = ""

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class CfResponse(BaseModel):
    """The ``{success, errors, messages, result}`` envelope of every API reply."""

    success: bool = False
    errors: list[CfError] = Field(default_factory=list)
    messages: list[Any] = Field(default_factory=list)
    result: Any = None
    result_info: dict[str, Any] | None = None


class DnsRecordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    record_type: str = Field(alias="type")
    name: str
    content: str
    ttl: int | None = None
    proxied: bool | None = None
    priority: int | None = None
    comment: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class IpAccessRuleRequest(BaseModel):
    mode: str
    configuration: dict[str, str]
    notes: str | None = None

    @classmethod
    def for_ip(cls, mode: str, ip: str, notes: str | None = None) -> IpAccessRuleRequest:
        return cls(mode=mode, configuration={"target": "ip", "value": ip}, notes=notes)


class PurgeCacheRequest(BaseModel):
    purge_everything: bool | None = None
    files: list[str] | None = None
    tags: list[str] | None = None
    hosts: list[str] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
