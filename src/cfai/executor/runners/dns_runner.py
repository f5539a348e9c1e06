"""DNS record runner."""

from __future__ import annotations

from typing import Any, Mapping

from cfai.api.models import DnsRecordRequest
from cfai.exceptions import ActionValidationError
from cfai.executor.runners.base import BaseRunner
from cfai.executor.runners.params import (
    optional_bool,
    optional_int,
    optional_str,
    require_path_id,
    require_str,
)
from cfai.models.action import Action, ActionKind


def build_record(params: Mapping[str, Any], context: str) -> DnsRecordRequest:
    return DnsRecordRequest(
        record_type=require_str(params, "type", context).upper(),
        name=require_str(params, "name", context),
        content=require_str(params, "content", context),
        ttl=optional_int(params, "ttl", context),
        proxied=optional_bool(params, "proxied"),
        priority=optional_int(params, "priority", context),
        comment=optional_str(params, "comment", context),
    )


class DnsRunner(BaseRunner):
    async def run(self, action: Action, zone_id: str) -> str:
        params = action.parameters

        if action.kind == ActionKind.DNS_RECORD_CREATE:
            record = build_record(params, "dns_create")
            created = await self._client.create_dns_record(zone_id, record)
            record_id = created.get("id", "") if isinstance(created, dict) else ""
            return (
                f"DNS record created: {record.record_type} {record.name} -> "
                f"{record.content} (ID: {record_id or 'unknown'})"
            )

        if action.kind == ActionKind.DNS_RECORD_UPDATE:
            record_id = require_path_id(params, "record_id", "dns_update")
            record = build_record(params, "dns_update")
            await self._client.update_dns_record(zone_id, record_id, record)
            return (
                f"DNS record updated: {record.record_type} {record.name} -> {record.content}"
            )

        if action.kind == ActionKind.DNS_RECORD_DELETE:
            record_id = require_path_id(params, "record_id", "dns_delete")
            await self._client.delete_dns_record(zone_id, record_id)
            return f"DNS record deleted: {record_id}"

        raise ActionValidationError(f"DnsRunner cannot handle {action.kind.value}")
