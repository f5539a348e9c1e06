"""Abstract base for action runners and the remote capability they drive."""

from __future__ import annotations

import abc
from typing import Any, Protocol

from cfai.api.models import DnsRecordRequest
from cfai.models.action import Action


class RemoteResourceClient(Protocol):
    """The mutating Cloudflare operations the executor may call."""

    async def set_ssl_mode(self, zone_id: str, mode: str) -> Any: ...
    async def set_always_https(self, zone_id: str, enable: bool) -> Any: ...
    async def set_min_tls_version(self, zone_id: str, version: str) -> Any: ...
    async def set_opportunistic_encryption(self, zone_id: str, enable: bool) -> Any: ...
    async def set_automatic_https_rewrites(self, zone_id: str, enable: bool) -> Any: ...
    async def update_zone_setting(self, zone_id: str, setting_id: str, value: Any) -> Any: ...
    async def create_dns_record(self, zone_id: str, record: DnsRecordRequest) -> Any: ...
    async def update_dns_record(
        self, zone_id: str, record_id: str, record: DnsRecordRequest
    ) -> Any: ...
    async def delete_dns_record(self, zone_id: str, record_id: str) -> Any: ...
    async def purge_all_cache(self, zone_id: str) -> Any: ...
    async def purge_cache_by_urls(self, zone_id: str, urls: list[str]) -> Any: ...
    async def purge_cache_by_tags(self, zone_id: str, tags: list[str]) -> Any: ...
    async def purge_cache_by_hosts(self, zone_id: str, hosts: list[str]) -> Any: ...
    async def block_ip(self, zone_id: str, ip: str, note: str | None = None) -> Any: ...
    async def whitelist_ip(self, zone_id: str, ip: str, note: str | None = None) -> Any: ...
    async def set_security_level(self, zone_id: str, level: str) -> Any: ...
    async def set_under_attack_mode(self, zone_id: str, enable: bool) -> Any: ...
    async def set_browser_check(self, zone_id: str, enable: bool) -> Any: ...


class BaseRunner(abc.ABC):
    def __init__(self, client: RemoteResourceClient) -> None:
        self._client = client

    @abc.abstractmethod
    async def run(self, action: Action, zone_id: str) -> str:
        """Validate ``action.parameters`` and perform the remote call.

        Returns a human-readable success message. Raises
        ``ActionValidationError`` before any remote call when parameters are
        unusable, and lets ``RemoteApiError`` from the client propagate.
        """
        ...  # pragma: no cover
