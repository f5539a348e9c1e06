"""Cloudflare v4 API client built on httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from cfai.api.models import CfResponse, DnsRecordRequest, IpAccessRuleRequest, PurgeCacheRequest
from cfai.config.settings import Settings
from cfai.exceptions import ConfigError, RemoteApiError

logger = logging.getLogger(__name__)


def auth_headers(settings: Settings) -> dict[str, str]:
    if settings.cloudflare_api_token:
        return {"Authorization": f"Bearer {settings.cloudflare_api_token}"}
    if settings.cloudflare_email and settings.cloudflare_api_key:
        return {
            "X-Auth-Email": settings.cloudflare_email,
            "X-Auth-Key": settings.cloudflare_api_key,
        }
    raise ConfigError(
        "Cloudflare credentials are not configured. Set CFAI_CLOUDFLARE_API_TOKEN "
        "or CFAI_CLOUDFLARE_EMAIL and CFAI_CLOUDFLARE_API_KEY."
    )


def _on_off(enable: bool) -> str:
    return "on" if enable else "off"


class CloudflareClient:
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json", **auth_headers(settings)}
        self._http = httpx.AsyncClient(
            base_url=settings.cloudflare_api_url,
            headers=headers,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> CloudflareClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> CfResponse:
        logger.debug("%s %s", method, path)
        try:
            resp = await self._http.request(method, path, json=json, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RemoteApiError(f"{method} {path} failed: {exc}") from exc
        return self._handle_response(resp)

    @staticmethod
    def _handle_response(resp: httpx.Response) -> CfResponse:
        logger.debug("Response status %d, %d bytes", resp.status_code, len(resp.content))
        try:
            envelope = CfResponse.model_validate(resp.json())
        except (ValueError, ValidationError):
            envelope = None

        if resp.is_success and envelope is not None and envelope.success:
            return envelope

        if envelope is not None and envelope.errors:
            detail = "; ".join(str(e) for e in envelope.errors)
        else:
            detail = resp.text[:500] or resp.reason_phrase
        raise RemoteApiError(
            f"Cloudflare API error (HTTP {resp.status_code}): {detail}",
            status_code=resp.status_code,
        )

    async def _patch_setting(self, zone_id: str, setting_id: str, value: Any) -> Any:
        resp = await self._request(
            "PATCH", f"/zones/{zone_id}/settings/{setting_id}", json={"value": value}
        )
        return resp.result

    # Zones

    async def verify_token(self) -> bool:
        resp = await self._request("GET", "/user/tokens/verify")
        return resp.success

    async def find_zone_id(self, domain: str) -> str:
        resp = await self._request("GET", "/zones", params={"name": domain})
        zones = resp.result or []
        if not zones:
            raise RemoteApiError(f"Zone not found for domain: {domain}", status_code=404)
        return zones[0]["id"]

    async def get_zone_setting(self, zone_id: str, setting_id: str) -> Any:
        resp = await self._request("GET", f"/zones/{zone_id}/settings/{setting_id}")
        result = resp.result or {}
        return result.get("value")

    async def update_zone_setting(self, zone_id: str, setting_id: str, value: Any) -> Any:
        return await self._patch_setting(zone_id, setting_id, value)

    # SSL/TLS

    async def set_ssl_mode(self, zone_id: str, mode: str) -> Any:
        return await self._patch_setting(zone_id, "ssl", mode)

    async def set_always_https(self, zone_id: str, enable: bool) -> Any:
        return await self._patch_setting(zone_id, "always_use_https", _on_off(enable))

    async def set_min_tls_version(self, zone_id: str, version: str) -> Any:
        return await self._patch_setting(zone_id, "min_tls_version", version)

    async def set_opportunistic_encryption(self, zone_id: str, enable: bool) -> Any:
        return await self._patch_setting(zone_id, "opportunistic_encryption", _on_off(enable))

    async def set_automatic_https_rewrites(self, zone_id: str, enable: bool) -> Any:
        return await self._patch_setting(zone_id, "automatic_https_rewrites", _on_off(enable))

    # DNS

    async def list_dns_records(self, zone_id: str, per_page: int = 100) -> list[dict[str, Any]]:
        resp = await self._request(
            "GET", f"/zones/{zone_id}/dns_records", params={"per_page": per_page}
        )
        return resp.result or []

    async def create_dns_record(self, zone_id: str, record: DnsRecordRequest) -> dict[str, Any]:
        resp = await self._request(
            "POST", f"/zones/{zone_id}/dns_records", json=record.to_payload()
        )
        return resp.result or {}

    async def update_dns_record(
        self, zone_id: str, record_id: str, record: DnsRecordRequest
    ) -> dict[str, Any]:
        resp = await self._request(
            "PUT", f"/zones/{zone_id}/dns_records/{record_id}", json=record.to_payload()
        )
        return resp.result or {}

    async def delete_dns_record(self, zone_id: str, record_id: str) -> None:
        await self._request("DELETE", f"/zones/{zone_id}/dns_records/{record_id}")

    # Cache

    async def _purge(self, zone_id: str, request: PurgeCacheRequest) -> Any:
        resp = await self._request(
            "POST", f"/zones/{zone_id}/purge_cache", json=request.to_payload()
        )
        return resp.result

    async def purge_all_cache(self, zone_id: str) -> Any:
        return await self._purge(zone_id, PurgeCacheRequest(purge_everything=True))

    async def purge_cache_by_urls(self, zone_id: str, urls: list[str]) -> Any:
        return await self._purge(zone_id, PurgeCacheRequest(files=urls))

    async def purge_cache_by_tags(self, zone_id: str, tags: list[str]) -> Any:
        return await self._purge(zone_id, PurgeCacheRequest(tags=tags))

    async def purge_cache_by_hosts(self, zone_id: str, hosts: list[str]) -> Any:
        return await self._purge(zone_id, PurgeCacheRequest(hosts=hosts))

    # Firewall

    async def create_ip_access_rule(
        self, zone_id: str, request: IpAccessRuleRequest
    ) -> dict[str, Any]:
        resp = await self._request(
            "POST",
            f"/zones/{zone_id}/firewall/access_rules/rules",
            json=request.model_dump(exclude_none=True),
        )
        return resp.result or {}

    async def block_ip(self, zone_id: str, ip: str, note: str | None = None) -> dict[str, Any]:
        return await self.create_ip_access_rule(
            zone_id, IpAccessRuleRequest.for_ip("block", ip, note)
        )

    async def whitelist_ip(
        self, zone_id: str, ip: str, note: str | None = None
    ) -> dict[str, Any]:
        return await self.create_ip_access_rule(
            zone_id, IpAccessRuleRequest.for_ip("whitelist", ip, note)
        )

    async def set_security_level(self, zone_id: str, level: str) -> Any:
        return await self._patch_setting(zone_id, "security_level", level)

    async def set_under_attack_mode(self, zone_id: str, enable: bool) -> Any:
        # turning it off falls back to the default level
        level = "under_attack" if enable else "medium"
        return await self._patch_setting(zone_id, "security_level", level)

    async def set_browser_check(self, zone_id: str, enable: bool) -> Any:
        return await self._patch_setting(zone_id, "browser_check", _on_off(enable))
