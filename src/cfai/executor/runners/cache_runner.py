"""Cache purge runner."""

from __future__ import annotations

from cfai.exceptions import ActionValidationError
from cfai.executor.runners.base import BaseRunner
from cfai.executor.runners.params import normalize_token, require_str, require_str_list
from cfai.models.action import Action

_PURGE_ALIASES: dict[str, str] = {
    "purge_all": "purge_all",
    "purge_everything": "purge_all",
    "purge_urls": "purge_urls",
    "purge_by_urls": "purge_urls",
    "purge_tags": "purge_tags",
    "purge_by_tags": "purge_tags",
    "purge_hosts": "purge_hosts",
    "purge_by_hosts": "purge_hosts",
}


class CacheRunner(BaseRunner):
    async def run(self, action: Action, zone_id: str) -> str:
        params = action.parameters
        raw = require_str(params, "type", "cache_purge")
        purge_type = _PURGE_ALIASES.get(normalize_token(raw))
        if purge_type is None:
            raise ActionValidationError(f"Unknown cache purge type: {raw}")

        if purge_type == "purge_all":
            await self._client.purge_all_cache(zone_id)
            return "Purged all cached content"

        if purge_type == "purge_urls":
            urls = require_str_list(params, "urls", "cache_purge purge_urls")
            await self._client.purge_cache_by_urls(zone_id, urls)
            return f"Purged cache for {len(urls)} URL(s)"

        if purge_type == "purge_tags":
            tags = require_str_list(params, "tags", "cache_purge purge_tags")
            await self._client.purge_cache_by_tags(zone_id, tags)
            return f"Purged cache for {len(tags)} tag(s)"

        hosts = require_str_list(params, "hosts", "cache_purge purge_hosts")
        await self._client.purge_cache_by_hosts(zone_id, hosts)
        return f"Purged cache for {len(hosts)} host(s)"
