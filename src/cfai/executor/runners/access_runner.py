"""Firewall / access-control runner."""

from __future__ import annotations

from cfai.exceptions import ActionValidationError
from cfai.executor.runners.base import BaseRunner
from cfai.executor.runners.params import (
    flag,
    normalize_token,
    on_off,
    optional_str,
    require_str,
)
from cfai.models.action import Action

_RULE_ALIASES: dict[str, str] = {
    "block_ip": "block_ip",
    "whitelist_ip": "whitelist_ip",
    "allow_ip": "whitelist_ip",
    "security_level": "security_level",
    "set_security_level": "security_level",
    "under_attack": "under_attack",
    "toggle_attack_mode": "under_attack",
    "browser_check": "browser_check",
    "toggle_browser_check": "browser_check",
}


class AccessRuleRunner(BaseRunner):
    async def run(self, action: Action, zone_id: str) -> str:
        params = action.parameters
        raw = require_str(params, "type", "firewall_rule")
        rule_type = _RULE_ALIASES.get(normalize_token(raw))
        if rule_type is None:
            raise ActionValidationError(f"Unknown firewall rule type: {raw}")

        if rule_type == "block_ip":
            ip = require_str(params, "ip", "block_ip")
            await self._client.block_ip(zone_id, ip, optional_str(params, "note", "block_ip"))
            return f"Blocked IP {ip}"

        if rule_type == "whitelist_ip":
            ip = require_str(params, "ip", "whitelist_ip")
            await self._client.whitelist_ip(
                zone_id, ip, optional_str(params, "note", "whitelist_ip")
            )
            return f"Allowed IP {ip}"

        if rule_type == "security_level":
            level = require_str(params, "level", "security_level")
            await self._client.set_security_level(zone_id, level)
            return f"Security level set to {level}"

        enable = flag(params)
        if rule_type == "under_attack":
            await self._client.set_under_attack_mode(zone_id, enable)
            return f"Under Attack mode {on_off(enable)}"

        await self._client.set_browser_check(zone_id, enable)
        return f"Browser integrity check {on_off(enable)}"
