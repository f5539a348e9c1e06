"""TLS/SSL setting runner."""

from __future__ import annotations

from cfai.exceptions import ActionValidationError
from cfai.executor.runners.base import BaseRunner
from cfai.executor.runners.params import flag, normalize_token, on_off, require_str
from cfai.models.action import Action

_SETTING_ALIASES: dict[str, str] = {
    "ssl_mode": "ssl_mode",
    "tls_mode": "ssl_mode",
    "always_https": "always_https",
    "always_use_https": "always_https",
    "force_https": "always_https",
    "min_tls_version": "min_tls_version",
    "opportunistic_encryption": "opportunistic_encryption",
    "automatic_https_rewrites": "automatic_https_rewrites",
    "https_rewrites": "automatic_https_rewrites",
}


class TlsRunner(BaseRunner):
    async def run(self, action: Action, zone_id: str) -> str:
        params = action.parameters
        raw = require_str(params, "setting", "ssl_set")
        setting = _SETTING_ALIASES.get(normalize_token(raw))
        if setting is None:
            raise ActionValidationError(f"Unknown SSL/TLS setting: {raw}")

        if setting == "ssl_mode":
            mode = require_str(params, "value", "ssl_set ssl_mode")
            await self._client.set_ssl_mode(zone_id, mode)
            return f"SSL mode set to {mode}"

        if setting == "min_tls_version":
            version = require_str(params, "value", "ssl_set min_tls_version")
            await self._client.set_min_tls_version(zone_id, version)
            return f"Minimum TLS version set to {version}"

        enable = flag(params)
        if setting == "always_https":
            await self._client.set_always_https(zone_id, enable)
            return f"Always Use HTTPS {on_off(enable)}"
        if setting == "opportunistic_encryption":
            await self._client.set_opportunistic_encryption(zone_id, enable)
            return f"Opportunistic Encryption {on_off(enable)}"

        await self._client.set_automatic_https_rewrites(zone_id, enable)
        return f"Automatic HTTPS Rewrites {on_off(enable)}"
