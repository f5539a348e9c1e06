"""Generic zone setting runner."""

from __future__ import annotations

import json

from cfai.executor.runners.base import BaseRunner
from cfai.executor.runners.params import require_path_id, require_value
from cfai.models.action import Action


class SettingRunner(BaseRunner):
    async def run(self, action: Action, zone_id: str) -> str:
        setting_id = require_path_id(action.parameters, "setting_id", "setting_update")
        value = require_value(action.parameters, "value", "setting_update")
        await self._client.update_zone_setting(zone_id, setting_id, value)
        return f"Setting {setting_id} updated to {json.dumps(value)}"
