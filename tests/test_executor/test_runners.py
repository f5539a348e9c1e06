"""Tests for parameter helpers and the per-kind runners."""

from __future__ import annotations

import pytest

from cfai.exceptions import ActionValidationError, RemoteApiError
from cfai.executor.runners.access_runner import AccessRuleRunner
from cfai.executor.runners.cache_runner import CacheRunner
from cfai.executor.runners.dns_runner import DnsRunner, build_record
from cfai.executor.runners.params import (
    flag,
    normalize_token,
    optional_int,
    parse_bool,
    require_path_id,
    require_str,
    require_str_list,
)
from cfai.executor.runners.setting_runner import SettingRunner
from cfai.executor.runners.tls_runner import TlsRunner
from cfai.models.action import ActionKind

ZONE = "zone-1"


class TestParams:
    def test_normalize_token(self):
        assert normalize_token(" Block-IP ") == "block_ip"

    def test_require_str_missing(self):
        with pytest.raises(ActionValidationError, match="missing required parameter 'ip'"):
            require_str({}, "ip", "block_ip")

    def test_require_str_wrong_type(self):
        with pytest.raises(ActionValidationError, match="must be a string"):
            require_str({"ip": 42}, "ip", "block_ip")

    def test_require_str_blank(self):
        with pytest.raises(ActionValidationError, match="must not be empty"):
            require_str({"ip": "  "}, "ip", "block_ip")

    @pytest.mark.parametrize("value,expected", [(300, 300), ("120", 120), (None, None)])
    def test_optional_int(self, value, expected):
        assert optional_int({"ttl": value}, "ttl", "dns_create") == expected

    @pytest.mark.parametrize("value", [True, "auto", 1.5])
    def test_optional_int_rejects(self, value):
        with pytest.raises(ActionValidationError):
            optional_int({"ttl": value}, "ttl", "dns_create")

    @pytest.mark.parametrize(
        "value,expected",
        [(True, True), (False, False), (1, True), (0, False), ("on", True), ("OFF", False), ("yes", True), ("0", False)],
    )
    def test_parse_bool(self, value, expected):
        assert parse_bool(value, "enable") is expected

    @pytest.mark.parametrize("value", ["maybe", 2, [], 0.5])
    def test_parse_bool_rejects(self, value):
        with pytest.raises(ActionValidationError, match="Cannot interpret"):
            parse_bool(value, "enable")

    def test_flag_defaults_on(self):
        assert flag({}) is True
        assert flag({"enable": False}) is False

    def test_require_path_id(self):
        assert require_path_id({"record_id": " 372e679 "}, "record_id", "dns_delete") == "372e679"

    @pytest.mark.parametrize("value", ["abc\x00def", "../zones", "a b", "id?x=1", "tab\there"])
    def test_require_path_id_rejects(self, value):
        with pytest.raises(ActionValidationError, match="not a valid identifier"):
            require_path_id({"record_id": value}, "record_id", "dns_delete")

    def test_require_str_list(self):
        assert require_str_list({"urls": ["a", "b"]}, "urls", "ctx") == ["a", "b"]
        with pytest.raises(ActionValidationError, match="must not be empty"):
            require_str_list({"urls": []}, "urls", "ctx")
        with pytest.raises(ActionValidationError, match="list of strings"):
            require_str_list({"urls": "a"}, "urls", "ctx")


class TestTlsRunner:
    @pytest.mark.asyncio
    async def test_ssl_mode(self, remote_client, make_action):
        action = make_action(kind=ActionKind.TLS_SETTING_CHANGE, params={"setting": "ssl_mode", "value": "strict"})
        message = await TlsRunner(remote_client).run(action, ZONE)
        assert message == "SSL mode set to strict"
        remote_client.set_ssl_mode.assert_awaited_once_with(ZONE, "strict")

    @pytest.mark.asyncio
    async def test_force_https_alias_defaults_enabled(self, remote_client, make_action):
        action = make_action(kind=ActionKind.TLS_SETTING_CHANGE, params={"setting": "force_https"})
        message = await TlsRunner(remote_client).run(action, ZONE)
        assert message == "Always Use HTTPS enabled"
        remote_client.set_always_https.assert_awaited_once_with(ZONE, True)

    @pytest.mark.asyncio
    async def test_rewrites_disabled(self, remote_client, make_action):
        action = make_action(
            kind=ActionKind.TLS_SETTING_CHANGE,
            params={"setting": "https_rewrites", "enable": "off"},
        )
        await TlsRunner(remote_client).run(action, ZONE)
        remote_client.set_automatic_https_rewrites.assert_awaited_once_with(ZONE, False)

    @pytest.mark.asyncio
    async def test_unknown_setting(self, remote_client, make_action):
        action = make_action(kind=ActionKind.TLS_SETTING_CHANGE, params={"setting": "hsts"})
        with pytest.raises(ActionValidationError, match="Unknown SSL/TLS setting"):
            await TlsRunner(remote_client).run(action, ZONE)


class TestSettingRunner:
    @pytest.mark.asyncio
    async def test_update(self, remote_client, make_action):
        action = make_action(
            kind=ActionKind.RESOURCE_SETTING_CHANGE,
            params={"setting_id": "brotli", "value": "on"},
        )
        message = await SettingRunner(remote_client).run(action, ZONE)
        assert message == 'Setting brotli updated to "on"'
        remote_client.update_zone_setting.assert_awaited_once_with(ZONE, "brotli", "on")

    @pytest.mark.asyncio
    async def test_missing_value(self, remote_client, make_action):
        action = make_action(kind=ActionKind.RESOURCE_SETTING_CHANGE, params={"setting_id": "brotli"})
        with pytest.raises(ActionValidationError, match="'value'"):
            await SettingRunner(remote_client).run(action, ZONE)
        remote_client.update_zone_setting.assert_not_awaited()


class TestDnsRunner:
    def test_build_record_uppercases_type(self):
        record = build_record(
            {"type": "cname", "name": "blog", "content": "example.com", "ttl": "300", "proxied": "true"},
            "dns_create",
        )
        assert record.record_type == "CNAME"
        assert record.ttl == 300
        assert record.proxied is True
        assert record.to_payload() == {
            "type": "CNAME",
            "name": "blog",
            "content": "example.com",
            "ttl": 300,
            "proxied": True,
        }

    @pytest.mark.asyncio
    async def test_create(self, remote_client, make_action):
        message = await DnsRunner(remote_client).run(make_action(), ZONE)
        assert message == "DNS record created: A www -> 1.2.3.4 (ID: rec-123)"

    @pytest.mark.asyncio
    async def test_update_requires_record_id(self, remote_client, make_action):
        action = make_action(kind=ActionKind.DNS_RECORD_UPDATE)
        with pytest.raises(ActionValidationError, match="record_id"):
            await DnsRunner(remote_client).run(action, ZONE)

    @pytest.mark.asyncio
    async def test_update(self, remote_client, make_action):
        params = {"record_id": "rec-1", "type": "A", "name": "www", "content": "5.6.7.8"}
        action = make_action(kind=ActionKind.DNS_RECORD_UPDATE, params=params)
        message = await DnsRunner(remote_client).run(action, ZONE)
        assert message == "DNS record updated: A www -> 5.6.7.8"
        assert remote_client.update_dns_record.await_args.args[:2] == (ZONE, "rec-1")

    @pytest.mark.asyncio
    async def test_delete(self, remote_client, make_action):
        action = make_action(kind=ActionKind.DNS_RECORD_DELETE, params={"record_id": "rec-1"})
        assert await DnsRunner(remote_client).run(action, ZONE) == "DNS record deleted: rec-1"

    @pytest.mark.asyncio
    async def test_remote_error_propagates(self, remote_client, make_action):
        remote_client.create_dns_record.side_effect = RemoteApiError("denied", status_code=403)
        with pytest.raises(RemoteApiError):
            await DnsRunner(remote_client).run(make_action(), ZONE)


class TestCacheRunner:
    @pytest.mark.asyncio
    async def test_purge_everything_alias(self, remote_client, make_action):
        action = make_action(kind=ActionKind.CACHE_PURGE, params={"type": "purge_everything"})
        assert await CacheRunner(remote_client).run(action, ZONE) == "Purged all cached content"
        remote_client.purge_all_cache.assert_awaited_once_with(ZONE)

    @pytest.mark.asyncio
    async def test_purge_urls(self, remote_client, make_action):
        urls = ["https://example.com/a", "https://example.com/b"]
        action = make_action(kind=ActionKind.CACHE_PURGE, params={"type": "purge_by_urls", "urls": urls})
        assert await CacheRunner(remote_client).run(action, ZONE) == "Purged cache for 2 URL(s)"
        remote_client.purge_cache_by_urls.assert_awaited_once_with(ZONE, urls)

    @pytest.mark.asyncio
    async def test_type_required(self, remote_client, make_action):
        action = make_action(kind=ActionKind.CACHE_PURGE, params={})
        with pytest.raises(ActionValidationError, match="'type'"):
            await CacheRunner(remote_client).run(action, ZONE)
        remote_client.purge_all_cache.assert_not_awaited()


class TestAccessRuleRunner:
    @pytest.mark.asyncio
    async def test_block_ip(self, remote_client, make_action):
        action = make_action(kind=ActionKind.ACCESS_RULE_CHANGE, params={"type": "block_ip", "ip": "203.0.113.9"})
        assert await AccessRuleRunner(remote_client).run(action, ZONE) == "Blocked IP 203.0.113.9"
        remote_client.block_ip.assert_awaited_once_with(ZONE, "203.0.113.9", None)

    @pytest.mark.asyncio
    async def test_allow_ip_alias(self, remote_client, make_action):
        action = make_action(
            kind=ActionKind.ACCESS_RULE_CHANGE,
            params={"type": "allow_ip", "ip": "198.51.100.1", "note": "office"},
        )
        assert await AccessRuleRunner(remote_client).run(action, ZONE) == "Allowed IP 198.51.100.1"
        remote_client.whitelist_ip.assert_awaited_once_with(ZONE, "198.51.100.1", "office")

    @pytest.mark.asyncio
    async def test_security_level(self, remote_client, make_action):
        action = make_action(
            kind=ActionKind.ACCESS_RULE_CHANGE,
            params={"type": "set_security_level", "level": "high"},
        )
        assert await AccessRuleRunner(remote_client).run(action, ZONE) == "Security level set to high"

    @pytest.mark.asyncio
    async def test_under_attack_disable(self, remote_client, make_action):
        action = make_action(
            kind=ActionKind.ACCESS_RULE_CHANGE,
            params={"type": "toggle_attack_mode", "enable": False},
        )
        assert await AccessRuleRunner(remote_client).run(action, ZONE) == "Under Attack mode disabled"
        remote_client.set_under_attack_mode.assert_awaited_once_with(ZONE, False)

    @pytest.mark.asyncio
    async def test_browser_check(self, remote_client, make_action):
        action = make_action(kind=ActionKind.ACCESS_RULE_CHANGE, params={"type": "browser_check"})
        assert await AccessRuleRunner(remote_client).run(action, ZONE) == "Browser integrity check enabled"

    @pytest.mark.asyncio
    async def test_unknown_rule(self, remote_client, make_action):
        action = make_action(kind=ActionKind.ACCESS_RULE_CHANGE, params={"type": "geo_block"})
        with pytest.raises(ActionValidationError, match="Unknown firewall rule type"):
            await AccessRuleRunner(remote_client).run(action, ZONE)


class TestPathIdentifiers:
    @pytest.mark.asyncio
    async def test_setting_id_with_slash_rejected(self, remote_client, make_action):
        action = make_action(
            kind=ActionKind.RESOURCE_SETTING_CHANGE,
            params={"setting_id": "../dns_records", "value": "on"},
        )
        with pytest.raises(ActionValidationError):
            await SettingRunner(remote_client).run(action, ZONE)
        remote_client.update_zone_setting.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_record_id_with_control_character_rejected(self, remote_client, make_action):
        params = {"record_id": "rec\n1", "type": "A", "name": "www", "content": "1.2.3.4"}
        action = make_action(kind=ActionKind.DNS_RECORD_UPDATE, params=params)
        with pytest.raises(ActionValidationError):
            await DnsRunner(remote_client).run(action, ZONE)
        remote_client.update_dns_record.assert_not_awaited()
