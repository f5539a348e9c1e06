"""Pipeline orchestrator — wires analyze → extract → confirm/execute → log."""

from __future__ import annotations

import enum
import logging
import re

from cfai.api.client import CloudflareClient
from cfai.exceptions import ConfigError, ConfirmationError, RemoteApiError
from cfai.executor.action_executor import ActionExecutor
from cfai.executor.confirmation import ConfirmationPort
from cfai.memory.store import AuditStore
from cfai.models.action import ActionPlan
from cfai.models.analysis import AnalysisResult
from cfai.models.report import ExecutionReport
from cfai.parser.action_extractor import extract
from cfai.parser.analyzer import AiAnalyzer

logger = logging.getLogger(__name__)

_ZONE_ID_RE = re.compile(r"^[0-9a-f]{32}$")

# Zone settings folded into the security and performance context
_SECURITY_SETTINGS = ("ssl", "always_use_https", "min_tls_version", "security_level", "browser_check")
_PERFORMANCE_SETTINGS = ("cache_level", "browser_cache_ttl", "brotli", "development_mode")


class ConsultMode(str, enum.Enum):
    ASK = "ask"
    ANALYZE_DNS = "analyze_dns"
    ANALYZE_SECURITY = "analyze_security"
    ANALYZE_PERFORMANCE = "analyze_performance"
    TROUBLESHOOT = "troubleshoot"
    AUTO_CONFIG = "auto_config"


class AssistantPipeline:
    def __init__(
        self,
        analyzer: AiAnalyzer,
        client: CloudflareClient,
        executor: ActionExecutor,
        store: AuditStore,
    ) -> None:
        self._analyzer = analyzer
        self._client = client
        self._executor = executor
        self._store = store

    async def initialize(self) -> None:
        await self._store.initialize()

    async def close(self) -> None:
        await self._client.close()
        await self._store.close()

    async def consult(
        self, mode: ConsultMode, text: str, context: str = ""
    ) -> tuple[AnalysisResult, ActionPlan]:
        if mode == ConsultMode.ASK:
            if context:
                result = await self._analyzer.ask_with_context(text, context)
            else:
                result = await self._analyzer.ask(text)
        elif mode == ConsultMode.ANALYZE_DNS:
            result = await self._analyzer.analyze_dns(context or text)
        elif mode == ConsultMode.ANALYZE_SECURITY:
            result = await self._analyzer.analyze_security(context or text)
        elif mode == ConsultMode.ANALYZE_PERFORMANCE:
            result = await self._analyzer.analyze_performance(context or text)
        elif mode == ConsultMode.TROUBLESHOOT:
            issue = f"{text}\n\n{context}" if context else text
            result = await self._analyzer.troubleshoot(issue)
        else:
            requirement = f"{text}\n\n{context}" if context else text
            result = await self._analyzer.auto_config(requirement)

        plan = extract(result.content)
        logger.info("Assistant proposed %d action(s)", len(plan.actions))
        return result, plan

    async def apply(
        self,
        plan: ActionPlan,
        zone_id: str,
        confirmation: ConfirmationPort,
        query: str = "",
    ) -> ExecutionReport:
        if not plan.actions:
            return ExecutionReport()

        try:
            report = await self._executor.execute(plan.actions, zone_id, confirmation)
        except ConfirmationError as exc:
            if exc.report is not None and exc.report.outcomes:
                await self._store.log_run(zone_id, query, plan, exc.report)
            raise
        await self._store.log_run(zone_id, query, plan, report)
        return report

    async def resolve_zone_id(self, domain: str | None) -> str:
        if not domain or not domain.strip():
            raise ConfigError("No domain given. Pass --domain or set CFAI_DEFAULT_DOMAIN.")
        domain = domain.strip()
        if _ZONE_ID_RE.match(domain):
            return domain
        return await self._client.find_zone_id(domain)

    async def collect_context(self, zone_id: str, scope: str = "all") -> str:
        sections: list[str] = []

        if scope in ("dns", "all"):
            lines = ["## DNS records"]
            try:
                for r in await self._client.list_dns_records(zone_id):
                    lines.append(
                        f"{r.get('type')} {r.get('name')} -> {r.get('content')} "
                        f"(id: {r.get('id')}, proxied: {r.get('proxied', '-')}, ttl: {r.get('ttl', '-')})"
                    )
            except RemoteApiError as exc:
                logger.debug("Could not list DNS records: %s", exc)
            sections.append("\n".join(lines))

        if scope in ("security", "all"):
            sections.append(await self._settings_section("## Security settings", zone_id, _SECURITY_SETTINGS))

        if scope in ("performance", "all"):
            sections.append(
                await self._settings_section("## Performance settings", zone_id, _PERFORMANCE_SETTINGS)
            )

        return "\n\n".join(sections)

    async def _settings_section(self, title: str, zone_id: str, setting_ids: tuple[str, ...]) -> str:
        lines = [title]
        for setting_id in setting_ids:
            try:
                value = await self._client.get_zone_setting(zone_id, setting_id)
            except RemoteApiError as exc:
                logger.debug("Could not read setting %s: %s", setting_id, exc)
                continue
            lines.append(f"{setting_id}: {value}")
        return "\n".join(lines)
