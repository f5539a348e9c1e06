"""Risk-gated executor — runs suggested actions under human confirmation.

The run is a small state machine driven by an injected ``ConfirmationPort``:

* one batch question up front; a "no" skips every action with no remote call;
* a per-action question for high-risk actions; a "no" skips just that action;
* after a failed dispatch, a "continue?" question; a "no" skips the rest.

Declines never abort the run. Failures pause it. A ``ConfirmationError`` from
the port propagates to the caller with the partial report attached.
"""

from __future__ import annotations

import logging

from cfai.exceptions import ActionValidationError, ConfirmationError, RemoteApiError
from cfai.executor.confirmation import ConfirmationPort
from cfai.executor.runners.access_runner import AccessRuleRunner
from cfai.executor.runners.base import BaseRunner, RemoteResourceClient
from cfai.executor.runners.cache_runner import CacheRunner
from cfai.executor.runners.dns_runner import DnsRunner
from cfai.executor.runners.setting_runner import SettingRunner
from cfai.executor.runners.tls_runner import TlsRunner
from cfai.models.action import Action, ActionKind
from cfai.models.report import ExecutionReport, Outcome, OutcomeStatus
from cfai.policy.risk_levels import requires_individual_confirmation

logger = logging.getLogger(__name__)

_RUNNER_MAP: dict[ActionKind, type[BaseRunner]] = {
    ActionKind.TLS_SETTING_CHANGE: TlsRunner,
    ActionKind.RESOURCE_SETTING_CHANGE: SettingRunner,
    ActionKind.DNS_RECORD_CREATE: DnsRunner,
    ActionKind.DNS_RECORD_UPDATE: DnsRunner,
    ActionKind.DNS_RECORD_DELETE: DnsRunner,
    ActionKind.CACHE_PURGE: CacheRunner,
    ActionKind.ACCESS_RULE_CHANGE: AccessRuleRunner,
}

DECLINED_BATCH = "Declined at batch confirmation"
DECLINED_HIGH_RISK = "Declined high-risk action"
ABORTED_AFTER_FAILURE = "Aborted after an earlier failure"


class ActionExecutor:
    def __init__(self, client: RemoteResourceClient) -> None:
        self._client = client
        self._runners: dict[type[BaseRunner], BaseRunner] = {}

    def _get_runner(self, action: Action) -> BaseRunner:
        runner_cls = _RUNNER_MAP.get(action.kind)
        if runner_cls is None:
            raise ActionValidationError(
                f"Unknown action type: {action.type_token or action.kind.value}"
            )
        if runner_cls not in self._runners:
            self._runners[runner_cls] = runner_cls(self._client)
        return self._runners[runner_cls]

    async def dispatch(self, index: int, action: Action, zone_id: str) -> Outcome:
        logger.info("Dispatching action %d (%s): %s", index, action.kind.value, action.description)
        try:
            runner = self._get_runner(action)
            message = await runner.run(action, zone_id)
        except (ActionValidationError, RemoteApiError) as exc:
            logger.warning("Action %d failed: %s", index, exc)
            return Outcome.failure(index, action, str(exc))
        return Outcome.success(index, action, message)

    async def execute(
        self,
        actions: list[Action],
        zone_id: str,
        confirmation: ConfirmationPort,
    ) -> ExecutionReport:
        report = ExecutionReport()
        if not actions:
            return report

        try:
            await self._run(actions, zone_id, confirmation, report)
        except ConfirmationError as exc:
            logger.warning("Confirmation failed after %d outcome(s): %s", report.total, exc)
            exc.report = report
            raise

        logger.info(
            "Run finished: %d succeeded, %d failed, %d skipped",
            report.succeeded,
            report.failed,
            report.skipped,
        )
        return report

    async def _run(
        self,
        actions: list[Action],
        zone_id: str,
        confirmation: ConfirmationPort,
        report: ExecutionReport,
    ) -> None:
        logger.debug("Asking batch confirmation for %d action(s)", len(actions))
        if not await confirmation.confirm_batch(actions):
            logger.info("Batch declined; skipping %d action(s)", len(actions))
            for index, action in enumerate(actions):
                report.record(Outcome.skipped(index, action, DECLINED_BATCH))
            return

        total = len(actions)
        for index, action in enumerate(actions):
            if requires_individual_confirmation(action.risk):
                logger.debug("Asking high-risk confirmation for action %d", index)
                if not await confirmation.confirm_high_risk(action):
                    report.record(Outcome.skipped(index, action, DECLINED_HIGH_RISK))
                    continue

            outcome = await self.dispatch(index, action, zone_id)
            report.record(outcome)

            if outcome.status == OutcomeStatus.FAILED and index + 1 < total:
                logger.debug("Asking whether to continue after action %d", index)
                if not await confirmation.confirm_continue(index, action):
                    logger.info("Run aborted after action %d", index)
                    for rest in range(index + 1, total):
                        report.record(
                            Outcome.skipped(rest, actions[rest], ABORTED_AFTER_FAILURE)
                        )
                    break
