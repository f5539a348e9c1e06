"""Background execution for event-driven UIs.

The executor runs on its own thread with its own event loop. The UI thread
talks to it only through two queues: ``events`` (worker → UI) carries
confirmation requests and the final result, ``answer()`` (UI → worker) carries
yes/no replies. The UI never reads the report while a run is in flight.
"""

from __future__ import annotations

import asyncio
import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Callable, Union

from cfai.exceptions import CfaiError, ConfirmationError
from cfai.executor.action_executor import ActionExecutor
from cfai.executor.confirmation import ConfirmationPort
from cfai.models.action import Action
from cfai.models.report import ExecutionReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfirmationRequested:
    stage: str  # "batch" | "high_risk" | "continue"
    actions: list[Action] = field(default_factory=list)
    action: Action | None = None
    after_index: int | None = None


@dataclass(frozen=True)
class RunFinished:
    report: ExecutionReport


@dataclass(frozen=True)
class RunFailed:
    error: str


WorkerEvent = Union[ConfirmationRequested, RunFinished, RunFailed]


class QueuedConfirmation(ConfirmationPort):
    """Forwards each question to the UI thread and waits for its reply."""

    def __init__(
        self,
        events: queue.Queue[WorkerEvent],
        replies: queue.Queue[bool | None],
        timeout: float | None = None,
    ) -> None:
        self._events = events
        self._replies = replies
        self._timeout = timeout

    async def _ask(self, request: ConfirmationRequested) -> bool:
        self._events.put(request)
        try:
            reply = await asyncio.to_thread(self._replies.get, True, self._timeout)
        except queue.Empty as exc:
            raise ConfirmationError(f"No answer to {request.stage} confirmation") from exc
        if reply is None:
            raise ConfirmationError(f"Confirmation channel closed during {request.stage}")
        return reply

    async def confirm_batch(self, actions: list[Action]) -> bool:
        return await self._ask(ConfirmationRequested(stage="batch", actions=list(actions)))

    async def confirm_high_risk(self, action: Action) -> bool:
        return await self._ask(ConfirmationRequested(stage="high_risk", action=action))

    async def confirm_continue(self, after_index: int, failed_action: Action) -> bool:
        return await self._ask(
            ConfirmationRequested(stage="continue", action=failed_action, after_index=after_index)
        )


class ExecutionWorker:
    def __init__(
        self,
        executor_factory: Callable[[], ActionExecutor],
        confirm_timeout: float | None = None,
    ) -> None:
        # the factory runs on the worker thread so clients bind to its loop
        self._executor_factory = executor_factory
        self.events: queue.Queue[WorkerEvent] = queue.Queue()
        self._replies: queue.Queue[bool | None] = queue.Queue()
        self._confirm_timeout = confirm_timeout
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, actions: list[Action], zone_id: str) -> None:
        if self.running:
            raise RuntimeError("An execution is already in flight")
        # answers left over from an earlier run must not approve this one
        self._replies = queue.Queue()
        self._thread = threading.Thread(
            target=self._run, args=(list(actions), zone_id), name="cfai-executor", daemon=True
        )
        self._thread.start()

    def answer(self, approved: bool) -> None:
        self._replies.put(approved)

    def cancel(self) -> None:
        """Close the reply channel; a pending question fails the run."""
        self._replies.put(None)

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def poll(self) -> list[WorkerEvent]:
        drained: list[WorkerEvent] = []
        while True:
            try:
                drained.append(self.events.get_nowait())
            except queue.Empty:
                return drained

    def _run(self, actions: list[Action], zone_id: str) -> None:
        confirmation = QueuedConfirmation(self.events, self._replies, self._confirm_timeout)
        try:
            executor = self._executor_factory()
            report = asyncio.run(executor.execute(actions, zone_id, confirmation))
        except CfaiError as exc:
            logger.warning("Background execution failed: %s", exc)
            self.events.put(RunFailed(error=str(exc)))
            return
        except Exception as exc:
            # the UI waits for a terminal event, so every failure must post one
            logger.exception("Background execution crashed")
            self.events.put(RunFailed(error=f"Unexpected error: {exc}"))
            return
        self.events.put(RunFinished(report=report))
