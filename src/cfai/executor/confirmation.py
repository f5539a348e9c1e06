"""Confirmation port — how the executor asks a human for approval."""

from __future__ import annotations

import abc

from cfai.models.action import Action


class ConfirmationPort(abc.ABC):
    """Three yes/no questions asked by the executor's state machine.

    Implementations must raise ``ConfirmationError`` when they cannot get an
    answer at all; they must not turn a broken channel into a "no".
    """

    @abc.abstractmethod
    async def confirm_batch(self, actions: list[Action]) -> bool:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def confirm_high_risk(self, action: Action) -> bool:
        ...  # pragma: no cover

    @abc.abstractmethod
    async def confirm_continue(self, after_index: int, failed_action: Action) -> bool:
        ...  # pragma: no cover


class AutoApprove(ConfirmationPort):
    """Answers yes to everything; used for non-interactive auto-apply."""

    async def confirm_batch(self, actions: list[Action]) -> bool:
        return True

    async def confirm_high_risk(self, action: Action) -> bool:
        return True

    async def confirm_continue(self, after_index: int, failed_action: Action) -> bool:
        return True
