"""User confirmation dialogs."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from cfai.exceptions import ConfirmationError
from cfai.executor.confirmation import ConfirmationPort
from cfai.models.action import Action
from cfai.policy.risk_levels import risk_icon

console = Console()


def _ask(question: str, default: bool) -> bool:
    try:
        return Confirm.ask(question, default=default, console=console)
    except (EOFError, KeyboardInterrupt) as exc:
        raise ConfirmationError(f"Confirmation input unavailable: {question}") from exc


class TerminalConfirmation(ConfirmationPort):
    async def confirm_batch(self, actions: list[Action]) -> bool:
        console.print("\n[bold yellow]The following actions are ready to run:[/]\n")
        for i, action in enumerate(actions, 1):
            console.print(
                f"  {i}. {risk_icon(action.risk)} {escape(action.description)} "
                f"[dim](risk: {action.risk.value})[/]"
            )
        console.print()
        return _ask("Execute these actions?", default=False)

    async def confirm_high_risk(self, action: Action) -> bool:
        return _ask(
            f"{risk_icon(action.risk)} High-risk action: {escape(action.description)}. Run it?",
            default=False,
        )

    async def confirm_continue(self, after_index: int, failed_action: Action) -> bool:
        return _ask(
            f"Action {after_index + 1} failed. Continue with the remaining actions?",
            default=True,
        )
