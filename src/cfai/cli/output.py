"""Rich display helpers for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cfai.models.action import ActionPlan
from cfai.models.analysis import AnalysisResult
from cfai.models.report import ExecutionReport, OutcomeStatus
from cfai.policy.risk_levels import risk_icon

console = Console()

_STATUS_STYLE = {
    OutcomeStatus.SUCCEEDED: "[green]OK[/]",
    OutcomeStatus.FAILED: "[red]FAIL[/]",
    OutcomeStatus.SKIPPED: "[dim]SKIP[/]",
}


def print_analysis(result: AnalysisResult) -> None:
    console.print(Panel(Markdown(result.content or "(empty response)"), title="Assistant"))
    if result.tokens_used is not None:
        console.print(f"[dim]Tokens used: {result.tokens_used}[/]")


def print_action_plan(plan: ActionPlan) -> None:
    table = Table(title="Suggested Actions", expand=True)
    table.add_column("#", style="bold", width=3)
    table.add_column("Type", style="cyan")
    table.add_column("Description")
    table.add_column("Risk", justify="center")

    for i, action in enumerate(plan.actions, 1):
        table.add_row(
            str(i),
            escape(action.type_token or action.kind.value),
            escape(action.description),
            f"{risk_icon(action.risk)} {action.risk.value}",
        )

    console.print(table)
    if plan.explanation:
        console.print(f"[dim]{escape(plan.explanation)}[/]")


def print_report(report: ExecutionReport) -> None:
    table = Table(title="Execution Results", expand=True)
    table.add_column("#", style="bold", width=3)
    table.add_column("Status", justify="center")
    table.add_column("Action")
    table.add_column("Detail")

    for o in report.outcomes:
        table.add_row(
            str(o.index + 1), _STATUS_STYLE[o.status], escape(o.description), escape(o.detail)
        )

    console.print(table)
    console.print(
        f"Done: [green]{report.succeeded} succeeded[/], [red]{report.failed} failed[/], "
        f"[dim]{report.skipped} skipped[/], {report.total} total"
    )


def print_error(message: str) -> None:
    console.print(Panel(f"[red]{escape(message)}[/]", title="Error", border_style="red"))


def print_info(message: str) -> None:
    console.print(f"[dim]{escape(message)}[/]")


def print_history(rows: list[dict]) -> None:
    table = Table(title="Execution History", expand=True)
    table.add_column("Time")
    table.add_column("Zone")
    table.add_column("Query")
    table.add_column("Action")
    table.add_column("Status", justify="center")

    for row in rows:
        status = row.get("status") or ""
        styled = _STATUS_STYLE.get(OutcomeStatus(status), status) if status else ""
        table.add_row(
            str(row.get("created_at", "")),
            row.get("zone_id", ""),
            escape(row.get("query", "") or ""),
            escape(row.get("description", "") or ""),
            styled,
        )

    console.print(table)
