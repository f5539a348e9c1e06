"""Typer CLI commands."""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from cfai.cli.output import (
    print_action_plan,
    print_analysis,
    print_error,
    print_history,
    print_info,
    print_report,
)
from cfai.cli.prompts import TerminalConfirmation
from cfai.exceptions import CfaiError
from cfai.executor.confirmation import AutoApprove, ConfirmationPort
from cfai.pipeline import AssistantPipeline, ConsultMode

console = Console()
app = typer.Typer(name="cfai", help="AI-assisted Cloudflare zone management.")

_ANALYSIS_MODES = {
    "dns": ConsultMode.ANALYZE_DNS,
    "security": ConsultMode.ANALYZE_SECURITY,
    "performance": ConsultMode.ANALYZE_PERFORMANCE,
}


def _get_settings():
    from cfai.config.settings import Settings
    return Settings()


def _get_pipeline(settings=None) -> AssistantPipeline:
    from cfai.main import build_pipeline
    return build_pipeline(settings)


async def _consult_and_apply(
    mode: ConsultMode,
    text: str,
    domain: Optional[str],
    auto_apply: bool = False,
    context_scope: Optional[str] = None,
) -> None:
    settings = _get_settings()
    pipeline = _get_pipeline(settings)
    await pipeline.initialize()
    try:
        domain = domain or settings.default_domain
        zone_id = await pipeline.resolve_zone_id(domain) if domain else None

        context = ""
        if zone_id and context_scope:
            context = await pipeline.collect_context(zone_id, context_scope)

        result, plan = await pipeline.consult(mode, text, context=context)
        print_analysis(result)

        if not plan.actions:
            return
        print_action_plan(plan)

        if zone_id is None:
            print_info("No domain given; pass --domain to execute the suggested actions.")
            return

        confirmation: ConfirmationPort = AutoApprove() if auto_apply else TerminalConfirmation()
        report = await pipeline.apply(plan, zone_id, confirmation, query=text)
        print_report(report)
    finally:
        await pipeline.close()


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except CfaiError as exc:
        print_error(str(exc))
        raise typer.Exit(1)


@app.command()
def ask(
    question: List[str] = typer.Argument(..., help="Question for the assistant"),
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Zone to use as context"),
) -> None:
    """Ask the assistant a free-form question."""
    _run(
        _consult_and_apply(
            ConsultMode.ASK, " ".join(question), domain, context_scope="all" if domain else None
        )
    )


@app.command()
def analyze(
    domain: str = typer.Argument(..., help="Domain or zone id to analyze"),
    analysis_type: str = typer.Option(
        "all", "--type", "-t", help="dns | security | performance | all"
    ),
) -> None:
    """Collect zone configuration and ask the assistant to review it."""
    if analysis_type != "all" and analysis_type not in _ANALYSIS_MODES:
        print_error(f"Unknown analysis type: {analysis_type}")
        raise typer.Exit(1)
    mode = _ANALYSIS_MODES.get(analysis_type, ConsultMode.ASK)
    text = f"Review the {analysis_type} configuration of {domain} and suggest improvements."
    _run(_consult_and_apply(mode, text, domain, context_scope=analysis_type))


@app.command()
def troubleshoot(
    issue: List[str] = typer.Argument(..., help="Describe the problem"),
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Affected zone"),
) -> None:
    """Diagnose a problem and propose fixes."""
    _run(
        _consult_and_apply(
            ConsultMode.TROUBLESHOOT,
            " ".join(issue),
            domain,
            context_scope="all" if domain else None,
        )
    )


@app.command(name="auto-config")
def auto_config(
    requirement: List[str] = typer.Argument(..., help="Describe the desired configuration"),
    domain: Optional[str] = typer.Option(None, "--domain", "-d", help="Target zone"),
    auto_apply: bool = typer.Option(
        False, "--auto-apply", help="Execute suggested actions without confirmation (dangerous)"
    ),
) -> None:
    """Generate a configuration plan from a requirement and optionally apply it."""
    _run(_consult_and_apply(ConsultMode.AUTO_CONFIG, " ".join(requirement), domain, auto_apply))


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of records"),
) -> None:
    """Show recently executed actions."""
    from cfai.memory.store import AuditStore

    async def _history():
        store = AuditStore(db_path=_get_settings().db_path)
        await store.initialize()
        try:
            rows = await store.get_history(limit=limit)
        finally:
            await store.close()
        if not rows:
            print_info("No history found.")
        else:
            print_history(rows)

    _run(_history())


@app.command(name="config")
def show_config() -> None:
    """Show current configuration."""
    try:
        settings = _get_settings()
    except Exception as exc:
        print_error(f"Failed to load settings: {exc}")
        raise typer.Exit(1)

    table_data = {
        "Cloudflare API": settings.cloudflare_api_url,
        "Cloudflare credentials": "configured" if settings.has_cloudflare_credentials else "missing",
        "AI API": settings.ai_api_url,
        "AI model": settings.ai_model,
        "AI key": "configured" if settings.ai_api_key else "missing",
        "Default domain": settings.default_domain or "-",
        "DB Path": str(settings.db_path),
        "Log Level": settings.log_level,
    }

    table = Table(title="Configuration", show_header=False)
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    for k, v in table_data.items():
        table.add_row(k, v)
    console.print(table)
