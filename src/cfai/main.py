"""Entry point and dependency wiring."""

from __future__ import annotations

from cfai.api.client import CloudflareClient
from cfai.cli.app import app
from cfai.config.logging_config import configure_logging
from cfai.config.settings import Settings
from cfai.executor.action_executor import ActionExecutor
from cfai.memory.store import AuditStore
from cfai.parser.analyzer import AiAnalyzer
from cfai.pipeline import AssistantPipeline


def build_pipeline(settings: Settings | None = None) -> AssistantPipeline:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    analyzer = AiAnalyzer(settings)
    client = CloudflareClient(settings)
    return AssistantPipeline(
        analyzer=analyzer,
        client=client,
        executor=ActionExecutor(client),
        store=AuditStore(db_path=settings.db_path),
    )


if __name__ == "__main__":
    app()
