"""OpenAI-compatible conversational analysis service."""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from cfai.config.settings import Settings
from cfai.exceptions import AnalysisError, ConfigError
from cfai.models.analysis import AnalysisResult
from cfai.parser.prompt_templates import (
    AUTO_CONFIG_PROMPT,
    CONTEXT_TEMPLATE,
    DNS_ANALYSIS_PROMPT,
    PERFORMANCE_ANALYSIS_PROMPT,
    SECURITY_ANALYSIS_PROMPT,
    SYSTEM_PROMPT,
    TROUBLESHOOT_PROMPT,
)

logger = logging.getLogger(__name__)


class AiAnalyzer:
    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None) -> None:
        if client is None and not settings.ai_api_key:
            raise ConfigError(
                "AI API key is not configured. Set CFAI_AI_API_KEY."
            )
        self._settings = settings
        self._client = client or AsyncOpenAI(
            api_key=settings.ai_api_key,
            base_url=settings.ai_api_url,
            timeout=settings.ai_timeout,
        )

    async def chat(self, system_prompt: str, user_message: str) -> AnalysisResult:
        if not user_message.strip():
            raise AnalysisError("Empty message")

        logger.debug("Sending %d chars to %s", len(user_message), self._settings.ai_model)
        try:
            response = await self._client.chat.completions.create(
                model=self._settings.ai_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                max_tokens=self._settings.ai_max_tokens,
                temperature=self._settings.ai_temperature,
            )
        except OpenAIError as exc:
            raise AnalysisError(f"AI API error: {exc}") from exc

        content = ""
        if response.choices:
            content = response.choices[0].message.content or ""

        tokens_used = None
        if response.usage is not None:
            tokens_used = response.usage.total_tokens

        return AnalysisResult(content=content, tokens_used=tokens_used)

    async def ask(self, question: str) -> AnalysisResult:
        return await self.chat(SYSTEM_PROMPT, question)

    async def ask_with_context(self, question: str, context: str) -> AnalysisResult:
        message = CONTEXT_TEMPLATE.format(context=context, question=question)
        return await self.chat(SYSTEM_PROMPT, message)

    async def analyze_dns(self, dns_records: str) -> AnalysisResult:
        return await self.chat(SYSTEM_PROMPT, DNS_ANALYSIS_PROMPT + dns_records)

    async def analyze_security(self, security_config: str) -> AnalysisResult:
        return await self.chat(SYSTEM_PROMPT, SECURITY_ANALYSIS_PROMPT + security_config)

    async def analyze_performance(self, perf_config: str) -> AnalysisResult:
        return await self.chat(SYSTEM_PROMPT, PERFORMANCE_ANALYSIS_PROMPT + perf_config)

    async def troubleshoot(self, issue: str) -> AnalysisResult:
        return await self.chat(SYSTEM_PROMPT, TROUBLESHOOT_PROMPT + issue)

    async def auto_config(self, requirement: str) -> AnalysisResult:
        return await self.chat(SYSTEM_PROMPT, AUTO_CONFIG_PROMPT + requirement)
