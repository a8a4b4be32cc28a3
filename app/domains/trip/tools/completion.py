"""Chat completion provider used by the AI plan generator.

The provider is a thin seam over LangChain's ``ChatOpenAI`` so the
generator can be exercised with a fake in tests.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

from app.core.config import settings
from app.domains.trip.telemetry import UsageRecord
from app.domains.trip.tools.base import ToolError

logger = logging.getLogger(__name__)

CURATOR_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", "{system_instruction}"),
        ("human", "{user_instruction}"),
    ]
)


class CompletionUnavailableError(ToolError):
    """Raised when no completion credential is configured."""

    def __init__(self, message: str = "OPENAI_API_KEY is not configured"):
        super().__init__(message, tool_name="completion")


@dataclass(frozen=True)
class CompletionResult:
    text: str
    usage: UsageRecord | None = None


class CompletionProvider(Protocol):
    """Anything that turns two instructions into completion text."""

    async def complete(
        self,
        system_instruction: str,
        user_instruction: str,
        max_output_tokens: int,
        temperature: float,
    ) -> CompletionResult: ...


class OpenAICompletionProvider:
    """Completion provider backed by OpenAI chat models."""

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.api_key = settings.OPENAI_API_KEY if api_key is None else api_key
        self.model = model or settings.OPENAI_MODEL

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def get_llm(self, max_output_tokens: int, temperature: float) -> ChatOpenAI:
        """Get configured ChatOpenAI instance."""
        return ChatOpenAI(
            model=self.model,
            api_key=self.api_key,
            max_tokens=max_output_tokens,
            temperature=temperature,
            # One attempt only; the caller falls back on any failure
            max_retries=0,
        )

    async def complete(
        self,
        system_instruction: str,
        user_instruction: str,
        max_output_tokens: int,
        temperature: float,
    ) -> CompletionResult:
        if not self.is_configured:
            raise CompletionUnavailableError()

        llm = self.get_llm(max_output_tokens, temperature)
        messages = CURATOR_PROMPT.format_messages(
            system_instruction=system_instruction,
            user_instruction=user_instruction,
        )
        logger.info(f"Requesting plan completion from {self.model}")
        response = await llm.ainvoke(messages)

        content = response.content
        if isinstance(content, list):
            # Multi-part content: keep text parts in order
            content = "".join(
                part if isinstance(part, str) else part.get("text", "")
                for part in content
            )

        usage = None
        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata:
            usage = UsageRecord(
                model=self.model,
                input_tokens=usage_metadata.get("input_tokens", 0),
                output_tokens=usage_metadata.get("output_tokens", 0),
                total_tokens=usage_metadata.get("total_tokens", 0),
            )

        return CompletionResult(text=content, usage=usage)
