"""
infrastructure.llm.completion_client - Chat-completion client over LangChain.

Implements CompletionClientPort with langchain_openai.ChatOpenAI. One chat
model is built per (temperature, max_tokens, json_mode) combination, the
same way build_llm configures the OpenAI provider, and reused afterwards.

Every failure (connection error, timeout, non-2xx status) is raised as
CompletionError. Retries are disabled; callers decide how to fall back.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import openai
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from domain.exceptions import CompletionError

logger = logging.getLogger(__name__)

_MESSAGE_TYPES = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def build_chat_model(
    *,
    model: str,
    openai_api_key: str,
    base_url: Optional[str] = None,
    temperature: float = 0,
    max_tokens: Optional[int] = None,
    json_mode: bool = False,
    timeout: float = 30.0,
) -> ChatOpenAI:
    """Build a ChatOpenAI instance with retries disabled."""
    kwargs: Dict[str, Any] = {
        "model": model,
        "temperature": temperature,
        "openai_api_key": openai_api_key,
        "timeout": timeout,
        "max_retries": 0,
    }
    if base_url:
        kwargs["base_url"] = base_url
    if json_mode:
        kwargs["model_kwargs"] = {"response_format": {"type": "json_object"}}
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens

    logger.info("Building OpenAI chat model (model=%s, json_mode=%s)", model, json_mode)
    return ChatOpenAI(**kwargs)


def to_langchain_messages(messages: list[dict[str, str]]) -> list[BaseMessage]:
    """Convert {"role", "content"} dicts to LangChain message objects."""
    converted: list[BaseMessage] = []
    for m in messages:
        message_type = _MESSAGE_TYPES.get(m.get("role", ""))
        if message_type is None:
            raise CompletionError(f"Unsupported message role: {m.get('role')!r}")
        converted.append(message_type(content=m.get("content", "")))
    return converted


class OpenAICompletionClient:
    """Call an OpenAI-compatible chat model.

    Implements CompletionClientPort (structural typing; no explicit inheritance).
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._model = model
        self._timeout = timeout
        self._chat_models: dict[tuple[float, int, bool], ChatOpenAI] = {}

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        """Send one completion request and return the answer text.

        Raises:
            CompletionError: On transport failure, timeout or non-2xx status.
        """
        chat_model = self._chat_model(temperature, max_tokens, json_mode)
        lc_messages = to_langchain_messages(messages)

        logger.info(
            "Calling completion API (model=%s, messages=%d, max_tokens=%d)",
            self._model, len(lc_messages), max_tokens,
        )
        try:
            result = await chat_model.ainvoke(lc_messages)
        except openai.APITimeoutError as e:
            raise CompletionError(
                f"Completion API timed out after {self._timeout}s"
            ) from e
        except openai.APIStatusError as e:
            raise CompletionError(
                f"Completion API returned HTTP {e.status_code}: {e.message}"
            ) from e
        except openai.APIError as e:
            raise CompletionError(f"Completion API unreachable: {e}") from e

        content = result.content
        if not isinstance(content, str):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in content
            )
        logger.info("Completion API returned %d char(s)", len(content))
        return content

    def _chat_model(self, temperature: float, max_tokens: int, json_mode: bool) -> ChatOpenAI:
        key = (temperature, max_tokens, json_mode)
        if key not in self._chat_models:
            self._chat_models[key] = build_chat_model(
                model=self._model,
                openai_api_key=self._api_key,
                base_url=self._base_url,
                temperature=temperature,
                max_tokens=max_tokens,
                json_mode=json_mode,
                timeout=self._timeout,
            )
        return self._chat_models[key]
