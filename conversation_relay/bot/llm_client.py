"""
Text generation backend clients.

The relay talks to its language model through BaseLLMClient so the TurnProcessor can
be handed any implementation, a stub in tests or OpenAIChatClient in production.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from openai import AsyncOpenAI

from conversation_relay.bot.errors import BackendError, BackendResponseError
from conversation_relay.config.constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_SECONDS,
    LOGGER_NAME,
)
from conversation_relay.config.settings import Settings

logger = logging.getLogger(LOGGER_NAME)


class BaseLLMClient(ABC):
    """Abstract base class for text generation backends."""

    @abstractmethod
    async def chat(
        self,
        messages: Iterable[dict[str, str]],
        *,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        """Return the generated reply for a chat-style request."""


class OpenAIChatClient(BaseLLMClient):
    """
    Wrapper around the OpenAI Chat Completions API.

    The SDK client is created on first use, so a relay without credentials still
    starts and serves its health endpoint; the missing key then surfaces as a failed
    turn. SDK-level retries are disabled because a failed turn is answered with an
    apology rather than retried.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        *,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self.model = model
        self._client: Optional[AsyncOpenAI] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIChatClient":
        return cls(
            settings.openai_api_key,
            settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.openai_timeout,
        )

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise BackendError("OPENAI_API_KEY is not configured.")
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url or None,
                timeout=self._timeout,
                max_retries=0,
            )
            logger.info(f"OpenAI client initialized with model: {self.model}")
        return self._client

    async def chat(
        self,
        messages: Iterable[dict[str, str]],
        *,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=list(messages),
            max_tokens=max_tokens,
        )
        if not response.choices:
            raise BackendResponseError("Chat completion contains no choices.")
        content = response.choices[0].message.content
        if not content:
            raise BackendResponseError("Chat completion contains no text content.")
        return content

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
