"""
Turn processing: one caller utterance in, one reply utterance out.

The TurnProcessor is the only place the relay waits on the network. It builds the
backend request from the configured system instruction and the caller's words,
caps the reply length for speech synthesis, and turns every backend failure into
the same spoken apology so the call carries on.
"""

import logging
import time
from typing import Dict, Iterable, List

from conversation_relay.bot.errors import BackendResponseError
from conversation_relay.bot.llm_client import BaseLLMClient
from conversation_relay.config.constants import (
    APOLOGY_MESSAGE,
    DEFAULT_MAX_TOKENS,
    LOGGER_NAME,
)

logger = logging.getLogger(LOGGER_NAME)


class TurnProcessor:
    """Produces the reply for a single caller utterance."""

    def __init__(
        self,
        backend: BaseLLMClient,
        system_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        apology: str = APOLOGY_MESSAGE,
    ):
        """
        Args:
            backend: Text generation client used for every turn
            system_prompt: Fixed instruction sent ahead of the caller utterance
            max_tokens: Reply length cap; short replies reduce perceived delay
            apology: Reply spoken when the backend call fails
        """
        self.backend = backend
        self.system_prompt = system_prompt
        self.max_tokens = max_tokens
        self.apology = apology

    def build_messages(
        self, utterance: str, history: Iterable[Dict[str, str]] = ()
    ) -> List[Dict[str, str]]:
        """Assemble the chat request: system instruction, prior turns, then the utterance."""
        messages = [{"role": "system", "content": self.system_prompt}]
        messages.extend(history)
        messages.append({"role": "user", "content": utterance})
        return messages

    async def process(
        self, utterance: str, history: Iterable[Dict[str, str]] = ()
    ) -> str:
        """
        Generate the reply for one caller utterance.

        Args:
            utterance: Transcribed caller speech
            history: Prior user/assistant messages of the call, oldest first

        Returns:
            The backend's text verbatim, or the apology if the call failed
        """
        messages = self.build_messages(utterance, history)
        started = time.perf_counter()
        try:
            reply = await self.backend.chat(messages, max_tokens=self.max_tokens)
            if not reply:
                raise BackendResponseError("Backend returned an empty reply.")
        except Exception as e:
            logger.error(f"LLM backend error, replying with apology: {e}", exc_info=True)
            return self.apology

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"AI response ({elapsed_ms:.0f} ms): {reply}")
        return reply
