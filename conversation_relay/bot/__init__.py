"""
Bot module connecting caller utterances to a text generation backend.

Key components:
- BaseLLMClient / OpenAIChatClient: Backend interface and its OpenAI Chat
  Completions implementation, with a lazily created SDK client and no retries.
- TurnProcessor: Builds the request for one utterance, caps the reply length and
  converts any backend failure into the fixed apology reply.
- errors: Exceptions raised by the backend and prompt configuration.

Usage examples:
```python
from conversation_relay.bot import OpenAIChatClient, TurnProcessor
import asyncio

async def answer(utterance: str) -> str:
    backend = OpenAIChatClient(api_key="sk-...", model="gpt-4o-mini")
    processor = TurnProcessor(backend, system_prompt="You are a helpful assistant.")
    return await processor.process(utterance)

print(asyncio.run(answer("What are your opening hours?")))
```
"""

from conversation_relay.bot.llm_client import BaseLLMClient, OpenAIChatClient
from conversation_relay.bot.turn_processor import TurnProcessor

__all__ = ["BaseLLMClient", "OpenAIChatClient", "TurnProcessor"]
