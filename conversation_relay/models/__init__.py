"""
Models module for data structures and state management in the conversation relay.

This module provides the structured data models and per-connection state used by
the relay.

Key components:
- message_schemas: Pydantic models for validating and serializing the frames of the
  ConversationRelay WebSocket protocol.
- session: The write-once CallSession captured at setup, the Turn record and the
  SessionManager registry of live sessions.
- connection: RelayConnection, the context object each frame handler receives.

Usage examples:
```python
from conversation_relay.models.message_schemas import PromptMessage, TextTokenMessage

prompt = PromptMessage(type="prompt", voicePrompt="Hello", lang="en-US", last=True)
reply = TextTokenMessage(token="Hi there!")
print(reply.model_dump_json())  # {"type":"text","token":"Hi there!","last":true}
```
"""

# Models module initialization
