"""
Handlers module for ConversationRelay WebSocket frames.

Every handler has the same shape: it receives the decoded frame and the
RelayConnection it arrived on, validates the frame with its Pydantic model, and
returns an optional outbound message for the WebSocketManager to send.

Key components:
- session_handlers: The setup frame (call metadata) and the platform's error frame.
- prompt_handlers: The prompt frame, which starts a turn and sends the reply.
- activity_handlers: Keypad (dtmf) and barge-in (interrupt) frames, both hooks that
  currently only log.

Usage examples:
```python
from conversation_relay.websocket_manager import WebSocketManager

manager = WebSocketManager(turn_processor)

# Replace or add a handler without touching the dispatch loop
async def handle_dtmf_menu(message, connection):
    if message.get("digit") == "0":
        ...

manager.register_handler("dtmf", handle_dtmf_menu)
```
"""

# Handlers module initialization
