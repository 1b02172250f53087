"""
Services module for client-side tooling around the conversation relay.

Key components:
- relay_client: ConversationRelayClient, which plays the voice platform's side of
  the protocol so a relay can be exercised without a phone call.

Usage examples:
```python
from conversation_relay.services.relay_client import ConversationRelayClient
import asyncio

async def simulate_call():
    client = ConversationRelayClient("ws://localhost:3000/websocket-handler")

    if await client.connect():
        await client.send_setup(from_number="+15551234567", to_number="+15557654321")
        reply = await client.send_prompt("I have five years of experience")
        print(reply)

    await client.close()

asyncio.run(simulate_call())
```
"""

# Services module initialization
