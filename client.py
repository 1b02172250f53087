"""
Scripted call against a running Conversation Relay server.

Plays the voice platform's side of a short call: setup, a few caller utterances,
a keypad press and an interruption, printing every reply the relay sends back.

Usage:
    python client.py [--url ws://localhost:3000/websocket-handler] [utterance ...]
"""

import argparse
import asyncio
import logging

from conversation_relay.services.relay_client import ConversationRelayClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("relay_client")

DEFAULT_UTTERANCES = [
    "Hi, I'm calling about the backend engineer position.",
    "I have five years of experience",
    "Mostly Python and some Go.",
]


async def run_call(url: str, utterances: list[str]) -> None:
    client = ConversationRelayClient(url)
    if not await client.connect():
        return

    try:
        # Step 1: Open the call
        session_id = await client.send_setup()
        logger.info(f"Step 1: Session {session_id} set up")

        # Step 2: Caller utterances, one reply each
        for text in utterances:
            reply = await client.send_prompt(text)
            print(f"Caller: {text}")
            print(f"Agent:  {reply}")

        # Step 3: Keypad press and barge-in (no reply expected)
        await client.send_dtmf("1")
        await client.send_interrupt("Great, can you tell me", 850)
        logger.info("Step 3: Sent DTMF and interrupt")
    except Exception as e:
        logger.error(f"Error in relay client: {e}", exc_info=True)
    finally:
        await client.close()


def main():
    parser = argparse.ArgumentParser(description="Simulate a ConversationRelay call")
    parser.add_argument(
        "--url",
        default="ws://localhost:3000/websocket-handler",
        help="Relay WebSocket URL",
    )
    parser.add_argument("utterances", nargs="*", help="Caller utterances to send")
    args = parser.parse_args()

    asyncio.run(run_call(args.url, args.utterances or DEFAULT_UTTERANCES))


if __name__ == "__main__":
    main()
