"""
WebSocket client that plays the voice platform's side of the ConversationRelay protocol.

This module lets a developer drive a running relay without placing a phone call: it
sends the frames the platform would send (setup, prompt, dtmf, interrupt) and reads
back the text frames the relay answers with. Outgoing frames are built from the same
Pydantic models the server validates against.
"""

import asyncio
import json
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional

import websockets

from conversation_relay.config.constants import LOGGER_NAME, MESSAGE_TYPE_TEXT
from conversation_relay.models.message_schemas import (
    DtmfMessage,
    InterruptMessage,
    PromptMessage,
    SetupMessage,
)

logger = logging.getLogger(LOGGER_NAME)


class ConversationRelayClient:
    """
    Client that simulates a ConversationRelay call against a relay server.

    This class provides methods to connect, send protocol frames and receive the
    relay's replies. It uses Pydantic models to ensure frame validity.
    """

    def __init__(self, url: str):
        """
        Initialize the simulated platform client.

        Args:
            url: The WebSocket URL of the relay, e.g. ws://localhost:3000/websocket-handler
        """
        self.url = url
        self.websocket = None
        self.session_id: Optional[str] = None
        self.call_sid: Optional[str] = None

    async def connect(self) -> bool:
        """
        Establish a connection to the relay.

        Returns:
            True if connection was successful, False otherwise
        """
        try:
            self.websocket = await websockets.connect(self.url)
            logger.info(f"Connected to relay WebSocket at {self.url}")
            return True
        except Exception as e:
            logger.error(f"Failed to connect to relay: {e}")
            return False

    async def send_setup(
        self,
        from_number: str = "+15550000001",
        to_number: str = "+15550000002",
        direction: str = "inbound",
    ) -> Optional[str]:
        """
        Send the setup frame that opens a call.

        Args:
            from_number: Caller address
            to_number: Called address
            direction: Call direction

        Returns:
            The generated session ID, or None if not connected
        """
        if not self.websocket:
            logger.error("Cannot send setup: Not connected")
            return None

        self.session_id = f"VX{uuid.uuid4().hex}"
        self.call_sid = f"CA{uuid.uuid4().hex}"

        message = SetupMessage(
            type="setup",
            sessionId=self.session_id,
            callSid=self.call_sid,
            to=to_number,
            direction=direction,
            **{"from": from_number},
        )
        await self.websocket.send(message.model_dump_json(by_alias=True, exclude_none=True))
        logger.info(f"Sent setup for session: {self.session_id}")
        return self.session_id

    async def send_prompt(
        self,
        text: str,
        lang: str = "en-US",
        last: bool = True,
        timeout: float = 10.0,
    ) -> Optional[str]:
        """
        Send a caller utterance and wait for the relay's reply.

        Args:
            text: The utterance as the speech recognizer would transcribe it
            lang: Language tag of the utterance
            last: Whether the transcript is final
            timeout: Seconds to wait for the reply

        Returns:
            The reply text, or None if not connected or no text frame came back in time
        """
        if not self.websocket:
            logger.error("Cannot send prompt: Not connected")
            return None

        message = PromptMessage(type="prompt", voicePrompt=text, lang=lang, last=last)
        await self.websocket.send(message.model_dump_json())
        logger.info(f"Sent prompt: {text!r}")

        try:
            response_data = await asyncio.wait_for(self.websocket.recv(), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"No reply to prompt within {timeout} s")
            return None
        response = json.loads(response_data)

        if response.get("type") == MESSAGE_TYPE_TEXT:
            logger.info(f"Relay replied: {response.get('token')!r}")
            return response.get("token")
        else:
            logger.error(f"Unexpected reply to prompt: {response}")
            return None

    async def send_dtmf(self, digit: str) -> None:
        """
        Send a keypad press.

        Args:
            digit: The pressed key
        """
        if not self.websocket:
            logger.error("Cannot send DTMF: Not connected")
            return

        message = DtmfMessage(type="dtmf", digit=digit)
        await self.websocket.send(message.model_dump_json())
        logger.info(f"Sent DTMF digit: {digit}")

    async def send_interrupt(self, utterance: str, duration_ms: int) -> None:
        """
        Report that the caller spoke over the current reply.

        Args:
            utterance: Part of the reply spoken before the interruption
            duration_ms: Playback time before the interruption
        """
        if not self.websocket:
            logger.error("Cannot send interrupt: Not connected")
            return

        message = InterruptMessage(
            type="interrupt",
            utteranceUntilInterrupt=utterance,
            durationUntilInterruptMs=duration_ms,
        )
        await self.websocket.send(message.model_dump_json())
        logger.info(f"Sent interrupt after {duration_ms} ms")

    async def close(self) -> None:
        """
        Close the WebSocket connection, ending the simulated call.
        """
        if self.websocket:
            await self.websocket.close()
            logger.info("Closed WebSocket connection")
            self.websocket = None
            self.session_id = None
            self.call_sid = None

    async def listen(
        self, message_handler: Callable[[Dict[str, Any]], Awaitable[None]]
    ) -> None:
        """
        Listen for frames from the relay until the connection closes.

        Args:
            message_handler: Coroutine function called with each decoded frame
        """
        if not self.websocket:
            logger.error("Cannot listen: Not connected")
            return

        try:
            while True:
                message_data = await self.websocket.recv()
                await message_handler(json.loads(message_data))

        except websockets.exceptions.ConnectionClosed:
            logger.info("WebSocket connection closed by server")
            self.websocket = None
            self.session_id = None
            self.call_sid = None
        except Exception as e:
            logger.error(f"Error in WebSocket listener: {e}")
            await self.close()
