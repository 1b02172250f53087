"""
WebSocket connection manager for the ConversationRelay integration.

This module implements the server side of the ConversationRelay WebSocket protocol,
providing the infrastructure to:
- Accept connections from the voice platform, one per active call
- Decode inbound frames and route them to handler functions by their "type" tag
- Keep per-connection state in a RelayConnection
- Send outbound text frames back to the platform

The WebSocketManager class is the central component that orchestrates all WebSocket
communications between the voice platform and the text generation backend. It is
built with an explicit TurnProcessor so each deployment (or test) decides which
backend answers the caller.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from conversation_relay.bot.turn_processor import TurnProcessor
from conversation_relay.config.constants import (
    LOGGER_NAME,
    MESSAGE_TYPE_DTMF,
    MESSAGE_TYPE_ERROR,
    MESSAGE_TYPE_INTERRUPT,
    MESSAGE_TYPE_PROMPT,
    MESSAGE_TYPE_SETUP,
)
from conversation_relay.handlers.activity_handlers import handle_dtmf, handle_interrupt
from conversation_relay.handlers.prompt_handlers import handle_prompt
from conversation_relay.handlers.session_handlers import handle_error, handle_setup
from conversation_relay.models.connection import RelayConnection
from conversation_relay.models.message_schemas import OutgoingMessage
from conversation_relay.models.session import SessionManager

logger = logging.getLogger(LOGGER_NAME)

# Type hint for handler functions
HandlerFunc = Callable[
    [Dict[str, Any], RelayConnection],
    Awaitable[Optional[OutgoingMessage]],
]


class WebSocketManager:
    """Manages ConversationRelay connections and routes frames to their handlers.

    This class implements the server side of the protocol, handling:
    - Session setup (call metadata)
    - Prompts (caller utterances answered through the TurnProcessor)
    - Keypad and interrupt events
    - Error reports from the platform

    Each frame is routed to a handler based on its "type" field. Frames that cannot be
    decoded, that carry an unknown type, or that fail validation are logged and
    dropped without closing the connection.
    """

    def __init__(
        self,
        turn_processor: TurnProcessor,
        session_manager: Optional[SessionManager] = None,
        conversation_history: bool = False,
    ):
        self.turn_processor = turn_processor
        self.session_manager = session_manager or SessionManager()
        self.conversation_history = conversation_history

        # Define handlers dictionary
        self.handlers: Dict[str, HandlerFunc] = {
            MESSAGE_TYPE_SETUP: handle_setup,
            MESSAGE_TYPE_PROMPT: handle_prompt,
            MESSAGE_TYPE_DTMF: handle_dtmf,
            MESSAGE_TYPE_INTERRUPT: handle_interrupt,
            MESSAGE_TYPE_ERROR: handle_error,
        }

    def register_handler(self, message_type: str, handler: HandlerFunc) -> None:
        """Add or replace the handler for a frame type."""
        self.handlers[message_type] = handler

    @staticmethod
    def frame_text(received: Dict[str, Any]) -> Optional[str]:
        """
        Extract the payload of a received WebSocket message.

        Binary frames are accepted and decoded as UTF-8.

        Returns:
            The frame text, or None if it cannot be decoded
        """
        if received.get("text") is not None:
            return received["text"]

        data = received.get("bytes")
        if data is None:
            logger.error("Ignoring WebSocket message without a payload")
            return None
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Ignoring binary frame that is not UTF-8: {e}")
            return None

    @staticmethod
    def parse_frame(data: str) -> Optional[Dict[str, Any]]:
        """
        Decode one inbound frame.

        Returns:
            The frame as a dictionary, or None if it is not a JSON object
        """
        try:
            message = json.loads(data)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing message: {e}")
            return None

        if not isinstance(message, dict):
            logger.error(f"Ignoring frame that is not a JSON object: {data[:100]!r}")
            return None
        return message

    async def handle_websocket(self, websocket: WebSocket):
        """Handle a WebSocket connection throughout its lifecycle.

        Args:
            websocket (WebSocket): The FastAPI WebSocket connection object

        This method:
        1. Accepts the WebSocket connection
        2. Processes incoming frames in a loop
        3. Routes each frame to the appropriate handler based on type
        4. Sends any response a handler returns
        5. Releases the connection's resources when it ends

        The connection stays open until the platform disconnects or a transport error
        occurs; there is no reconnect, the platform opens a new connection instead.
        """
        await websocket.accept()
        logger.info("New connection from ConversationRelay")
        connection = RelayConnection(
            websocket,
            self.turn_processor,
            self.session_manager,
            conversation_history=self.conversation_history,
        )

        try:
            while True:
                received = await websocket.receive()
                if received["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(received.get("code") or 1000)

                data = self.frame_text(received)
                if data is None:
                    continue
                message = self.parse_frame(data)
                if message is None:
                    continue
                await self.dispatch(message, connection)

        except WebSocketDisconnect as e:
            logger.info(f"Connection closed by peer for {connection.label} (code {e.code})")
        except Exception as e:
            logger.error(f"Error in WebSocket connection: {e}", exc_info=True)
        finally:
            await connection.release()
            if self._is_open(websocket):
                await websocket.close()
            logger.info(f"WebSocket connection closed for {connection.label}")

    async def dispatch(self, message: Dict[str, Any], connection: RelayConnection) -> None:
        """Route one decoded frame to its handler and send the handler's response."""
        message_type = message.get("type")
        logger.info(f"Received event: {message_type}")

        handler = self.handlers.get(message_type) if isinstance(message_type, str) else None
        if handler is None:
            logger.warning(f"Unknown event type: {message_type}")
            return

        try:
            response = await handler(message, connection)
        except Exception as e:
            logger.error(f"Error handling {message_type} frame: {e}", exc_info=True)
            return

        if response is not None:
            await connection.send(response)
            logger.info(f"Sent response for {message_type}")

    @staticmethod
    def _is_open(websocket: WebSocket) -> bool:
        return (
            websocket.client_state == WebSocketState.CONNECTED
            and websocket.application_state == WebSocketState.CONNECTED
        )
