"""
Per-connection context shared by the frame handlers.

A RelayConnection is created for every accepted WebSocket and owns everything the
connection needs: the socket, the injected TurnProcessor, the call session once the
setup frame arrives, the completed turns and the tasks of turns still in flight.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Coroutine, Dict, List, Optional, Set

from fastapi import WebSocket

from conversation_relay.config.constants import LOGGER_NAME
from conversation_relay.models.message_schemas import OutgoingMessage
from conversation_relay.models.session import CallSession, SessionManager, Turn

if TYPE_CHECKING:  # pragma: no cover
    from conversation_relay.bot.turn_processor import TurnProcessor

logger = logging.getLogger(LOGGER_NAME)


class RelayConnection:
    """State owned by a single ConversationRelay connection."""

    def __init__(
        self,
        websocket: WebSocket,
        turn_processor: "TurnProcessor",
        session_manager: SessionManager,
        conversation_history: bool = False,
    ):
        self.websocket = websocket
        self.turn_processor = turn_processor
        self.session_manager = session_manager
        self.conversation_history = conversation_history
        self.session: Optional[CallSession] = None
        self.turns: List[Turn] = []
        self._tasks: Set[asyncio.Task] = set()

    @property
    def label(self) -> str:
        """Short identifier for log lines."""
        if self.session is None:
            return "unknown session"
        return f"session {self.session.session_id}"

    @property
    def pending_turns(self) -> int:
        return len(self._tasks)

    def attach_session(self, session: CallSession) -> bool:
        """
        Record the session for this connection.

        The session is write-once; a second setup frame is logged and ignored.

        Returns:
            True if the session was recorded
        """
        if self.session is not None:
            logger.warning(
                f"Ignoring repeated setup for {self.label} (got {session.session_id})"
            )
            return False
        self.session = session
        self.session_manager.add_session(session)
        return True

    def history(self) -> List[Dict[str, str]]:
        """Prior turns as chat messages, empty unless history is enabled."""
        if not self.conversation_history:
            return []
        messages: List[Dict[str, str]] = []
        for turn in self.turns:
            messages.extend(turn.as_messages())
        return messages

    def record_turn(self, turn: Turn) -> None:
        self.turns.append(turn)

    async def send(self, message: OutgoingMessage) -> None:
        await self.websocket.send_text(message.model_dump_json())

    def spawn(self, coro: Coroutine) -> asyncio.Task:
        """Run a coroutine alongside the receive loop and track it until it finishes."""
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def release(self) -> None:
        """Cancel in-flight turns and drop the session from the registry."""
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(f"Cancelled {len(pending)} in-flight turn(s) for {self.label}")

        if self.session is not None:
            self.session_manager.remove_session(self.session)
