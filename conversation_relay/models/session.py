"""
Session state management module for ConversationRelay connections.

This module provides the per-call data the relay keeps while a connection is open:
the write-once CallSession captured from the setup frame, the Turn records pairing
each caller utterance with its reply, and the SessionManager registry which tracks
live sessions so the health endpoint can report them. Nothing here outlives the
connection that created it.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from conversation_relay.models.message_schemas import SetupMessage


class CallSession(BaseModel):
    """
    Call metadata captured from the setup frame.

    Instances are frozen: attributes are written once on setup and only read
    afterwards, for diagnostic output.
    """

    model_config = ConfigDict(frozen=True)

    session_id: str
    call_sid: str
    from_number: Optional[str] = None
    to_number: Optional[str] = None
    direction: Optional[str] = None
    caller_name: Optional[str] = None
    custom_parameters: Dict[str, Any] = {}

    @classmethod
    def from_setup(cls, message: SetupMessage) -> "CallSession":
        return cls(
            session_id=message.sessionId,
            call_sid=message.callSid,
            from_number=message.from_,
            to_number=message.to,
            direction=message.direction,
            caller_name=message.callerName,
            custom_parameters=message.customParameters or {},
        )


@dataclass
class Turn:
    """One caller utterance and the reply produced for it."""

    utterance: str
    lang: Optional[str] = None
    last: bool = True
    reply: Optional[str] = None

    def as_messages(self) -> List[Dict[str, str]]:
        """Return the turn as chat messages, or nothing if it has no reply yet."""
        if self.reply is None:
            return []
        return [
            {"role": "user", "content": self.utterance},
            {"role": "assistant", "content": self.reply},
        ]


class SessionManager:
    """
    Registry of live call sessions.

    Each connection registers its session on setup and removes it on close. The
    platform may reuse a session ID (a reconnecting peer), so entries are tracked
    per connection and removed by identity, never by ID alone. The registry is
    only read for diagnostics; connections never look at each other's sessions.
    """

    def __init__(self):
        """Initialize an empty list of active sessions."""
        self.active_sessions: List[CallSession] = []

    def add_session(self, session: CallSession) -> None:
        """
        Add a session to the registry.

        Args:
            session: The session captured from a setup frame
        """
        self.active_sessions.append(session)

    def get_session(self, session_id: str) -> Optional[CallSession]:
        """
        Get an active session by its ID.

        Args:
            session_id: ConversationRelay session identifier

        Returns:
            The most recently registered session with that ID, or None
        """
        for session in reversed(self.active_sessions):
            if session.session_id == session_id:
                return session
        return None

    def remove_session(self, session: CallSession) -> None:
        """
        Remove one connection's session; other sessions sharing its ID are kept.

        Args:
            session: The session instance that was registered
        """
        self.active_sessions = [s for s in self.active_sessions if s is not session]

    def get_all_sessions(self) -> List[CallSession]:
        return list(self.active_sessions)

    def __len__(self) -> int:
        return len(self.active_sessions)
