"""
Handles session-level frames from the ConversationRelay voice platform.

This module processes the setup frame, sent once when the call connects and carrying
the call metadata, and the error frame the platform sends when it could not act on
something the relay sent. Neither produces a reply frame.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from conversation_relay.config.constants import LOGGER_NAME
from conversation_relay.models.connection import RelayConnection
from conversation_relay.models.message_schemas import ErrorMessage, SetupMessage
from conversation_relay.models.session import CallSession

logger = logging.getLogger(LOGGER_NAME)


async def handle_setup(
    message: Dict[str, Any],
    connection: RelayConnection,
) -> None:
    """
    Handle the setup frame from the voice platform.

    The frame arrives right after the WebSocket opens and identifies the call:
    - sessionId: ConversationRelay session identifier
    - callSid: Identifier of the underlying phone call
    - from / to: Caller and called addresses
    - direction: inbound or outbound

    The metadata is recorded on the connection for diagnostics only; the platform
    does not expect an answer.

    Args:
        message: The setup frame
        connection: Context of the connection the frame arrived on

    Returns:
        None, as no response is expected
    """
    try:
        setup = SetupMessage(**message)
    except ValidationError as e:
        logger.error(f"Invalid setup message: {e}")
        return None

    session = CallSession.from_setup(setup)
    if connection.attach_session(session):
        logger.info(
            f"Setup received for session {session.session_id}: "
            f"callSid={session.call_sid} from={session.from_number} "
            f"to={session.to_number} direction={session.direction}"
        )
        if session.custom_parameters:
            logger.debug(f"Custom parameters: {session.custom_parameters}")
    return None


async def handle_error(
    message: Dict[str, Any],
    connection: RelayConnection,
) -> None:
    """
    Handle an error frame reported by the voice platform.

    Args:
        message: The error frame with its description
        connection: Context of the connection the frame arrived on

    Returns:
        None, errors are logged only
    """
    try:
        error = ErrorMessage(**message)
    except ValidationError as e:
        logger.error(f"Invalid error message: {e}")
        return None

    logger.error(f"Voice platform reported an error for {connection.label}: {error.description}")
    return None
