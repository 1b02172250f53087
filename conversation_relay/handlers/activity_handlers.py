"""
Handles caller activity frames from the ConversationRelay voice platform.

This module processes keypad presses (dtmf) and barge-ins (interrupt). Both are
extension points: today they are logged only. A keypad menu would branch on the
digit here, and cancelling the interrupted turn would hook into handle_interrupt.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from conversation_relay.config.constants import LOGGER_NAME
from conversation_relay.models.connection import RelayConnection
from conversation_relay.models.message_schemas import DtmfMessage, InterruptMessage

logger = logging.getLogger(LOGGER_NAME)


async def handle_dtmf(
    message: Dict[str, Any],
    connection: RelayConnection,
) -> None:
    """
    Handle the dtmf frame sent when the caller presses a keypad button.

    Args:
        message: The dtmf frame with the pressed digit
        connection: Context of the connection the frame arrived on

    Returns:
        None as keypad input does not require a response
    """
    try:
        dtmf = DtmfMessage(**message)
    except ValidationError as e:
        logger.error(f"Invalid dtmf message: {e}")
        return None

    logger.info(f"Received DTMF: {dtmf.digit} for {connection.label}")
    return None


async def handle_interrupt(
    message: Dict[str, Any],
    connection: RelayConnection,
) -> None:
    """
    Handle the interrupt frame sent when the caller speaks over a reply.

    In-flight turns are left running; their replies are still sent.

    Args:
        message: The interrupt frame with the spoken part of the reply
        connection: Context of the connection the frame arrived on

    Returns:
        None as interruptions do not require a response
    """
    try:
        interrupt = InterruptMessage(**message)
    except ValidationError as e:
        logger.error(f"Invalid interrupt message: {e}")
        return None

    logger.info(
        f"Caller interrupted {connection.label} at: {interrupt.utteranceUntilInterrupt!r} "
        f"after {interrupt.durationUntilInterruptMs} ms "
        f"({connection.pending_turns} turn(s) in flight)"
    )
    return None
