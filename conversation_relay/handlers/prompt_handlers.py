"""
Handles prompt frames: one transcribed caller utterance per frame.

Each prompt starts a turn. The turn runs in its own task so the connection keeps
reading frames while the backend call is in flight; when the TurnProcessor returns,
the reply is sent back as a single text frame for the platform to speak.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from conversation_relay.config.constants import LOGGER_NAME
from conversation_relay.models.connection import RelayConnection
from conversation_relay.models.message_schemas import PromptMessage, TextTokenMessage
from conversation_relay.models.session import Turn

logger = logging.getLogger(LOGGER_NAME)


async def handle_prompt(
    message: Dict[str, Any],
    connection: RelayConnection,
) -> None:
    """
    Handle the prompt frame from the voice platform.

    The frame carries the caller's words as text:
    - voicePrompt: The transcribed utterance
    - lang: Language tag of the transcription
    - last: Whether the transcript is final

    Args:
        message: The prompt frame
        connection: Context of the connection the frame arrived on

    Returns:
        None, the reply is sent by the turn task once it is ready
    """
    try:
        prompt = PromptMessage(**message)
    except ValidationError as e:
        logger.error(f"Invalid prompt message: {e}")
        return None

    logger.info(
        f"Caller said: {prompt.voicePrompt!r} (lang={prompt.lang}, last={prompt.last})"
    )
    if not prompt.voicePrompt.strip():
        logger.warning(f"Empty prompt received for {connection.label}, skipping turn")
        return None

    turn = Turn(utterance=prompt.voicePrompt, lang=prompt.lang, last=prompt.last)
    connection.spawn(run_turn(connection, turn))
    return None


async def run_turn(connection: RelayConnection, turn: Turn) -> None:
    """
    Produce the reply for a turn and send it to the caller.

    Args:
        connection: Context of the connection the turn belongs to
        turn: The caller utterance to answer
    """
    processor = connection.turn_processor
    turn.reply = await processor.process(turn.utterance, connection.history())

    # Only answered turns become conversation history
    if turn.reply != processor.apology:
        connection.record_turn(turn)

    reply = TextTokenMessage(token=turn.reply, last=True)
    try:
        await connection.send(reply)
    except Exception as e:
        logger.error(f"Could not send reply for {connection.label}: {e}")
        return

    logger.debug(f"Sent text reply for {connection.label}")
