"""
Pydantic models for the ConversationRelay WebSocket message schemas.

This module defines structured data models for the frames exchanged with the voice
platform: the inbound setup, prompt, dtmf, interrupt and error frames, and the single
outbound text frame, providing type validation and documentation.
"""

import logging
import re
from typing import Any, Dict, Literal, Optional, Pattern, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from conversation_relay.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

DTMF_DIGITS = "0123456789*#ABCDw"
E164_PATTERN: Pattern = re.compile(r"^\+[1-9][0-9]{1,14}$")
CALL_DIRECTIONS = ("inbound", "outbound", "outbound-api", "outbound-dial")


class BaseMessage(BaseModel):
    """Base model for all WebSocket frames."""

    # The platform adds fields over time; unknown ones are tolerated
    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="Frame type tag")


# Inbound frames
class SetupMessage(BaseMessage):
    """Model for the setup frame sent once when the call connects."""

    type: Literal["setup"]
    sessionId: str = Field(..., description="ConversationRelay session identifier")
    callSid: str = Field(..., description="Identifier of the underlying call")
    from_: Optional[str] = Field(None, alias="from", description="Caller address")
    to: Optional[str] = Field(None, description="Called address")
    direction: Optional[str] = Field(None, description="Call direction")
    accountSid: Optional[str] = None
    applicationSid: Optional[str] = None
    callStatus: Optional[str] = None
    callerName: Optional[str] = None
    forwardedFrom: Optional[str] = None
    parentCallSid: Optional[str] = None
    customParameters: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("from_", "to")
    @classmethod
    def validate_address(cls, v):
        """Log addresses that do not look like E.164 numbers (SIP URIs are valid)."""
        if v and v.startswith("+") and not E164_PATTERN.match(v):
            logger.warning(f"Address does not match E.164 pattern: {v}")
        return v

    @field_validator("direction")
    @classmethod
    def validate_direction(cls, v):
        if v is not None and v not in CALL_DIRECTIONS:
            logger.warning(f"Unknown call direction: {v}")
        return v


class PromptMessage(BaseMessage):
    """Model for the prompt frame carrying one transcribed caller utterance."""

    type: Literal["prompt"]
    voicePrompt: str = Field(..., description="Transcribed caller speech")
    lang: Optional[str] = Field(None, description="Language tag, e.g. en-US")
    last: bool = Field(True, description="Whether this is the final transcript")


class DtmfMessage(BaseMessage):
    """Model for the dtmf frame sent when the caller presses a key."""

    type: Literal["dtmf"]
    digit: str = Field(..., description="Pressed keypad digit")

    @field_validator("digit")
    @classmethod
    def validate_digit(cls, v):
        """Validate that the digit is a keypad symbol."""
        if not v or any(symbol not in DTMF_DIGITS for symbol in v):
            raise ValueError(f"Invalid DTMF digit: {v}")
        return v


class InterruptMessage(BaseMessage):
    """Model for the interrupt frame sent when the caller speaks over a reply."""

    type: Literal["interrupt"]
    utteranceUntilInterrupt: str = Field(
        "", description="Part of the reply spoken before the interruption"
    )
    durationUntilInterruptMs: int = Field(
        0, ge=0, description="Playback time before the interruption"
    )


class ErrorMessage(BaseMessage):
    """Model for the error frame the platform sends when it rejects a frame."""

    type: Literal["error"]
    description: str = Field("", description="Error reported by the platform")


# Outbound frames
class TextTokenMessage(BaseMessage):
    """Model for the text frame the platform speaks to the caller."""

    type: Literal["text"] = "text"
    token: str = Field(..., description="Text to synthesize")
    last: bool = Field(True, description="Whether the reply is complete")


# Union type for all possible incoming messages
IncomingMessage = Union[
    SetupMessage,
    PromptMessage,
    DtmfMessage,
    InterruptMessage,
    ErrorMessage,
]

# Union type for all possible outgoing messages
OutgoingMessage = TextTokenMessage
