"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the application,
providing a centralized location for configuration values and making it easier to
maintain consistent naming throughout the codebase.
"""

# Logger name used throughout the application
LOGGER_NAME = "conversation_relay"

# Path where the voice platform opens its WebSocket connection
WEBSOCKET_PATH = "/websocket-handler"

# Backend defaults (short replies keep speech synthesis latency low)
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 150
DEFAULT_TIMEOUT_SECONDS = 30.0

# Spoken to the caller whenever the backend call fails, whatever the cause
APOLOGY_MESSAGE = "I apologize, I encountered an error processing your request."

# Packaged system prompt used when nothing else is configured
DEFAULT_PROMPT_NAME = "job_screening"

# Inbound message type constants
MESSAGE_TYPE_SETUP = "setup"
MESSAGE_TYPE_PROMPT = "prompt"
MESSAGE_TYPE_DTMF = "dtmf"
MESSAGE_TYPE_INTERRUPT = "interrupt"
MESSAGE_TYPE_ERROR = "error"

# Outbound message type constants
MESSAGE_TYPE_TEXT = "text"
