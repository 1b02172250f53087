"""
Configuration module for the conversation relay.

This module provides centralized configuration management for the application,
including constants, logging setup, and environment-based settings.

Key components:
- constants: Application-wide constants such as frame type tags, backend defaults
  and the fixed apology reply.
- logging_config: Console and rotating-file logging for the application logger.
- settings: Pydantic-validated settings read from environment variables.

Usage examples:
```python
from conversation_relay.config.constants import LOGGER_NAME, APOLOGY_MESSAGE
from conversation_relay.config.logging_config import configure_logging
from conversation_relay.config.settings import load_settings

logger = configure_logging()
settings = load_settings()
logger.info(f"Using model {settings.openai_model}")
```
"""

# Config module initialization
