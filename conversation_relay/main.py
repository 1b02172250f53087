"""
FastAPI server for the ConversationRelay voice integration.

This module initializes and configures the FastAPI application that the voice
platform connects to. The platform handles speech recognition, speech synthesis and
interruption detection; it sends the caller's words as text over a WebSocket and
speaks whatever text the relay sends back. The relay forwards each utterance to the
OpenAI Chat Completions API and returns the model's reply.

The backend client and system prompt are built once here, from environment
configuration, and handed to the WebSocketManager.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import dotenv
from fastapi import FastAPI, WebSocket

from conversation_relay.bot.llm_client import OpenAIChatClient
from conversation_relay.bot.turn_processor import TurnProcessor
from conversation_relay.config.constants import WEBSOCKET_PATH
from conversation_relay.config.logging_config import configure_logging
from conversation_relay.config.settings import load_settings
from conversation_relay.prompts import resolve_system_prompt
from conversation_relay.websocket_manager import WebSocketManager

# Load environment variables from .env file if it exists
env_path = Path(".") / ".env"
if env_path.exists():
    dotenv.load_dotenv(env_path)

settings = load_settings()

# Configure logging
logger = configure_logging(settings.log_level)

# Build the backend and wire it into the connection manager
backend = OpenAIChatClient.from_settings(settings)
turn_processor = TurnProcessor(
    backend,
    resolve_system_prompt(settings),
    max_tokens=settings.openai_max_tokens,
)
websocket_manager = WebSocketManager(
    turn_processor, conversation_history=settings.conversation_history
)

if not settings.api_key_configured:
    logger.warning("OPENAI_API_KEY is not set; every turn will get the apology reply")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await backend.close()


# Create FastAPI application
app = FastAPI(
    title="Conversation Relay",
    description="Relay between Twilio ConversationRelay and the OpenAI Chat Completions API",
    version="1.0.0",
    lifespan=lifespan,
)


@app.websocket(WEBSOCKET_PATH)
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for the ConversationRelay voice platform.

    The platform opens one connection per call and sends JSON frames:
    - setup: call metadata, once per connection
    - prompt: a transcribed caller utterance, answered with a text frame
    - dtmf / interrupt: keypad presses and barge-ins
    """
    await websocket_manager.handle_websocket(websocket)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring system status.

    Returns:
        dict: Static readiness information plus the number of live call sessions.
    """
    return {
        "status": "healthy",
        "websocket": "ready",
        "openai_api_key_configured": settings.api_key_configured,
        "active_connections": len(websocket_manager.session_manager),
    }


@app.get("/")
async def root():
    """Root endpoint to display basic information about the API.

    Returns:
        dict: Basic information about the API and its purpose.
    """
    return {
        "name": "Conversation Relay",
        "description": "Relay between Twilio ConversationRelay and the OpenAI Chat Completions API",
        "version": "1.0.0",
        "endpoints": {
            WEBSOCKET_PATH: "WebSocket endpoint for ConversationRelay",
            "/health": "Health check endpoint",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{settings.host}:{settings.port}")
    logger.info(f"WebSocket endpoint ready at ws://localhost:{settings.port}{WEBSOCKET_PATH}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        http="h11",
    )
