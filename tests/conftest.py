import asyncio
import logging
import os
import tempfile

import pytest
from starlette.websockets import WebSocketState

# Keep test runs from writing into the working tree or reaching the real backend
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="relay-logs-"))
os.environ.pop("OPENAI_API_KEY", None)

from conversation_relay.bot.turn_processor import TurnProcessor
from conversation_relay.config.constants import LOGGER_NAME
from conversation_relay.models.connection import RelayConnection
from conversation_relay.models.session import SessionManager
from conversation_relay.websocket_manager import WebSocketManager

from doubles import FakeRelaySocket, StubBackend

SYSTEM_PROMPT = "You are a screening assistant. Keep answers short."


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


@pytest.fixture
def relay_log(caplog):
    """Capture records of the application logger, which does not propagate to root."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    yield caplog
    logger.removeHandler(caplog.handler)


@pytest.fixture
def stub_backend():
    return StubBackend(reply="Great, can you tell me about your most recent project?")


@pytest.fixture
def failing_backend():
    return StubBackend(error=RuntimeError("rate limited"))


@pytest.fixture
def make_manager():
    def _make(backend, conversation_history=False):
        return WebSocketManager(
            TurnProcessor(backend, SYSTEM_PROMPT),
            conversation_history=conversation_history,
        )

    return _make


@pytest.fixture
def make_connection():
    """Build a RelayConnection around an in-memory socket."""

    def _make(backend, conversation_history=False, websocket=None):
        socket = websocket or FakeRelaySocket()
        socket.client_state = WebSocketState.CONNECTED
        socket.application_state = WebSocketState.CONNECTED
        return RelayConnection(
            socket,
            TurnProcessor(backend, SYSTEM_PROMPT),
            SessionManager(),
            conversation_history=conversation_history,
        )

    return _make


@pytest.fixture
def run_call():
    """Feed frames through a manager and return the socket once the call has ended."""

    async def _run(manager, frames, expected_replies=0, settle=0.05):
        socket = FakeRelaySocket()
        for frame in frames:
            socket.push(frame)
        task = asyncio.create_task(manager.handle_websocket(socket))
        await socket.wait_for_sent(expected_replies)
        # Give stray replies a chance to show up before hanging up
        await asyncio.sleep(settle)
        socket.disconnect()
        await asyncio.wait_for(task, 2.0)
        return socket

    return _run
