import pytest

from conversation_relay.handlers.activity_handlers import handle_dtmf, handle_interrupt
from conversation_relay.handlers.prompt_handlers import handle_prompt
from doubles import StubBackend, wait_for_turns


@pytest.mark.asyncio
class TestActivityHandlers:

    async def test_handle_dtmf(self, make_connection, relay_log):
        # Setup
        connection = make_connection(StubBackend())
        message = {"type": "dtmf", "digit": "5"}

        # Execute
        response = await handle_dtmf(message, connection)

        # Assert
        assert response is None
        assert connection.websocket.sent == []
        assert "Received DTMF: 5 for unknown session" in relay_log.text

    @pytest.mark.parametrize("digit", ["*", "#", "A", "w", "123"])
    async def test_handle_dtmf_keypad_symbols(self, make_connection, relay_log, digit):
        connection = make_connection(StubBackend())

        response = await handle_dtmf({"type": "dtmf", "digit": digit}, connection)

        assert response is None
        assert f"Received DTMF: {digit}" in relay_log.text

    @pytest.mark.parametrize("message", [{"type": "dtmf"}, {"type": "dtmf", "digit": "X"}])
    async def test_handle_dtmf_invalid(self, make_connection, relay_log, message):
        connection = make_connection(StubBackend())

        response = await handle_dtmf(message, connection)

        assert response is None
        assert "Invalid dtmf message" in relay_log.text

    async def test_handle_interrupt(self, make_connection, relay_log):
        # Setup
        connection = make_connection(StubBackend())
        message = {
            "type": "interrupt",
            "utteranceUntilInterrupt": "Thanks for calling, we",
            "durationUntilInterruptMs": 1200,
        }

        # Execute
        response = await handle_interrupt(message, connection)

        # Assert
        assert response is None
        assert connection.websocket.sent == []
        assert "'Thanks for calling, we' after 1200 ms" in relay_log.text

    async def test_handle_interrupt_defaults(self, make_connection, relay_log):
        connection = make_connection(StubBackend())

        response = await handle_interrupt({"type": "interrupt"}, connection)

        assert response is None
        assert "after 0 ms (0 turn(s) in flight)" in relay_log.text

    async def test_handle_interrupt_leaves_turns_running(self, make_connection):
        connection = make_connection(StubBackend(reply="Full reply", delay=0.05))
        await handle_prompt({"type": "prompt", "voicePrompt": "Tell me more"}, connection)
        await handle_interrupt({"type": "interrupt"}, connection)
        await wait_for_turns(connection)

        assert connection.websocket.sent == [{"type": "text", "token": "Full reply", "last": True}]

    async def test_handle_interrupt_invalid_duration(self, make_connection, relay_log):
        connection = make_connection(StubBackend())

        response = await handle_interrupt(
            {"type": "interrupt", "durationUntilInterruptMs": -5}, connection
        )

        assert response is None
        assert "Invalid interrupt message" in relay_log.text
