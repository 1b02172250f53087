"""
Conversation Relay - Twilio ConversationRelay to OpenAI Chat Completions bridge

This application relays a phone conversation between the Twilio ConversationRelay
voice platform and a language model. The platform turns the caller's speech into
text and sends it over a WebSocket; the relay asks the model for a short reply and
sends the text back for the platform to speak.

Architecture Overview:
- FastAPI server exposing the WebSocket endpoint the platform connects to
- A frame dispatcher routing each JSON frame to a handler by its type tag
- A turn processor that calls the OpenAI Chat Completions API, one utterance per call
- A fixed apology reply whenever the model cannot be reached

Key Components:
- bot: Backend client and the TurnProcessor
- config: Constants, settings and logging setup
- handlers: Handlers for the setup, prompt, dtmf, interrupt and error frames
- models: Frame schemas, call session and per-connection state
- prompts: System prompts shipped with the relay and their resolution at startup
- services: A client simulating the voice platform for manual testing
- websocket_manager: Central handler for WebSocket connections and frame routing

Getting Started:
1. Set up environment variables:
   - OPENAI_API_KEY: Your OpenAI API key
   - PORT: Port to run the server on (default 3000)
   - SYSTEM_PROMPT_NAME: Packaged prompt to use (default job_screening)
   - LOG_LEVEL: Logging level (default INFO)

2. Start the server:
   ```bash
   python run.py
   ```

3. Point the ConversationRelay TwiML at the server:
   - <ConversationRelay url="wss://your-host/websocket-handler" />
"""

__version__ = "1.0.0"
