"""System prompts shipped with the relay and the startup resolution of the active one."""

import logging
from pathlib import Path
from typing import List

from conversation_relay.bot.errors import PromptNotFoundError
from conversation_relay.config.constants import LOGGER_NAME
from conversation_relay.config.settings import Settings

logger = logging.getLogger(LOGGER_NAME)

PROMPT_DIR = Path(__file__).resolve().parent


def available_prompts() -> List[str]:
    return sorted(path.stem for path in PROMPT_DIR.glob("*.txt"))


def load_prompt(name: str) -> str:
    """Load a prompt text file shipped with the codebase."""
    path = PROMPT_DIR / f"{name}.txt"
    if not path.is_file():
        raise PromptNotFoundError(
            f"Prompt '{name}' not found; available: {', '.join(available_prompts())}"
        )
    return path.read_text(encoding="utf-8").strip()


def resolve_system_prompt(settings: Settings) -> str:
    """
    Return the system instruction for this deployment.

    A literal SYSTEM_PROMPT wins over SYSTEM_PROMPT_FILE, which wins over the
    packaged prompt named by SYSTEM_PROMPT_NAME.
    """
    if settings.system_prompt and settings.system_prompt.strip():
        logger.info("Using system prompt from SYSTEM_PROMPT")
        return settings.system_prompt.strip()

    if settings.system_prompt_file:
        path = Path(settings.system_prompt_file).expanduser()
        if not path.is_file():
            raise PromptNotFoundError(f"Prompt file not found: {path}")
        logger.info(f"Using system prompt from file: {path}")
        return path.read_text(encoding="utf-8").strip()

    logger.info(f"Using packaged system prompt: {settings.system_prompt_name}")
    return load_prompt(settings.system_prompt_name)
