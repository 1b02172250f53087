import pytest
from pydantic import ValidationError

from conversation_relay.config.settings import Settings, load_settings

ENV_VARS = [
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_MAX_TOKENS",
    "OPENAI_TIMEOUT",
    "OPENAI_BASE_URL",
    "SYSTEM_PROMPT",
    "SYSTEM_PROMPT_FILE",
    "SYSTEM_PROMPT_NAME",
    "CONVERSATION_HISTORY",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the results
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env):
    settings = load_settings()

    assert settings.host == "0.0.0.0"
    assert settings.port == 3000
    assert settings.log_level == "INFO"
    assert settings.openai_api_key is None
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.openai_max_tokens == 150
    assert settings.openai_timeout == 30.0
    assert settings.openai_base_url is None
    assert settings.system_prompt is None
    assert settings.system_prompt_file is None
    assert settings.system_prompt_name == "job_screening"
    assert settings.conversation_history is False
    assert settings.api_key_configured is False


def test_reads_environment(clean_env):
    clean_env.setenv("HOST", "127.0.0.1")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("LOG_LEVEL", "DEBUG")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("OPENAI_MODEL", "gpt-4o")
    clean_env.setenv("OPENAI_MAX_TOKENS", "80")
    clean_env.setenv("OPENAI_TIMEOUT", "7.5")
    clean_env.setenv("SYSTEM_PROMPT_NAME", "pet_grooming")

    settings = Settings()

    assert settings.host == "127.0.0.1"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.openai_api_key == "sk-test"
    assert settings.openai_model == "gpt-4o"
    assert settings.openai_max_tokens == 80
    assert settings.openai_timeout == 7.5
    assert settings.system_prompt_name == "pet_grooming"
    assert settings.api_key_configured is True


def test_reads_dotenv_file(clean_env, tmp_path):
    (tmp_path / ".env").write_text(
        "OPENAI_MODEL=gpt-4o\nCONVERSATION_HISTORY=true\nUNRELATED_SETTING=1\n",
        encoding="utf-8",
    )

    settings = Settings()

    assert settings.openai_model == "gpt-4o"
    assert settings.conversation_history is True


@pytest.mark.parametrize(
    "name, field",
    [
        ("OPENAI_API_KEY", "openai_api_key"),
        ("OPENAI_BASE_URL", "openai_base_url"),
        ("SYSTEM_PROMPT", "system_prompt"),
        ("SYSTEM_PROMPT_FILE", "system_prompt_file"),
    ],
)
@pytest.mark.parametrize("value", ["", "   "])
def test_empty_values_count_as_unset(clean_env, name, field, value):
    clean_env.setenv(name, value)

    assert getattr(Settings(), field) is None


def test_empty_key_is_not_configured(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "")

    assert Settings().api_key_configured is False


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("true", True), ("Yes", True), ("on", True), ("0", False), ("no", False)],
)
def test_conversation_history_flag(clean_env, value, expected):
    clean_env.setenv("CONVERSATION_HISTORY", value)

    assert Settings().conversation_history is expected


@pytest.mark.parametrize(
    "name, value",
    [
        ("PORT", "not-a-port"),
        ("PORT", "70000"),
        ("OPENAI_MAX_TOKENS", "0"),
        ("OPENAI_TIMEOUT", "-1"),
        ("CONVERSATION_HISTORY", "sometimes"),
    ],
)
def test_invalid_values_fail_fast(clean_env, name, value):
    clean_env.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings()
