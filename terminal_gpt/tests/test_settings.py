import pytest

from terminal_gpt.config.settings import API_KEY_ENV_VAR, Settings, load_settings
from terminal_gpt.domain.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (API_KEY_ENV_VAR, "OPENAI_API_KEY", "TERMINAL_GPT_MODEL", "TERMINAL_GPT_CONFIG_FILE"):
        monkeypatch.delenv(name, raising=False)
    # 避免读取到仓库根目录下的 .env / config.yaml
    monkeypatch.chdir(tmp_path)


def test_defaults_without_key():
    settings = load_settings()
    assert settings.openai_api_key is None
    assert settings.model == "gpt-3.5-turbo"
    assert settings.openai_base_url == "https://api.openai.com/v1"
    assert settings.http_timeout == 30.0
    with pytest.raises(ConfigurationError) as exc:
        settings.require_api_key()
    assert exc.value.code == "MISSING_API_KEY"


def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV_VAR, "sk-from-env-123")
    assert load_settings().require_api_key() == "sk-from-env-123"


def test_generic_openai_env_var(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-generic-123")
    assert load_settings().openai_api_key == "sk-generic-123"


def test_short_api_key_rejected(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV_VAR, "short")
    with pytest.raises(ConfigurationError) as exc:
        load_settings()
    assert exc.value.code == "INVALID_CONFIG"


def test_none_overrides_are_ignored(monkeypatch):
    monkeypatch.setenv("TERMINAL_GPT_MODEL", "gpt-4o-mini")
    assert load_settings(model=None).model == "gpt-4o-mini"
    assert load_settings(model="gpt-4o").model == "gpt-4o"


def test_yaml_config_file(monkeypatch, tmp_path):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("model: from-yaml\nsystem_prompt: Be brief\nopenai_api_key: sk-yaml-0123\n", encoding="utf-8")
    monkeypatch.setenv("TERMINAL_GPT_CONFIG_FILE", str(cfg))
    settings = Settings()
    assert settings.model == "from-yaml"
    assert settings.system_prompt == "Be brief"
    assert settings.openai_api_key == "sk-yaml-0123"


def test_env_wins_over_yaml(monkeypatch, tmp_path):
    (tmp_path / "config.yaml").write_text("model: from-yaml\n", encoding="utf-8")
    monkeypatch.setenv("TERMINAL_GPT_MODEL", "from-env")
    assert Settings().model == "from-env"


def test_validation_error_message_is_one_line(monkeypatch):
    monkeypatch.setenv("TERMINAL_GPT_HTTP_TIMEOUT", "0.1")
    with pytest.raises(ConfigurationError) as exc:
        load_settings()
    assert "\n" not in exc.value.message
    assert exc.value.message.startswith("http_timeout: ")
