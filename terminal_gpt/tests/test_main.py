import io

import httpx

from conftest import reply_body
from terminal_gpt import __main__ as entry
from terminal_gpt.config.settings import API_KEY_ENV_VAR
from terminal_gpt.providers.openai_client import OpenAIClient


def _prepare_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("TERMINAL_GPT_LOG_DIR", str(tmp_path / "logs"))


def test_missing_credential_is_fatal(monkeypatch, tmp_path, capsys):
    _prepare_env(monkeypatch, tmp_path)
    assert entry.main([]) == 1
    captured = capsys.readouterr()
    assert "OPENAI_API_KEY_RUSTPROJECT not set" in captured.err
    assert captured.out == ""


def test_invalid_base_url_is_fatal(monkeypatch, tmp_path, capsys):
    _prepare_env(monkeypatch, tmp_path)
    monkeypatch.setenv(API_KEY_ENV_VAR, "sk-test-key-123")
    assert entry.main(["--base-url", "ftp://example.com"]) == 1
    assert "Invalid URL" in capsys.readouterr().err


def test_full_session(monkeypatch, tmp_path, capsys):
    _prepare_env(monkeypatch, tmp_path)
    monkeypatch.setenv(API_KEY_ENV_VAR, "sk-test-key-123")
    requests = []

    def handler(request):
        requests.append(request)
        if len(requests) == 1:
            return httpx.Response(429)
        return httpx.Response(200, json=reply_body("hello"))

    monkeypatch.setattr(
        entry,
        "create_provider",
        lambda settings: OpenAIClient(settings, transport=httpx.MockTransport(handler)),
    )
    monkeypatch.setattr("sys.stdin", io.StringIO("first\nsecond\nEXIT\n"))

    assert entry.main(["--model", "gpt-4o-mini", "--system-prompt", "Be brief"]) == 0

    captured = capsys.readouterr()
    assert captured.out.startswith("Let's go. (Quit by typing exit.)")
    assert "\n-->GPT: hello\n" in captured.out
    assert captured.err.strip() == "Server responded with status: 429 Too Many Requests"
    assert len(requests) == 2
    assert b'"model": "gpt-4o-mini"' in requests[1].content
    assert b'"content": "Be brief"' in requests[1].content
    assert (tmp_path / "logs" / "terminal_gpt.log").exists()


def test_unwritable_log_dir_is_fatal(monkeypatch, tmp_path, capsys):
    _prepare_env(monkeypatch, tmp_path)
    monkeypatch.setenv(API_KEY_ENV_VAR, "sk-test-key-123")
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setenv("TERMINAL_GPT_LOG_DIR", str(blocker / "logs"))

    assert entry.main([]) == 1
    err = capsys.readouterr().err
    assert len(err.splitlines()) == 1
    assert err.startswith("Startup failed: Cannot open log file")


def test_invalid_setting_prints_single_line(monkeypatch, tmp_path, capsys):
    _prepare_env(monkeypatch, tmp_path)
    monkeypatch.setenv(API_KEY_ENV_VAR, "short")

    assert entry.main([]) == 1
    err = capsys.readouterr().err
    assert len(err.splitlines()) == 1
    assert "API key seems too short" in err
    assert "errors.pydantic.dev" not in err
