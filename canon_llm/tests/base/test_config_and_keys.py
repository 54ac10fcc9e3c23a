import json

import pytest

from canon_llm.base.errors import InvalidParameter
from canon_llm.base.dto.request_options import RequestOptions
from canon_llm.base.models import Model
from canon_llm.base.repositories import KeysRepository, ModelRegistry, resolve_secret
from canon_llm.config import CONFIG_FILE_ENV, get_provider_config, reset_config_cache
from canon_llm.config.env import get_env_var_candidates, is_placeholder, resolve_provider_key


def test_defaults_only():
    cfg = get_provider_config("anthropic")
    assert cfg["base_url"] == "https://api.anthropic.com/v1"  # nosec B101
    assert cfg["api_version"] == "2023-06-01"  # nosec B101
    assert cfg["max_tokens"] == 4096  # nosec B101
    assert get_provider_config("unknown") == {}  # nosec B101


def test_merge_order_file_then_env_then_overrides(tmp_path, monkeypatch):
    path = tmp_path / "canon.yaml"
    path.write_text(
        "openai:\n  base_url: https://file.example/v1\n  organization: org-file\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    reset_config_cache()
    assert get_provider_config("openai")["base_url"] == "https://file.example/v1"  # nosec B101

    monkeypatch.setenv("OPENAI_BASE_URL", "https://env.example/v1")
    cfg = get_provider_config("openai")
    assert cfg["base_url"] == "https://env.example/v1"  # nosec B101
    assert cfg["organization"] == "org-file"  # nosec B101

    cfg = get_provider_config("openai", {"base_url": "https://override.example/v1", "organization": None})
    assert cfg["base_url"] == "https://override.example/v1"  # nosec B101
    assert cfg["organization"] == "org-file"  # nosec B101


def test_json_config_file_is_cached_until_reset(tmp_path, monkeypatch):
    path = tmp_path / "canon.json"
    path.write_text(json.dumps({"anthropic": {"max_tokens": 8192}}), encoding="utf-8")
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    reset_config_cache()
    assert get_provider_config("anthropic")["max_tokens"] == 8192  # nosec B101

    path.write_text(json.dumps({"anthropic": {"max_tokens": 1024}}), encoding="utf-8")
    assert get_provider_config("anthropic")["max_tokens"] == 8192  # nosec B101
    reset_config_cache()
    assert get_provider_config("anthropic")["max_tokens"] == 1024  # nosec B101


def test_missing_config_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "absent.yaml"))
    reset_config_cache()
    assert get_provider_config("openai")["base_url"] == "https://api.openai.com/v1"  # nosec B101


def test_placeholder_detection():
    assert is_placeholder("your_api_key_here")  # nosec B101
    assert is_placeholder("CHANGEME")  # nosec B101
    assert not is_placeholder("sk-live-123")  # nosec B101
    assert not is_placeholder(None)  # nosec B101


def test_env_aliases(monkeypatch):
    assert list(get_env_var_candidates("anthropic")) == ["ANTHROPIC_API_KEY", "CLAUDE_API_KEY"]  # nosec B101
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-alias")  # pragma: allowlist secret
    assert resolve_provider_key("anthropic") == ("sk-ant-alias", "CLAUDE_API_KEY")  # nosec B101
    assert resolve_provider_key("nobody") == (None, None)  # nosec B101


def test_key_resolution_priority(monkeypatch):
    repo = KeysRepository()
    assert repo.get_resolution("openai").source == "none"  # nosec B101

    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")  # pragma: allowlist secret
    res = repo.get_resolution("openai")
    assert (res.api_key, res.source) == ("sk-env", "config")  # nosec B101

    res = repo.get_resolution("openai", explicit="sk-option")  # pragma: allowlist secret
    assert (res.api_key, res.source) == ("sk-option", "option")  # nosec B101

    res = repo.get_resolution("openai", explicit="your_key")
    assert res.api_key == "sk-env"  # nosec B101


def test_alias_only_key_resolves_from_env(monkeypatch):
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-alias")  # pragma: allowlist secret
    res = KeysRepository().get_resolution("anthropic")
    assert (res.api_key, res.source) == ("sk-ant-alias", "env")  # nosec B101
    assert res.extra == {"env_var": "CLAUDE_API_KEY"}  # nosec B101


def test_resolve_secret_missing_raises_invalid_parameter():
    model = Model.from_spec("openai:gpt-4o-mini")
    with pytest.raises(InvalidParameter) as excinfo:
        resolve_secret(model, RequestOptions.parse({}))
    assert "api_key" in excinfo.value.parameter  # nosec B101
    assert excinfo.value.provider == "openai"  # nosec B101


def test_resolve_secret_prefers_option():
    model = Model.from_spec("anthropic:claude-3-5-sonnet-20241022")
    opts = RequestOptions.parse({"api_key": "sk-ant-opt"})  # pragma: allowlist secret
    assert resolve_secret(model, opts) == "sk-ant-opt"  # nosec B101


def test_registry_lookups(registry):
    assert registry.exists("openai", "gpt-4o-mini")  # nosec B101
    assert not registry.exists("openai", "gpt-nope")  # nosec B101
    assert registry.providers() == frozenset({"openai", "anthropic"})  # nosec B101
    model = Model.from_spec("anthropic:claude-3-5-sonnet-20241022")
    assert registry.require(model) is model  # nosec B101
    with pytest.raises(InvalidParameter) as excinfo:
        registry.require(Model.from_spec("openai:gpt-nope"))
    assert excinfo.value.parameter == "model: gpt-nope"  # nosec B101


def test_registry_from_config_adds_file_models(tmp_path, monkeypatch):
    path = tmp_path / "canon.yaml"
    path.write_text("anthropic:\n  models:\n    - claude-custom\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    reset_config_cache()
    reg = ModelRegistry.from_config()
    assert reg.exists("anthropic", "claude-custom")  # nosec B101
    assert reg.exists("anthropic", "claude-3-5-sonnet-20241022")  # nosec B101
