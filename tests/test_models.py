import pytest
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_ollama import ChatOllama

from interviewer.config import models, settings
from interviewer.config.models import ModelInvocationConfig, default_invocation_config, get_large_language_model


def test_gemini_model_requests_json_output() -> None:
    llm = get_large_language_model(ModelInvocationConfig(model="gemini-2.0-flash"), "test-key")

    assert isinstance(llm, ChatGoogleGenerativeAI)
    assert llm.response_mime_type == models.JSON_MIME_TYPE


def test_gemini_model_without_json_mode() -> None:
    llm = get_large_language_model(ModelInvocationConfig(model="gemini-2.0-flash", json_mode=False), "test-key")

    assert llm.response_mime_type is None


def test_ollama_model_uses_server_url_and_json_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "LLM_PROVIDER", "ollama")

    llm = get_large_language_model(ModelInvocationConfig(model="gpt-oss:20b"), "http://ollama.local:11434")

    assert isinstance(llm, ChatOllama)
    assert llm.base_url == "http://ollama.local:11434"
    assert llm.format == "json"


def test_credential_follows_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OLLAMA_SERVER_URL", "http://ollama.local:11434")
    assert settings.get_llm_credential() == "test-key"
    assert settings.credential_name() == "GEMINI_API_KEY"

    monkeypatch.setattr(settings, "LLM_PROVIDER", "ollama")
    assert settings.get_llm_credential() == "http://ollama.local:11434"
    assert settings.credential_name() == "OLLAMA_SERVER_URL"
    assert default_invocation_config().model == settings.OllamaModel_NAME


def test_production_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    assert settings.is_production() is False
    monkeypatch.setenv("APP_ENV", "Production")
    assert settings.is_production() is True
