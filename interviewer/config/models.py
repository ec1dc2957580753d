from dataclasses import dataclass

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_ollama import ChatOllama

from interviewer.config import settings

JSON_MIME_TYPE = "application/json"


@dataclass(frozen=True)
class ModelInvocationConfig:
    """Which model to call and whether it must answer in JSON only."""

    model: str
    json_mode: bool = True
    temperature: float = settings.LLM_Temperature


def default_invocation_config() -> ModelInvocationConfig:
    return ModelInvocationConfig(model=settings.get_model_name())


def get_large_language_model(config: ModelInvocationConfig, credential: str):
    """Build the chat model for the configured provider.

    ``credential`` is the Gemini API key, or the Ollama server URL when
    ``LLM_PROVIDER=ollama``.
    """
    if settings.LLM_PROVIDER == "ollama":
        return ChatOllama(
            model=config.model,
            base_url=credential,
            temperature=config.temperature,
            format="json" if config.json_mode else None,
        )

    return ChatGoogleGenerativeAI(
        model=config.model,
        google_api_key=credential,
        temperature=config.temperature,
        response_mime_type=JSON_MIME_TYPE if config.json_mode else None,
    )
