import os
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).parent.parent.parent

load_dotenv(ROOT_DIR / ".env", override=False)


DATA_DIR = Path(os.getenv("INTERVIEWER_DATA_DIR", ROOT_DIR / "data"))
RESPONSES_DIR = DATA_DIR / "responses"
INTERVIEWS_DIR = DATA_DIR / "interviews"

LOGS_DIR = Path(os.getenv("INTERVIEWER_LOG_DIR", ROOT_DIR / "logs"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE_MAX_BYTES = int(os.getenv("LOG_FILE_MAX_BYTES", str(15 * 1024 * 1024)))
LOG_FILE_BACKUPS = int(os.getenv("LOG_FILE_BACKUPS", "5"))

# "gemini" (hosted, needs GEMINI_API_KEY) or "ollama" (self-hosted, needs OLLAMA_SERVER_URL)
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").lower()

LargeLanguageModel_NAME = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
OllamaModel_NAME = os.getenv("OLLAMA_MODEL", "gpt-oss:20b")

LLM_Temperature = float(os.getenv("LLM_TEMPERATURE", "0.2"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:3001").split(",")
    if origin.strip()
]


def get_gemini_api_key() -> str | None:
    """Read the Gemini credential at call time so rotated keys are picked up."""
    return os.getenv("GEMINI_API_KEY") or None


def get_ollama_server_url() -> str | None:
    return os.getenv("OLLAMA_SERVER_URL") or None


def credential_name(provider: str | None = None) -> str:
    provider = provider or LLM_PROVIDER
    return "OLLAMA_SERVER_URL" if provider == "ollama" else "GEMINI_API_KEY"


def get_llm_credential() -> str | None:
    """The one required secret/endpoint for the configured provider."""
    if LLM_PROVIDER == "ollama":
        return get_ollama_server_url()
    return get_gemini_api_key()


def get_model_name() -> str:
    if LLM_PROVIDER == "ollama":
        return OllamaModel_NAME
    return LargeLanguageModel_NAME


def is_production() -> bool:
    return os.getenv("APP_ENV", "development").lower() == "production"
