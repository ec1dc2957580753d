from typing import Any, List

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage
from langchain_core.runnables import RunnableLambda

from interviewer.config import settings
from interviewer.core.stores import InterviewStore, ResponseStore
from interviewer.core.structured_generator import StructuredGenerator


class FakeModelFactory:
    """Stands in for ``get_large_language_model``.

    Each built model answers with the next queued output (or raises it when
    the output is an exception) and records the prompt it was given.
    """

    def __init__(self, *outputs: Any) -> None:
        self.outputs: List[Any] = list(outputs)
        self.prompts: List[str] = []
        self.configs: List[Any] = []

    def __call__(self, config: Any, credential: str) -> RunnableLambda:
        self.configs.append((config, credential))
        return RunnableLambda(self._respond)

    def _respond(self, prompt_value: Any) -> AIMessage:
        self.prompts.append(prompt_value.to_string())
        output = self.outputs.pop(0)
        if isinstance(output, Exception):
            raise output
        return AIMessage(content=output)

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture(autouse=True)
def _gemini_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against the Gemini provider with a test key in development mode."""

    monkeypatch.setattr(settings, "LLM_PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("APP_ENV", "development")
    yield


@pytest.fixture
def response_store(tmp_path) -> ResponseStore:
    return ResponseStore(tmp_path / "responses")


@pytest.fixture
def interview_store(tmp_path) -> InterviewStore:
    return InterviewStore(tmp_path / "interviews")


@pytest.fixture
def make_generator():
    def _make(*outputs: Any, credential: str | None = "test-key"):
        factory = FakeModelFactory(*outputs)
        generator = StructuredGenerator(credential_provider=lambda: credential, llm_factory=factory)
        return generator, factory

    return _make


@pytest.fixture
def model_factory():
    return FakeModelFactory


@pytest.fixture
def api(response_store, interview_store):
    """TestClient whose stores live in tmp_path.

    ``api.use_model(*outputs)`` swaps in a fake model and returns its factory;
    ``api.generator`` can also be replaced directly.
    """

    import main

    client = TestClient(main.app)
    client.generator = StructuredGenerator(credential_provider=lambda: None)

    def use_model(*outputs: Any) -> FakeModelFactory:
        factory = FakeModelFactory(*outputs)
        client.generator = StructuredGenerator(credential_provider=lambda: "test-key", llm_factory=factory)
        return factory

    client.use_model = use_model

    main.app.dependency_overrides[main.get_response_store] = lambda: response_store
    main.app.dependency_overrides[main.get_interview_store] = lambda: interview_store
    main.app.dependency_overrides[main.get_generator] = lambda: client.generator
    yield client
    main.app.dependency_overrides.clear()
