import json
import logging

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage

from interviewer.config.json.schema import Analytics, QuestionSet
from interviewer.config.models import ModelInvocationConfig
from interviewer.config.prompts import JSON_ONLY_SUFFIX
from interviewer.core.errors import (
    ConfigurationMissing,
    InvalidResponseFormat,
    SchemaMismatch,
    UpstreamFailure,
)
from interviewer.core.structured_generator import StructuredGenerator, compose_prompt

SYSTEM = "You are a careful assistant."


def _builder(request):
    return f"List {request['count']} questions about {request['topic']}."


def test_compose_prompt_orders_system_request_and_json_suffix() -> None:
    prompt = compose_prompt(SYSTEM, "Do the thing.")
    assert prompt == f"{SYSTEM}\n\nDo the thing.\n\n{JSON_ONLY_SUFFIX}"


@pytest.mark.parametrize(
    "request_payload",
    [
        {"count": 3, "topic": "Python"},
        {"count": 0, "topic": "{braces} and \"quotes\""},
        {"count": 10, "topic": ""},
    ],
)
def test_generate_sends_composed_prompt(make_generator, request_payload) -> None:
    generator, factory = make_generator('{"ok": true}')

    generator.generate(request_payload, _builder, SYSTEM)

    sent = factory.prompts[0]
    instruction = _builder(request_payload)
    assert sent.index(SYSTEM) < sent.index(instruction) < sent.index(JSON_ONLY_SUFFIX)
    assert sent.endswith(JSON_ONLY_SUFFIX)


def test_generate_returns_parsed_json(make_generator) -> None:
    generator, factory = make_generator('["Q1", "Q2"]')

    result = generator.generate({"count": 2, "topic": "SQL"}, _builder, SYSTEM, schema=QuestionSet)

    assert result == ["Q1", "Q2"]
    assert factory.calls == 1


def test_generate_passes_model_config_and_credential(make_generator) -> None:
    generator, factory = make_generator("{}")
    config = ModelInvocationConfig(model="gemini-test", json_mode=True, temperature=0.0)

    generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM, model_config=config)

    assert factory.configs == [(config, "test-key")]


def test_missing_credential_skips_model(make_generator) -> None:
    generator, factory = make_generator('{"unused": true}', credential=None)

    with pytest.raises(ConfigurationMissing) as excinfo:
        generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM)

    assert excinfo.value.message == "GEMINI_API_KEY is not configured"
    assert factory.configs == []
    assert factory.calls == 0


def test_missing_credential_reads_environment_at_call_time(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    generator = StructuredGenerator(llm_factory=lambda config, key: calls.append(key))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(ConfigurationMissing):
        generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM)

    assert calls == []


def test_invalid_json_raises_and_logs_raw_text(make_generator, caplog: pytest.LogCaptureFixture) -> None:
    raw = 'Sure! Here\'s your JSON: {"questions": []}'
    generator, _ = make_generator(raw)

    with caplog.at_level(logging.ERROR, logger="structured_generator"):
        with pytest.raises(InvalidResponseFormat) as excinfo:
            generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM)

    assert excinfo.value.message == "Invalid response format from AI"
    assert raw not in excinfo.value.message
    assert raw not in excinfo.value.to_payload(include_details=True).get("details", "")
    assert raw in caplog.text


def test_upstream_error_message_is_passed_through(make_generator) -> None:
    generator, factory = make_generator(RuntimeError("429 Resource has been exhausted"))

    with pytest.raises(UpstreamFailure) as excinfo:
        generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM)

    assert excinfo.value.message == "429 Resource has been exhausted"
    assert "RuntimeError" in excinfo.value.trace
    assert factory.calls == 1


def test_upstream_failure_is_not_retried(make_generator) -> None:
    generator, factory = make_generator(ConnectionError("connection reset"), '{"never": "used"}')

    with pytest.raises(UpstreamFailure):
        generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM)

    assert factory.calls == 1
    assert factory.outputs == ['{"never": "used"}']


def test_schema_mismatch(make_generator) -> None:
    generator, _ = make_generator(json.dumps([{"overallScore": 80}]))

    with pytest.raises(SchemaMismatch) as excinfo:
        generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM, schema=Analytics)

    assert excinfo.value.to_payload(include_details=True) == {
        "error": "AI response did not match the expected format"
    }


def test_analytics_schema_allows_unknown_fields(make_generator) -> None:
    payload = {"overallScore": 72, "communication": {"score": 7, "feedback": "Clear"}, "extra": [1, 2]}
    generator, _ = make_generator(json.dumps(payload))

    assert generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM, schema=Analytics) == payload


def test_content_blocks_are_joined() -> None:
    def _block_model(prompt_value):
        return AIMessage(content=[{"type": "text", "text": '{"a": '}, {"type": "text", "text": "1}"}])

    generator = StructuredGenerator(credential_provider=lambda: "key", llm_factory=lambda c, k: _block_model)

    assert generator.generate({"count": 1, "topic": "Go"}, _builder, SYSTEM) == {"a": 1}


def test_works_with_langchain_fake_chat_model() -> None:
    model = FakeListChatModel(responses=['{"questions": [{"question": "Why Python?"}], "description": "Short"}'])
    generator = StructuredGenerator(credential_provider=lambda: "key", llm_factory=lambda c, k: model)

    result = generator.generate({"count": 1, "topic": "Python"}, _builder, SYSTEM, schema=QuestionSet)

    assert result["questions"][0]["question"] == "Why Python?"
