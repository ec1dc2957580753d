# structured_generator.py
import json
from typing import Any, Callable, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from interviewer.config import settings
from interviewer.config.logging_config import get_logger
from interviewer.config.models import (
    ModelInvocationConfig,
    default_invocation_config,
    get_large_language_model,
)
from interviewer.config.prompts import GENERATION_PROMPT
from interviewer.core.errors import (
    ConfigurationMissing,
    InvalidResponseFormat,
    SchemaMismatch,
    UpstreamFailure,
)

from langchain_core.prompts import PromptTemplate

logger = get_logger("structured_generator")

PromptBuilder = Callable[[Mapping[str, Any]], str]


def compose_prompt(system_prompt: str, user_prompt: str) -> str:
    """The exact text sent to the model for one structured call."""
    return GENERATION_PROMPT.format(system_prompt=system_prompt, user_prompt=user_prompt)


def _response_text(response: Any) -> str:
    content = response.content if hasattr(response, "content") else response
    if isinstance(content, list):
        # Gemini may hand back content blocks instead of a plain string
        content = "".join(
            block.get("text", "") if isinstance(block, dict) else str(block) for block in content
        )
    return str(content)


class StructuredGenerator:
    """
    Turns a request into a validated JSON result by asking a hosted model.

    The credential provider and the model factory are injected so callers
    (and tests) decide where configuration comes from:
      • ``credential_provider()`` is read on every call; ``None`` means the
        provider is not configured and no model client is built.
      • ``llm_factory(config, credential)`` returns a LangChain chat model
        (anything that can be piped after a prompt template).

    One upstream invocation per ``generate`` call. There are no retries;
    a failed call is re-submitted by the user.
    """

    def __init__(
        self,
        credential_provider: Callable[[], Optional[str]] = settings.get_llm_credential,
        llm_factory: Callable[[ModelInvocationConfig, str], Any] = get_large_language_model,
        credential_name: Optional[str] = None,
    ):
        self.credential_provider = credential_provider
        self.llm_factory = llm_factory
        self.credential_name = credential_name or settings.credential_name()

    def _log_and_invoke_llm(self, prompt: PromptTemplate, chain, inputs: dict, purpose: str):
        formatted_prompt = prompt.format_prompt(**inputs).to_string()

        logger.info(f"[StructuredGenerator | _log_and_invoke_llm] --- LLM Request Start --- Purpose: {purpose}")
        logger.debug(f"Formatted Prompt for LLM:\n---\n{formatted_prompt}\n---")

        response = chain.invoke(inputs)

        logger.debug(f"LLM Raw Output: {_response_text(response)}")
        logger.info(f"[StructuredGenerator | _log_and_invoke_llm] --- LLM Request End --- Purpose: {purpose}")
        return response

    def generate(
        self,
        request: Mapping[str, Any],
        prompt_builder: PromptBuilder,
        system_prompt: str,
        model_config: Optional[ModelInvocationConfig] = None,
        schema: Optional[Type[BaseModel]] = None,
        purpose: str = "Structured Generation",
    ) -> Any:
        """
        Build the prompt for ``request``, call the model once in JSON mode and
        return the parsed JSON value.

        Raises ``ConfigurationMissing`` when no credential is configured,
        ``UpstreamFailure`` when the model call fails,
        ``InvalidResponseFormat`` when the answer is not JSON and
        ``SchemaMismatch`` when it does not fit ``schema``.
        """
        logger.info(f"[StructuredGenerator | generate] {purpose} request received.")

        credential = self.credential_provider()
        if not credential:
            logger.error(f"[StructuredGenerator | generate] {self.credential_name} is not set.")
            raise ConfigurationMissing(self.credential_name)

        model_config = model_config or default_invocation_config()
        inputs = {"system_prompt": system_prompt, "user_prompt": prompt_builder(request)}

        try:
            llm = self.llm_factory(model_config, credential)
            chain = GENERATION_PROMPT | llm
            response = self._log_and_invoke_llm(GENERATION_PROMPT, chain, inputs, purpose)
        except Exception as e:
            logger.error(f"[StructuredGenerator | generate] Error during '{purpose}' with model '{model_config.model}': {e}")
            raise UpstreamFailure.from_exception(e) from e

        content = _response_text(response)

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            # The raw text stays in the server log only.
            logger.error(f"[StructuredGenerator | generate] Invalid JSON response for '{purpose}': {content}")
            raise InvalidResponseFormat.from_exception(e, InvalidResponseFormat.default_message) from e

        if schema is not None:
            try:
                schema.model_validate(parsed)
            except ValidationError as e:
                logger.error(
                    f"[StructuredGenerator | generate] Response for '{purpose}' does not match {schema.__name__}: {e}"
                )
                raise SchemaMismatch() from e

        logger.info(f"[StructuredGenerator | generate] {purpose} completed successfully.")
        return parsed
