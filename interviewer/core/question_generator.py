# question_generator.py
from typing import Any, Mapping, Optional

from interviewer.config.json.schema import QuestionSet
from interviewer.config.models import ModelInvocationConfig
from interviewer.config.prompts import QUESTIONS_SYSTEM_PROMPT, generate_questions_prompt
from interviewer.core.structured_generator import StructuredGenerator


def generate_interview_questions(
    body: Mapping[str, Any],
    generator: StructuredGenerator,
    model_config: Optional[ModelInvocationConfig] = None,
) -> Any:
    """Ask the model for interview questions for the job described in ``body``.

    Returns the parsed JSON as the model produced it (a list of questions or
    a ``{"questions": [...], "description": ...}`` object).
    """
    return generator.generate(
        body,
        generate_questions_prompt,
        QUESTIONS_SYSTEM_PROMPT,
        model_config=model_config,
        schema=QuestionSet,
        purpose="Generate Interview Questions",
    )
