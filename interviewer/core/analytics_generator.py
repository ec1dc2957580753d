# analytics_generator.py
import asyncio
from functools import partial
from typing import Any, Dict, List, Optional

from interviewer.config.json.schema import Analytics
from interviewer.config.logging_config import get_logger
from interviewer.config.models import ModelInvocationConfig
from interviewer.config.prompts import (
    ANALYTICS_SYSTEM_PROMPT,
    get_interview_analytics_prompt,
    number_questions,
)
from interviewer.core.stores import InterviewStore, ResponseStore
from interviewer.core.structured_generator import StructuredGenerator

logger = get_logger("analytics_generator")


def question_texts(interview: Dict[str, Any]) -> List[str]:
    texts = []
    for item in interview.get("questions") or []:
        text = item.get("question") if isinstance(item, dict) else item
        if text:
            texts.append(str(text))
    return texts


async def generate_interview_analytics(
    call_id: str,
    interview_id: str,
    transcript: Optional[str],
    responses: ResponseStore,
    interviews: InterviewStore,
    generator: StructuredGenerator,
    model_config: Optional[ModelInvocationConfig] = None,
) -> Dict[str, Any]:
    """
    Return ``{"analytics": ..., "status": 200}`` for a finished call, or
    ``{"error": ..., "status": 500}``.

    Analytics already stored on the response are returned as-is and the
    model is not called. Nothing is persisted here; the caller saves the
    result. Two concurrent first requests for the same call can both reach
    the model.
    """
    try:
        response = await responses.get_response_by_call_id(call_id)

        if response.get("analytics") is not None:
            logger.info(f"[Analytics | generate_interview_analytics] Reusing stored analytics for call {call_id}.")
            return {"analytics": response["analytics"], "status": 200}

        interview = await interviews.get_interview_by_id(interview_id)

        interview_transcript = transcript or (response.get("details") or {}).get("transcript") or ""
        questions = question_texts(interview)

        request = {
            "transcript": interview_transcript,
            "main_interview_questions": number_questions(questions),
        }

        loop = asyncio.get_running_loop()
        analytics = await loop.run_in_executor(
            None,
            partial(
                generator.generate,
                request,
                get_interview_analytics_prompt,
                ANALYTICS_SYSTEM_PROMPT,
                model_config=model_config,
                schema=Analytics,
                purpose=f"Generate Interview Analytics ({call_id})",
            ),
        )

        analytics["mainInterviewQuestions"] = questions
        logger.info(f"[Analytics | generate_interview_analytics] Analytics generated for call {call_id}.")
        return {"analytics": analytics, "status": 200}

    except Exception as e:
        logger.error(f"[Analytics | generate_interview_analytics] Error generating analytics for call {call_id}: {e}")
        return {"error": "internal server error", "status": 500}
