"""Expected shapes of the JSON the model returns at each call site.

The pydantic models are used to validate a parsed response; the JSON schema
dicts derived from them are embedded in the prompts so the model knows what
to produce.
"""

import json
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel


class Question(BaseModel):
    model_config = ConfigDict(extra="allow")

    question: str = Field(..., description="The interview question, phrased as asked to the candidate.")


class QuestionEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    questions: List[Union[Question, str]] = Field(..., description="Ordered list of interview questions.")
    description: Optional[str] = Field(None, description="A short, candidate-facing summary of the interview.")


class QuestionSet(RootModel):
    """Either a bare list of questions or ``{"questions": [...], "description": ...}``."""

    root: Union[QuestionEnvelope, List[Union[Question, str]]]


class ScoredFeedback(BaseModel):
    model_config = ConfigDict(extra="allow")

    score: Optional[float] = Field(None, ge=0, le=10, description="Score out of 10.")
    feedback: Optional[str] = None


class QuestionSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    question: str
    summary: str


class Analytics(BaseModel):
    """Post-interview analytics. Every field is optional; unknown fields pass through."""

    model_config = ConfigDict(extra="allow")

    overallScore: Optional[float] = Field(None, ge=0, le=100, description="Overall hiring score out of 100.")
    overallFeedback: Optional[str] = None
    communication: Optional[ScoredFeedback] = None
    generalIntelligence: Optional[str] = None
    softSkillSummary: Optional[str] = None
    questionSummaries: Optional[List[QuestionSummary]] = None


JSON_QUESTIONS_SCHEMA = QuestionEnvelope.model_json_schema()
JSON_ANALYTICS_SCHEMA = Analytics.model_json_schema()


def schema_as_text(schema: dict) -> str:
    return json.dumps(schema, indent=2)
