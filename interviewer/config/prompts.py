# prompts.py
""" Central repository for all large language model prompt templates. """

from typing import Any, Dict, Iterable, Mapping

from langchain_core.prompts import PromptTemplate

from interviewer.config.json.schema import (
    JSON_ANALYTICS_SCHEMA,
    JSON_QUESTIONS_SCHEMA,
    schema_as_text,
)

JSON_ONLY_SUFFIX = "Please respond with valid JSON only."

# Every structured call goes through this wrapper: system prompt, the call
# site's instruction, then the JSON-only reminder.
GENERATION_PROMPT = PromptTemplate.from_template(
    "{system_prompt}\n\n{user_prompt}\n\n" + JSON_ONLY_SUFFIX
)

DEFAULT_QUESTION_COUNT = 5

# -----------------------------------------------------------------
# Question Generation Prompts
# -----------------------------------------------------------------

QUESTIONS_SYSTEM_PROMPT = (
    "You are an expert in coming up with follow up questions to uncover deeper insights."
)

QUESTIONS_PROMPT = PromptTemplate.from_template(
    """Imagine you are an interviewer specialized in designing interview questions to help hiring managers find candidates with strong technical expertise and project experience, making it easier to identify the ideal fit for the role.

Interview Title: {name}
Interview Objective: {objective}
Number of questions to be generated: {number}
Question types to cover: {question_types}

Follow these detailed guidelines when crafting the questions:
- Focus on evaluating the candidate's technical knowledge and their experience working on relevant projects. Questions should aim to gauge depth of expertise, problem-solving ability, and hands-on project experience. These aspects carry the most weight.
- Include questions designed to assess problem-solving skills through practical examples. For instance, how the candidate has tackled challenges in previous projects, and their approach to complex technical issues.
- Soft skills such as communication, teamwork, and adaptability should be addressed, but given less emphasis compared to technical and problem-solving abilities.
- Maintain a professional yet approachable tone, ensuring candidates feel comfortable while demonstrating their knowledge.
- Ask concise and precise open-ended questions that encourage detailed responses. Each question should be 30 words or less for clarity.

Use the following context to generate the questions:
{context}

Moreover generate a 50 word or less second-person description about the interview to be shown to the user. It should be in the field 'description'.
Do not use the exact objective in the description. Remember that some details are not be shown to the user. It should be a small description for the user to understand what the content of the interview would be. Make sure it is clear to the respondent who's taking the interview.

The field 'questions' should take the format of an array of objects with the following key: question.

Strictly output only a JSON object that matches this schema:
{schema}"""
)


def _first(body: Mapping[str, Any], *keys: str, default: Any = "") -> Any:
    for key in keys:
        value = body.get(key)
        if value not in (None, ""):
            return value
    return default


def generate_questions_prompt(body: Mapping[str, Any]) -> str:
    """Fill the question template from a free-form job-context payload."""
    question_types = _first(body, "questionTypes", "question_types", default=None)
    if isinstance(question_types, (list, tuple)):
        question_types = ", ".join(str(t) for t in question_types)

    return QUESTIONS_PROMPT.format(
        name=_first(body, "name", "jobTitle", "job_title", default="Untitled interview"),
        objective=_first(body, "objective", "description", default="Not specified"),
        number=_first(body, "number", "questionCount", "question_count", default=DEFAULT_QUESTION_COUNT),
        question_types=question_types or "technical, problem-solving and behavioral",
        context=_first(body, "context", "description", default="No additional context provided."),
        schema=schema_as_text(JSON_QUESTIONS_SCHEMA),
    )


# -----------------------------------------------------------------
# Analytics Prompts
# -----------------------------------------------------------------

ANALYTICS_SYSTEM_PROMPT = (
    "You are an expert in analyzing interview transcripts. You must only use the main questions provided and not generate or infer additional questions."
)

ANALYTICS_PROMPT = PromptTemplate.from_template(
    """Analyse the following interview transcript and provide structured feedback:

###
Transcript: {transcript}

Main Interview Questions:
{main_interview_questions}


Based on this transcript and the provided main interview questions, generate the following analytics in JSON format:
1. Overall Score (0-100) and Overall Feedback (60 words) - take into account the following factors:
   - Communication Skills: Evaluate the use of language, grammar, and vocabulary. Assess if the interviewee communicated effectively and clearly.
   - Time Taken to Answer: Consider if the interviewee answered promptly or took too long. Note if they were concise or tended to ramble.
   - Confidence: Assess the interviewee's confidence level. Were they assertive and self-assured, or did they seem hesitant and unsure?
   - Clarity: Evaluate the clarity of their answers. Were their responses well-structured and easy to understand?
   - Attitude: Consider the interviewee's attitude towards the interview and questions. Were they positive, respectful, and engaged?
   - Relevance of Answers: Determine if the interviewee's answers are relevant to the questions asked. Assess if they stayed on topic or veered off track.
   - Depth of Knowledge: Evaluate the interviewee's depth of understanding and knowledge in the subject matter. Look for detailed and insightful answers.
   - Problem-Solving Ability: Consider how the interviewee approaches problem-solving questions. Assess their logical reasoning and analytical skills.
   - Examples and Evidence: Note if the interviewee provides concrete examples or evidence to support their answers.
   - Listening Skills: Assess if the interviewee listened carefully to the questions and responded appropriately.
   - Consistency: Evaluate if the interviewee's answers are consistent throughout the interview or if they contradict themselves.
   - Adaptability: Assess how well the interviewee adapted to different types of questions.
2. Communication Skills: Score (0-10) and Feedback (60 words). Rating system and guidelines for communication skills assessment are as follows:
    - 10: Fully operational command, use of English is appropriate, accurate, fluent, shows complete understanding.
    - 09: Fully operational command with occasional inaccuracies and inappropriate usage. May misunderstand unfamiliar situations but handles complex arguments well.
    - 08: Operational command with occasional inaccuracies and inappropriate usage. Handles complex language generally well and understands detailed reasoning.
    - 07: Effective command despite some inaccuracies and misunderstandings. Can use and understand reasonably complex language, especially in familiar situations.
    - 06: Partial command, copes with overall meaning in most situations, though likely to make many mistakes. Handles basic communication in own field.
    - 05: Basic competence limited to familiar situations. Frequent problems in understanding and expression. Cannot use complex language.
    - 04: Conveys and understands only general meaning in very familiar situations. Frequent breakdowns in communication.
    - 03: Has great difficulty understanding spoken English.
    - 02: Has no ability to use the language except a few isolated words.
    - 01: Did not answer the questions.
3. Summary for each main interview question: {main_interview_questions}
    - Use ONLY the main questions provided, it should output all the questions with the numbers even if it's not found in the transcript.
    - Follow the transcript to generate a summary for each question.
    - If the question is not answered, return "Not Asked" for that question.
    - If the question is answered, return a summary (100 words max) of the answer.
4. Create a 10 to 15 words summary regarding the soft skills considering factors such as confidence, leadership, adaptability, critical thinking and decision making.

Ensure the output is in valid JSON format with the following structure:
{{
  "overallScore": number,
  "overallFeedback": string,
  "communication": {{ "score": number, "feedback": string }},
  "questionSummaries": [{{ "question": string, "summary": string }}],
  "softSkillSummary": string
}}

IMPORTANT: Only use the main questions provided. Do not generate or infer additional questions such as follow-up questions.

Full schema for reference:
{schema}"""
)


def number_questions(questions: Iterable[str]) -> str:
    """Render questions as ``1. first\\n2. second``."""
    return "\n".join(f"{index}. {question}" for index, question in enumerate(questions, start=1))


def get_interview_analytics_prompt(request: Dict[str, Any]) -> str:
    return ANALYTICS_PROMPT.format(
        transcript=request.get("transcript") or "",
        main_interview_questions=request.get("main_interview_questions") or "",
        schema=schema_as_text(JSON_ANALYTICS_SCHEMA),
    )
