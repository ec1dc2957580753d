# main.py
import asyncio
from functools import partial
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field


# -------------------------------------------------------------
# Logging (once at start)
# -------------------------------------------------------------
from interviewer.config.logging_config import setup_base_logging, get_logger

setup_base_logging()
logger = get_logger("api")

from interviewer.config import settings
from interviewer.core.analytics_generator import generate_interview_analytics
from interviewer.core.errors import (
    DuplicateResponse,
    GenerationError,
    InterviewNotFound,
    ResponseNotFound,
)
from interviewer.core.question_generator import generate_interview_questions
from interviewer.core.stores import CandidateStatus, InterviewStore, ResponseStore
from interviewer.core.structured_generator import StructuredGenerator
from interviewer.core.transcript import format_transcript


# -------------------------------------------------------------
# FastAPI app
# -------------------------------------------------------------
app = FastAPI(title="Interviewer API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------------------------------
# Collaborators (overridable through app.dependency_overrides)
# -------------------------------------------------------------
def get_generator() -> StructuredGenerator:
    return StructuredGenerator()


def get_response_store() -> ResponseStore:
    return ResponseStore(settings.RESPONSES_DIR)


def get_interview_store() -> InterviewStore:
    return InterviewStore(settings.INTERVIEWS_DIR)


# -------------------------------------------------------------
# Request bodies
# -------------------------------------------------------------
class InterviewQuestion(BaseModel):
    model_config = ConfigDict(extra="allow")

    question: str


class CreateInterviewRequest(BaseModel):
    name: str
    objective: str = ""
    description: str = ""
    questions: List[InterviewQuestion] = Field(default_factory=list)


class AnalyticsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    call_id: str = Field(..., alias="callId")
    interview_id: str = Field(..., alias="interviewId")
    transcript: Optional[str] = ""


class GetCallRequest(BaseModel):
    id: str


class RecordResponseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    call_id: str = Field(..., alias="callId")
    interview_id: str = Field(..., alias="interviewId")
    name: str = ""
    email: str = ""
    transcript: str = ""
    tab_switch_count: int = Field(0, alias="tabSwitchCount", ge=0)


class UpdateResponseRequest(BaseModel):
    candidate_status: CandidateStatus


# -------------------------------------------------------------
# Health‑check
# -------------------------------------------------------------
@app.get("/ping")
async def ping():
    return {"msg": "pong"}


# -------------------------------------------------------------
# ①  Question generation
# -------------------------------------------------------------
@app.post("/api/generate-interview-questions")
async def generate_interview_questions_endpoint(
    body: Dict[str, Any] = Body(...),
    generator: StructuredGenerator = Depends(get_generator),
):
    logger.info("generate-interview-questions request received")

    loop = asyncio.get_running_loop()
    try:
        questions = await loop.run_in_executor(None, partial(generate_interview_questions, body, generator))
    except GenerationError as exc:
        logger.error(f"❌ Error generating interview questions: {exc.message}")
        return JSONResponse(
            exc.to_payload(include_details=not settings.is_production()),
            status_code=exc.status_code,
        )
    except Exception as exc:
        logger.exception("❌ Unexpected error generating interview questions")
        payload = GenerationError.from_exception(exc).to_payload(include_details=not settings.is_production())
        return JSONResponse(payload, status_code=500)

    logger.info("✅ Interview questions generated successfully")
    return JSONResponse({"response": questions}, status_code=200)


# -------------------------------------------------------------
# ②  Analytics generation
# -------------------------------------------------------------
@app.post("/api/analytics")
async def generate_analytics_endpoint(
    payload: AnalyticsRequest,
    responses: ResponseStore = Depends(get_response_store),
    interviews: InterviewStore = Depends(get_interview_store),
    generator: StructuredGenerator = Depends(get_generator),
):
    logger.info(f"🔍 Analytics requested for call: {payload.call_id}")
    result = await generate_interview_analytics(
        payload.call_id,
        payload.interview_id,
        payload.transcript,
        responses,
        interviews,
        generator,
    )
    return JSONResponse(result, status_code=result["status"])


# -------------------------------------------------------------
# ③  Call details + analytics (used by the call view)
# -------------------------------------------------------------
@app.post("/api/get-call")
async def get_call(
    payload: GetCallRequest,
    responses: ResponseStore = Depends(get_response_store),
    interviews: InterviewStore = Depends(get_interview_store),
    generator: StructuredGenerator = Depends(get_generator),
):
    """
    Returns the stored call together with its analytics.
    Analytics are generated on first view and saved on the response, so
    later views read them back without calling the model.
    """
    try:
        call = await responses.get_response_by_call_id(payload.id)
    except ResponseNotFound:
        raise HTTPException(status_code=404, detail="Call not found")

    analytics = call.get("analytics")
    if analytics is None:
        result = await generate_interview_analytics(
            payload.id,
            call.get("interview_id", ""),
            (call.get("details") or {}).get("transcript", ""),
            responses,
            interviews,
            generator,
        )
        if result["status"] != 200:
            return JSONResponse({"error": result["error"]}, status_code=result["status"])

        analytics = result["analytics"]
        call = await responses.update_response({"analytics": analytics, "is_analysed": True}, payload.id)
        logger.info(f"📝 Analytics stored for call: {payload.id}")

    return JSONResponse(
        {
            "callResponse": call,
            "analytics": analytics,
            "transcript": format_transcript((call.get("details") or {}).get("transcript", ""), call.get("name", "")),
        }
    )


# -------------------------------------------------------------
# ④  Interviews
# -------------------------------------------------------------
@app.post("/api/interviews", status_code=201)
async def create_interview(
    payload: CreateInterviewRequest,
    interviews: InterviewStore = Depends(get_interview_store),
):
    return await interviews.create_interview(payload.model_dump())


@app.get("/api/interviews/{interview_id}")
async def get_interview(interview_id: str, interviews: InterviewStore = Depends(get_interview_store)):
    try:
        return await interviews.get_interview_by_id(interview_id)
    except InterviewNotFound:
        raise HTTPException(status_code=404, detail="Interview not found")


@app.get("/api/interviews/{interview_id}/responses")
async def list_interview_responses(interview_id: str, responses: ResponseStore = Depends(get_response_store)):
    return await responses.get_all_responses(interview_id)


# -------------------------------------------------------------
# ⑤  Call responses (transcripts)
# -------------------------------------------------------------
@app.post("/api/responses", status_code=201)
async def record_response(
    payload: RecordResponseRequest,
    responses: ResponseStore = Depends(get_response_store),
    interviews: InterviewStore = Depends(get_interview_store),
):
    try:
        await interviews.get_interview_by_id(payload.interview_id)
    except InterviewNotFound:
        raise HTTPException(status_code=404, detail="Interview not found")

    try:
        return await responses.create_response(
            {
                "call_id": payload.call_id,
                "interview_id": payload.interview_id,
                "name": payload.name,
                "email": payload.email,
                "details": {"transcript": payload.transcript},
                "tab_switch_count": payload.tab_switch_count,
            }
        )
    except DuplicateResponse as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@app.patch("/api/responses/{call_id}")
async def update_response(
    call_id: str,
    payload: UpdateResponseRequest,
    responses: ResponseStore = Depends(get_response_store),
):
    try:
        return await responses.update_response({"candidate_status": payload.candidate_status.value}, call_id)
    except ResponseNotFound:
        raise HTTPException(status_code=404, detail="Response not found")


@app.delete("/api/responses/{call_id}")
async def delete_response(call_id: str, responses: ResponseStore = Depends(get_response_store)):
    logger.info(f"Attempting to delete response: {call_id}")
    try:
        await responses.delete_response(call_id)
    except ResponseNotFound:
        logger.error(f"Delete failed: no response for call {call_id}")
        raise HTTPException(status_code=404, detail="Response not found")

    logger.info(f"🗑️ Deleted response {call_id}.")
    return JSONResponse(status_code=200, content={"message": f"Response {call_id} deleted successfully."})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
