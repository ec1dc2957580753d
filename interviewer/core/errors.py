# errors.py
import traceback
from typing import Dict, Optional


class GenerationError(Exception):
    """Base class for failures of a structured generation call.

    ``message`` is safe to show to the caller. ``trace`` is a diagnostic
    traceback that is only exposed outside production.
    """

    status_code = 500
    default_message = "internal server error"

    def __init__(self, message: Optional[str] = None, trace: Optional[str] = None):
        self.message = message or self.default_message
        self.trace = trace
        super().__init__(self.message)

    @classmethod
    def from_exception(cls, exc: BaseException, message: Optional[str] = None) -> "GenerationError":
        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return cls(message or str(exc) or cls.default_message, trace=trace)

    def to_payload(self, include_details: bool = False) -> Dict[str, str]:
        payload = {"error": self.message}
        if include_details and self.trace:
            payload["details"] = self.trace
        return payload


class ConfigurationMissing(GenerationError):
    """A required credential or endpoint is not configured."""

    def __init__(self, setting: str, trace: Optional[str] = None):
        self.setting = setting
        super().__init__(f"{setting} is not configured", trace=trace)


class InvalidResponseFormat(GenerationError):
    """The model answered with text that is not valid JSON."""

    default_message = "Invalid response format from AI"


class SchemaMismatch(GenerationError):
    """The model answered with JSON of the wrong shape for the call site."""

    default_message = "AI response did not match the expected format"


class UpstreamFailure(GenerationError):
    """The model call itself failed (network, quota, rejected request)."""


# -----------------------------------------------------------------
# Store errors
# -----------------------------------------------------------------

class StoreError(Exception):
    pass


class ResponseNotFound(StoreError):
    def __init__(self, call_id: str):
        self.call_id = call_id
        super().__init__(f"Response not found for call '{call_id}'")


class InterviewNotFound(StoreError):
    def __init__(self, interview_id: str):
        self.interview_id = interview_id
        super().__init__(f"Interview '{interview_id}' not found")


class DuplicateResponse(StoreError):
    def __init__(self, call_id: str):
        self.call_id = call_id
        super().__init__(f"A response for call '{call_id}' already exists")
