# stores.py
"""
File-backed stores for interviews and call responses.

Each record is one JSON file:
    <DATA_DIR>/interviews/<readable id>-<sha256 of id>.json
    <DATA_DIR>/responses/<readable id>-<sha256 of id>.json
"""
import hashlib
import json
import re
import time
import uuid
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

import aiofiles

from interviewer.config import settings
from interviewer.config.logging_config import get_logger
from interviewer.core.errors import DuplicateResponse, InterviewNotFound, ResponseNotFound

logger = get_logger("stores")


class CandidateStatus(str, Enum):
    NO_STATUS = "NO_STATUS"
    NOT_SELECTED = "NOT_SELECTED"
    POTENTIAL = "POTENTIAL"
    SELECTED = "SELECTED"


def _file_stem(record_id: str) -> str:
    """Map an identifier onto a unique, filesystem-safe file stem.

    The readable prefix is lossy; the sha256 digest of the raw id keeps
    distinct ids (`call/1`, `call_1`) in distinct files.
    """
    record_id = str(record_id)
    readable = re.sub(r"[^A-Za-z0-9_-]+", "_", record_id).strip("_")[:40] or "id"
    digest = hashlib.sha256(record_id.encode("utf-8")).hexdigest()
    return f"{readable}-{digest}"


class _JsonFileStore:
    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def _path(self, record_id: str) -> Path:
        return self.base_dir / f"{_file_stem(record_id)}.json"

    async def _read(self, path: Path) -> Dict[str, Any]:
        async with aiofiles.open(path, "r", encoding="utf-8") as f:
            return json.loads(await f.read())

    async def _write(self, path: Path, record: Dict[str, Any]) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(record, ensure_ascii=False, indent=2))


class InterviewStore(_JsonFileStore):
    def __init__(self, base_dir: Path = settings.INTERVIEWS_DIR):
        super().__init__(base_dir)

    async def create_interview(self, interview: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(interview)
        record["id"] = record.get("id") or uuid.uuid4().hex
        record.setdefault("questions", [])
        record["created_at"] = int(time.time())

        await self._write(self._path(record["id"]), record)
        logger.info(f"[InterviewStore] Created interview {record['id']} with {len(record['questions'])} questions.")
        return record

    async def get_interview_by_id(self, interview_id: str) -> Dict[str, Any]:
        path = self._path(interview_id)
        if not path.is_file():
            raise InterviewNotFound(interview_id)
        return await self._read(path)


class ResponseStore(_JsonFileStore):
    def __init__(self, base_dir: Path = settings.RESPONSES_DIR):
        super().__init__(base_dir)

    async def create_response(self, response: Dict[str, Any]) -> Dict[str, Any]:
        call_id = response["call_id"]
        path = self._path(call_id)
        if path.exists():
            raise DuplicateResponse(call_id)

        record = {
            "analytics": None,
            "is_analysed": False,
            "candidate_status": CandidateStatus.NO_STATUS.value,
            "tab_switch_count": 0,
            **response,
            "created_at": int(time.time()),
        }
        await self._write(path, record)
        logger.info(f"[ResponseStore] Recorded response for call {call_id} (interview {record.get('interview_id')}).")
        return record

    async def get_response_by_call_id(self, call_id: str) -> Dict[str, Any]:
        path = self._path(call_id)
        if not path.is_file():
            raise ResponseNotFound(call_id)
        return await self._read(path)

    async def update_response(self, fields: Dict[str, Any], call_id: str) -> Dict[str, Any]:
        record = await self.get_response_by_call_id(call_id)
        record.update(fields)
        await self._write(self._path(call_id), record)
        logger.debug(f"[ResponseStore] Updated call {call_id}: {sorted(fields)}")
        return record

    async def delete_response(self, call_id: str) -> None:
        path = self._path(call_id)
        if not path.is_file():
            raise ResponseNotFound(call_id)
        path.unlink()
        logger.info(f"[ResponseStore] Deleted response for call {call_id}.")

    async def get_all_responses(self, interview_id: str) -> List[Dict[str, Any]]:
        if not self.base_dir.is_dir():
            return []

        responses = []
        for path in self.base_dir.glob("*.json"):
            record = await self._read(path)
            if record.get("interview_id") == interview_id:
                responses.append(record)
        return sorted(responses, key=lambda r: r.get("created_at", 0))
