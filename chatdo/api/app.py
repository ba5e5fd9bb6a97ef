"""FastAPI web application for chatdo.

The API is stateless: callers send the task they hold and get the updated task
back. Nothing is stored server-side. The server clock is read here, at the HTTP
boundary, only when a request omits `now`.
"""

import logging
from datetime import datetime
from typing import List, Optional
from fastapi import FastAPI, Depends
from pydantic import BaseModel, Field, field_validator

from chatdo import __version__
from chatdo.integrations.llm_client import LLMClient
from chatdo.models.constants import DEFAULT_OCCURRENCE_COUNT
from chatdo.models.parsed_input import ParsedTaskInput
from chatdo.models.recurrence import RecurrencePattern
from chatdo.models.task import Occurrence, Task
from chatdo.models.task_factory import create_task_from_parsed
from chatdo.recurrence.date_resolver import resolve_relative_date, to_naive_utc
from chatdo.recurrence.instances import generate_occurrences
from chatdo.recurrence.pattern_parser import parse_recurrence_pattern
from chatdo.recurrence.reschedule import reschedule_occurrence

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="chatdo API",
    description="Turns chat-extracted todos into dated, recurring schedules",
    version=__version__,
)

_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the LLM client instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def _now_or_server_time(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


# Request/response models
class _ClockedRequest(BaseModel):
    """Request carrying an optional reference time, stored zone-naive (UTC)."""
    now: Optional[datetime] = None

    @field_validator("now", mode="after")
    @classmethod
    def _naive_now(cls, v: Optional[datetime]):
        return to_naive_utc(v) if v is not None else None


class FromParsedRequest(_ClockedRequest):
    """Request to build a task from a parsed record."""
    parsed: ParsedTaskInput


class RescheduleRequest(BaseModel):
    """Request to move one occurrence of a task."""
    task: Task
    occurrence_id: str
    new_date: datetime
    propagate: bool = False

    @field_validator("new_date", mode="after")
    @classmethod
    def _naive_new_date(cls, v: datetime):
        return to_naive_utc(v)


class OccurrencesRequest(_ClockedRequest):
    """Request to materialize occurrences for a task."""
    task: Task
    count: int = Field(DEFAULT_OCCURRENCE_COUNT, ge=0, le=100)


class ResolveDateRequest(_ClockedRequest):
    text: str


class ResolveDateResponse(BaseModel):
    text: str
    date: Optional[datetime]


class ParsePatternRequest(BaseModel):
    text: str


class ParsePatternResponse(BaseModel):
    text: str
    pattern: Optional[RecurrencePattern]


class ChatRequest(_ClockedRequest):
    message: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """Tasks created from a chat message."""
    tasks: List[Task]


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.post("/tasks/from-parsed", response_model=Task)
async def task_from_parsed(request: FromParsedRequest):
    """Build a scheduled task from a parsed record."""
    return create_task_from_parsed(request.parsed, _now_or_server_time(request.now))


@app.post("/tasks/reschedule", response_model=Task)
async def reschedule(request: RescheduleRequest):
    """Move one occurrence; unknown occurrence ids return the task unchanged."""
    return reschedule_occurrence(
        request.task, request.occurrence_id, request.new_date, request.propagate
    )


@app.post("/tasks/occurrences", response_model=List[Occurrence])
async def occurrences(request: OccurrencesRequest):
    """Materialize the next occurrences of a recurring task."""
    return generate_occurrences(request.task, request.count, now=_now_or_server_time(request.now))


@app.post("/dates/resolve", response_model=ResolveDateResponse)
async def resolve_date(request: ResolveDateRequest):
    """Resolve a relative due-date phrase."""
    resolved = resolve_relative_date(request.text, _now_or_server_time(request.now))
    return ResolveDateResponse(text=request.text, date=resolved)


@app.post("/patterns/parse", response_model=ParsePatternResponse)
async def parse_pattern(request: ParsePatternRequest):
    """Parse a recurrence description."""
    return ParsePatternResponse(text=request.text, pattern=parse_recurrence_pattern(request.text))


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, llm: LLMClient = Depends(get_llm_client)):
    """Extract todos from a chat message and schedule each one."""
    now = _now_or_server_time(request.now)
    parsed_items = llm.extract_tasks(request.message)
    tasks = [create_task_from_parsed(item, now) for item in parsed_items]
    logger.info(f"Chat message produced {len(tasks)} task(s)")
    return ChatResponse(tasks=tasks)
