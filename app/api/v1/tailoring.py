import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, Header, HTTPException, Request, status
from fastapi.responses import StreamingResponse

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.core.security import check_api_key
from app.normalize.normalize_resume import parse_resume
from app.schemas.tailoring import (
    AnalyzeRequest,
    MatchRequest,
    MatchResponse,
    ParseResumeRequest,
    RequirementSet,
    ResumeProfile,
    TailorRequest,
    TailoringOutcome,
)
from app.services.errors import TailoringError, to_tailoring_error
from app.services.orchestrator import TailoringOrchestrator
from app.services.progress import ProgressStream

logger = logging.getLogger(__name__)

router = APIRouter()

_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _sse_event(event: str, payload: dict[str, Any]) -> str:
    return f"event: {event}\ndata: {json.dumps(payload, ensure_ascii=False)}\n\n"


def _orchestrator(request: Request) -> TailoringOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tailoring service is not ready yet.",
        )
    return orchestrator


def _http_error(exc: TailoringError) -> HTTPException:
    code = status.HTTP_504_GATEWAY_TIMEOUT if exc.kind == "timeout" else status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=exc.to_dict())


@router.post("/tailoring/parse-resume", response_model=ResumeProfile)
@rate_limit()
async def parse_resume_endpoint(
    request: Request,
    payload: ParseResumeRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    return parse_resume(payload.resume_text)


@router.post("/tailoring/analyze", response_model=RequirementSet)
@rate_limit(settings.tailor_rate_limit)
async def analyze_endpoint(
    request: Request,
    payload: AnalyzeRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    orchestrator = _orchestrator(request)
    try:
        return await orchestrator.analyze(payload.jd_text)
    except TailoringError as exc:
        raise _http_error(exc) from exc


@router.post("/tailoring/match", response_model=MatchResponse)
@rate_limit(settings.tailor_rate_limit)
async def match_endpoint(
    request: Request,
    payload: MatchRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    orchestrator = _orchestrator(request)
    try:
        resume, requirements, outcome, score = await orchestrator.match(payload.resume_text, payload.jd_text)
    except TailoringError as exc:
        raise _http_error(exc) from exc
    return MatchResponse(resume=resume, requirements=requirements, match=outcome, match_score=score)


@router.post("/tailoring/tailor", response_model=TailoringOutcome)
@rate_limit(settings.tailor_rate_limit)
async def tailor_endpoint(
    request: Request,
    payload: TailorRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    try:
        return await _orchestrator(request).tailor(payload.resume_text, payload.jd_text)
    except TailoringError as exc:
        raise _http_error(exc) from exc


@router.post("/tailoring/tailor/quick", response_model=TailoringOutcome)
@rate_limit(settings.tailor_rate_limit)
async def tailor_quick_endpoint(
    request: Request,
    payload: TailorRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    try:
        return await _orchestrator(request).tailor_quick(payload.resume_text, payload.jd_text)
    except TailoringError as exc:
        raise _http_error(exc) from exc


@router.post("/tailoring/tailor/stream")
@rate_limit(settings.tailor_rate_limit)
async def tailor_stream(
    request: Request,
    payload: TailorRequest,
    quick: bool = False,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    """Progress events as SSE, followed by one ``result`` or ``error`` event."""
    check_api_key(x_api_key)
    orchestrator = _orchestrator(request)
    stream = ProgressStream()
    run = orchestrator.tailor_quick if quick else orchestrator.tailor

    async def gen():
        task = asyncio.create_task(run(payload.resume_text, payload.jd_text, progress=stream))
        try:
            async for event in stream:
                yield _sse_event("progress", event.model_dump())
            try:
                outcome = await task
            except Exception as exc:
                error = to_tailoring_error(exc, "api_error")
                logger.warning("tailor_stream_failed kind=%s", error.kind)
                yield _sse_event("error", error.to_dict())
                return
            yield _sse_event("result", outcome.model_dump(mode="json"))
        finally:
            if not task.done():
                task.cancel()

    return StreamingResponse(gen(), media_type="text/event-stream", headers=_STREAM_HEADERS)
