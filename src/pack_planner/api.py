"""FastAPI endpoints for the pack planner."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from pack_planner.config import load_settings
from pack_planner.errors import PackingError
from pack_planner.io.schemas import (
    ContainerSpecSchema,
    ItemSpecSchema,
    PlanRequestSchema,
    PlanResponseSchema,
)
from pack_planner.metrics import PlanReport
from pack_planner.packing.best_fit import PassResult
from pack_planner.planner import Planner
from pack_planner.queue import DuplicatePolicy
from pack_planner.service import build_plan, enqueue_all

logger = logging.getLogger(__name__)

settings = load_settings()

# FastAPI app instance (exactly one)
app = FastAPI(
    title="Pack Planner API",
    description="Greedy best-fit container planning service",
)


@app.exception_handler(PackingError)
async def packing_error_handler(request: Request, exc: PackingError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": exc.code.value, "detail": exc.message})


class SessionCreateRequest(BaseModel):
    duplicate_policy: DuplicatePolicy | None = Field(None, description="Overrides the configured policy")


class SessionItemsRequest(BaseModel):
    items: list[ItemSpecSchema] = Field(min_length=1)


@dataclass
class PlanningSession:
    """A planner kept between requests; every operation holds its lock end-to-end."""

    planner: Planner
    lock: threading.Lock = field(default_factory=threading.Lock)


_sessions: dict[str, PlanningSession] = {}
_sessions_lock = threading.Lock()


def _get_session(session_id: str) -> PlanningSession:
    with _sessions_lock:
        session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session '{session_id}'")
    return session


@app.post("/plan")
async def plan(request: PlanRequestSchema) -> PlanResponseSchema:
    """
    Register containers, queue items, run one greedy pass and report.

    Input (request body):
        {
            "containers": [{"id": "A", "capacity": 10}, {"preset": "40HC"}],
            "items": [{"name": "TV", "volume": 20}, {"name": "crate", "volume": 2, "quantity": 5}]
        }
    """
    try:
        return build_plan(request, settings.duplicate_policy)
    except (HTTPException, PackingError):
        raise
    except Exception as e:
        logger.error(f"ERROR in /plan endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/sessions", status_code=201)
async def create_session(request: SessionCreateRequest | None = None) -> dict[str, Any]:
    policy = (request.duplicate_policy if request else None) or settings.duplicate_policy
    with _sessions_lock:
        if len(_sessions) >= settings.max_sessions:
            raise HTTPException(status_code=429, detail="Too many open sessions")
        session_id = uuid.uuid4().hex
        _sessions[session_id] = PlanningSession(planner=Planner(policy))
    logger.info(f"Opened session {session_id} (duplicate_policy={policy.value})")
    return {"session_id": session_id, "duplicate_policy": policy.value}


@app.post("/sessions/{session_id}/containers")
async def add_containers(session_id: str, containers: list[ContainerSpecSchema]) -> PlanReport:
    session = _get_session(session_id)
    # build all first so an invalid spec registers nothing
    built = [spec.to_container() for spec in containers]
    with session.lock:
        for container in built:
            session.planner.add_container(container)
        return session.planner.report()


@app.post("/sessions/{session_id}/items")
async def add_items(session_id: str, request: SessionItemsRequest) -> dict[str, Any]:
    session = _get_session(session_id)
    items = [item for spec in request.items for item in spec.to_items()]
    with session.lock:
        rejected, collapsed = enqueue_all(session.planner, items)
        pending = session.planner.pending
    return {
        "queued": len(items) - len(rejected) - len(collapsed),
        "rejected": [r.model_dump() for r in rejected],
        "collapsed": [c.model_dump() for c in collapsed],
        "pending": [p.model_dump() for p in pending],
    }


@app.post("/sessions/{session_id}/pass")
async def run_pass(session_id: str) -> PassResult:
    session = _get_session(session_id)
    with session.lock:
        result = session.planner.run_greedy_pass()
    logger.info(f"session={session_id} status={result.status.value}, placed={len(result.placements)}, unplaced={len(result.unplaced)}")
    return result


@app.get("/sessions/{session_id}/report")
async def session_report(session_id: str) -> PlanReport:
    session = _get_session(session_id)
    with session.lock:
        return session.planner.report()


@app.delete("/sessions/{session_id}", status_code=204)
async def close_session(session_id: str) -> None:
    with _sessions_lock:
        if _sessions.pop(session_id, None) is None:
            raise HTTPException(status_code=404, detail=f"Unknown session '{session_id}'")


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    with _sessions_lock:
        open_sessions = len(_sessions)
    return {
        "ok": True,
        "sessions": open_sessions,
        "duplicate_policy": settings.duplicate_policy.value,
    }
