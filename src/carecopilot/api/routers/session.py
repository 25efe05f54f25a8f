"""
Session snapshot endpoints used by the browser to persist and rehydrate state.
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Request

from ..deps import SessionStoreDep
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=ApiResponse[dict])
async def get_session(request: Request, session_store: SessionStoreDep):
    """``{patients, activePatientId}`` for the current session."""
    return ok(request, data=await session_store.snapshot(), message="OK")


@router.put("", response_model=ApiResponse[dict])
async def restore_session(
    request: Request,
    session_store: SessionStoreDep,
    state: Any = Body(None),
):
    """Replace the session from a stored snapshot.

    Malformed snapshots leave an empty session rather than failing.
    """
    await session_store.restore(state)
    snapshot: Dict[str, Any] = await session_store.snapshot()
    return ok(request, data=snapshot, message="Session restored")
