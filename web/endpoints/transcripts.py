"""Transcript export endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from debate_engine.store import SQLiteDebateStore
from debate_engine.transcript import TranscriptManager
from web.dependencies import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/sessions/{session_id}/export")
async def export_session(session_id: str, store: SQLiteDebateStore = Depends(get_store)):
    """Download a Markdown report of a session, including a cancelled one."""
    report = await TranscriptManager(store).export_markdown(session_id)
    return Response(
        content=report,
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="debate-{session_id}.md"'},
    )
