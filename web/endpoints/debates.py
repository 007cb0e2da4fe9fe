"""Debate session management and WebSocket endpoints."""

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from debate_engine.exceptions import SessionNotFoundError
from web.broadcaster import WebSocketObserver
from web.debate_manager import DebateManager
from web.debate_response import DebateResponse, DebateResultResponse, DebateStatusResponse
from web.debate_setup_request import DebateSetupRequest
from web.dependencies import get_debate_manager
from web.message_response import MessageResponse, ScoreResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
ws_router = APIRouter()


@router.post("/sessions", response_model=DebateResponse, status_code=201)
async def create_session(
    setup: DebateSetupRequest, debate_manager: DebateManager = Depends(get_debate_manager)
):
    """Create a new debate session."""
    store = debate_manager.store
    known_participants = {p.id for p in await store.list_participants()}
    missing = [pid for pid in setup.participant_ids if pid not in known_participants]
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown participants: {', '.join(missing)}")

    known_judges = {j.id for j in await store.list_judges()}
    missing = [jid for jid in setup.judge_ids if jid not in known_judges]
    if missing:
        raise HTTPException(status_code=400, detail=f"Unknown judges: {', '.join(missing)}")

    session = await debate_manager.create_session(
        topic=setup.topic,
        participant_ids=setup.participant_ids,
        judge_ids=setup.judge_ids,
        max_rounds=setup.max_rounds,
        max_words_per_turn=setup.max_words_per_turn,
        description=setup.description,
    )
    return DebateResponse.from_session(session)


@router.get("/sessions", response_model=list[DebateResponse])
async def list_sessions(debate_manager: DebateManager = Depends(get_debate_manager)):
    sessions = await debate_manager.store.list_sessions()
    return [DebateResponse.from_session(s) for s in sessions]


@router.get("/sessions/{session_id}", response_model=DebateResponse)
async def get_session(session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)):
    return DebateResponse.from_session(await debate_manager.get_session(session_id))


@router.post("/sessions/{session_id}/start", response_model=DebateStatusResponse)
async def start_session(session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)):
    """Start a created session or resume a paused one."""
    snapshot = await debate_manager.start_debate(session_id)
    return DebateStatusResponse.from_snapshot(snapshot)


@router.post("/sessions/{session_id}/pause", response_model=DebateStatusResponse)
async def pause_session(session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)):
    snapshot = await debate_manager.pause_debate(session_id)
    return DebateStatusResponse.from_snapshot(snapshot)


@router.post("/sessions/{session_id}/stop", response_model=DebateResultResponse)
async def stop_session(session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)):
    """Complete the session; returns once judging has finished."""
    result = await debate_manager.stop_debate(session_id)
    return DebateResultResponse.from_result(result)


@router.get("/sessions/{session_id}/status", response_model=DebateStatusResponse)
async def get_session_status(
    session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)
):
    snapshot = await debate_manager.get_status(session_id)
    return DebateStatusResponse.from_snapshot(snapshot)


@router.get("/sessions/{session_id}/messages", response_model=list[MessageResponse])
async def get_session_messages(
    session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)
):
    await debate_manager.get_session(session_id)
    messages = await debate_manager.store.load_messages(session_id)
    return [MessageResponse.from_message(m) for m in messages]


@router.get("/sessions/{session_id}/scores", response_model=list[ScoreResponse])
async def get_session_scores(
    session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)
):
    await debate_manager.get_session(session_id)
    scores = await debate_manager.store.load_scores(session_id)
    return [ScoreResponse.from_score(s) for s in scores]


@router.get("/sessions/{session_id}/result", response_model=DebateResultResponse)
async def get_session_result(
    session_id: str, debate_manager: DebateManager = Depends(get_debate_manager)
):
    result = await debate_manager.get_result(session_id)
    return DebateResultResponse.from_result(result)


@ws_router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Multiplexed WebSocket: clients subscribe to any number of sessions."""
    await websocket.accept()
    debate_manager: DebateManager = websocket.app.state.debate_manager
    broadcaster = debate_manager.broadcaster
    observer = WebSocketObserver(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                await websocket.send_json({"type": "error", "message": "Invalid JSON"})
                continue

            message_type = data.get("type") if isinstance(data, dict) else None
            session_id = data.get("session_id") if isinstance(data, dict) else None

            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type in ("subscribe", "unsubscribe") and (
                not session_id or not isinstance(session_id, str)
            ):
                await websocket.send_json(
                    {"type": "error", "message": "session_id must be a non-empty string"}
                )
            elif message_type == "subscribe":
                await broadcaster.subscribe(session_id, observer)
                await websocket.send_json({"type": "subscribed", "session_id": session_id})
            elif message_type == "unsubscribe":
                await broadcaster.unsubscribe(session_id, observer)
                await websocket.send_json({"type": "unsubscribed", "session_id": session_id})
            else:
                await websocket.send_json(
                    {"type": "error", "message": f"Unknown message type: {message_type}"}
                )
    except WebSocketDisconnect:
        logger.debug("WebSocket client disconnected")
    finally:
        await broadcaster.remove_connection(observer)


@ws_router.websocket("/ws/debate/{session_id}")
async def debate_websocket_endpoint(websocket: WebSocket, session_id: str):
    """WebSocket endpoint for real-time updates of a single debate."""
    await websocket.accept()
    debate_manager: DebateManager = websocket.app.state.debate_manager
    observer = WebSocketObserver(websocket)
    await debate_manager.broadcaster.subscribe(session_id, observer)

    try:
        try:
            snapshot = await debate_manager.get_status(session_id)
            await websocket.send_json(
                {
                    "type": "connected",
                    "session_id": session_id,
                    "status": snapshot.status.value,
                    "current_round": snapshot.current_round,
                    "current_turn": snapshot.current_turn,
                    "max_rounds": snapshot.max_rounds,
                }
            )
        except SessionNotFoundError as e:
            await websocket.send_json({"type": "error", "message": str(e)})

        # Keep connection alive
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug(f"WebSocket client for session {session_id} disconnected")
    finally:
        await debate_manager.broadcaster.remove_connection(observer)
