"""Participant, judge and API configuration endpoints."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request

from debate_engine.models import Judge, Participant
from debate_engine.store import SQLiteDebateStore
from web.dependencies import get_store
from web.participant_schemas import (
    ApiConfigResponse,
    JudgeRequest,
    JudgeResponse,
    ParticipantRequest,
    ParticipantResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _require_known_config(store: SQLiteDebateStore, api_config_id: str) -> None:
    known = {config.id for config in store.list_credentials()}
    if api_config_id not in known:
        raise HTTPException(status_code=400, detail=f"Unknown API config: {api_config_id}")


@router.post("/participants", response_model=ParticipantResponse, status_code=201)
async def create_participant(
    request: ParticipantRequest, store: SQLiteDebateStore = Depends(get_store)
):
    """Register an AI debater."""
    _require_known_config(store, request.api_config_id)

    participant = Participant(
        id=str(uuid.uuid4()),
        name=request.name,
        api_config_id=request.api_config_id,
        stance=request.stance,
        personality=request.personality,
        instructions=request.instructions,
        is_active=request.is_active,
    )
    await store.save_participant(participant)
    logger.info(f"Created participant {participant.name} ({participant.stance.value})")
    return ParticipantResponse.from_participant(participant)


@router.get("/participants", response_model=list[ParticipantResponse])
async def list_participants(store: SQLiteDebateStore = Depends(get_store)):
    participants = await store.list_participants()
    return [ParticipantResponse.from_participant(p) for p in participants]


@router.post("/judges", response_model=JudgeResponse, status_code=201)
async def create_judge(
    request: JudgeRequest,
    http_request: Request,
    store: SQLiteDebateStore = Depends(get_store),
):
    """Register an AI judge."""
    _require_known_config(store, request.api_config_id)

    criteria = request.criteria
    if not criteria:
        criteria = http_request.app.state.config.system.default_judge_criteria

    judge = Judge(
        id=str(uuid.uuid4()),
        name=request.name,
        api_config_id=request.api_config_id,
        criteria=tuple(criteria),
        instructions=request.instructions,
        is_active=request.is_active,
    )
    await store.save_judge(judge)
    logger.info(f"Created judge {judge.name}")
    return JudgeResponse.from_judge(judge)


@router.get("/judges", response_model=list[JudgeResponse])
async def list_judges(store: SQLiteDebateStore = Depends(get_store)):
    judges = await store.list_judges()
    return [JudgeResponse.from_judge(j) for j in judges]


@router.get("/api-configs", response_model=list[ApiConfigResponse])
async def list_api_configs(store: SQLiteDebateStore = Depends(get_store)):
    """List configured credentials without exposing their keys."""
    return [ApiConfigResponse.from_config(c) for c in store.list_credentials()]
