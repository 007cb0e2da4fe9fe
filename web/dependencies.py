"""Shared FastAPI dependencies."""

from fastapi import Request

from debate_engine.store import SQLiteDebateStore
from web.debate_manager import DebateManager


def get_debate_manager(request: Request) -> DebateManager:
    return request.app.state.debate_manager


def get_store(request: Request) -> SQLiteDebateStore:
    return request.app.state.debate_manager.store
