"""Tests for debate history rendering."""

import asyncio

from debate_engine.context_builder import ContextBuilder
from debate_engine.models import DebateMessage


def test_first_round_has_opening_context(store, make_session, sample_debate_topic) -> None:
    session = make_session()

    context = asyncio.run(ContextBuilder(store, session.topic).build_context(session.id, 1))

    assert context == f'This is the beginning of a debate on the topic: "{sample_debate_topic}"'


def test_context_contains_every_earlier_turn_in_order(store, make_session) -> None:
    session = make_session(max_rounds=3)

    async def scenario() -> str:
        # Stored out of order on purpose
        for round_number, turn, participant_id, content in [
            (2, 1, "pro-1", "Second pro."),
            (1, 2, "con-1", "First con."),
            (1, 1, "pro-1", "First pro."),
            (2, 2, "con-1", "Second con."),
            (3, 1, "pro-1", "Current round."),
        ]:
            await store.append_message(
                DebateMessage(session.id, participant_id, round_number, turn, content, 2)
            )
        return await ContextBuilder(store, session.topic).build_context(session.id, 3)

    context = asyncio.run(scenario())

    assert context == (
        f'Previous discussion on topic: "{session.topic}"\n\n'
        "Round 1, Advocate (pro): First pro.\n\n"
        "Round 1, Skeptic (con): First con.\n\n"
        "Round 2, Advocate (pro): Second pro.\n\n"
        "Round 2, Skeptic (con): Second con.\n\n"
    )
    assert "Current round." not in context
