"""Builds the debate history shown to a participant before their turn."""

import logging

from .models import DebateMessage
from .store import DebateStore

logger = logging.getLogger(__name__)


class ContextBuilder:
    """Renders every earlier-round turn of a session as prompt context."""

    def __init__(self, store: DebateStore, topic: str):
        self.store = store
        self.topic = topic

    async def build_context(self, session_id: str, current_round: int) -> str:
        """Return the full, causally ordered history before ``current_round``."""
        messages = await self.store.load_messages(session_id, before_round=current_round)
        context = self.render(messages)
        logger.debug(
            f"Built context for session {session_id} round {current_round}: "
            f"{len(messages)} prior messages"
        )
        return context

    def render(self, messages: list[DebateMessage]) -> str:
        if not messages:
            return f'This is the beginning of a debate on the topic: "{self.topic}"'

        ordered = sorted(messages, key=lambda m: (m.round, m.turn))
        lines = [f'Previous discussion on topic: "{self.topic}"\n\n']
        for msg in ordered:
            name = msg.participant_name or msg.participant_id
            stance = msg.stance.value if msg.stance else "unknown"
            lines.append(f"Round {msg.round}, {name} ({stance}): {msg.content}\n\n")
        return "".join(lines)
