"""Markdown export of debate sessions."""

import logging

from judges.scoring import determine_winner, total_scores_by_stance

from .exceptions import SessionNotFoundError
from .models import DebateMessage, DebateSession, Judge, JudgeScore, Participant
from .store import DebateStore

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _stance_label(stance) -> str:
    return stance.value.upper() if stance else "UNKNOWN"


def format_markdown_report(
    session: DebateSession,
    participants: list[Participant],
    judges: list[Judge],
    messages: list[DebateMessage],
    scores: list[JudgeScore],
) -> str:
    """Render a full debate report as Markdown."""
    lines = [f"# Debate Report: {session.topic}", ""]

    lines += ["## Session Information", ""]
    lines.append(f"- **Topic**: {session.topic}")
    if session.description:
        lines.append(f"- **Description**: {session.description}")
    lines.append(f"- **Status**: {session.status.value}")
    lines.append(f"- **Rounds**: {session.current_round}/{session.max_rounds}")
    lines.append(f"- **Max Words per Turn**: {session.max_words_per_turn}")
    lines.append(f"- **Created**: {session.created_at.strftime(TIMESTAMP_FORMAT)}")
    if session.completed_at:
        lines.append(f"- **Completed**: {session.completed_at.strftime(TIMESTAMP_FORMAT)}")
    lines.append("")

    lines += ["## Participants", ""]
    for participant in participants:
        lines += [
            f"### {participant.name} ({_stance_label(participant.stance)})",
            "",
            f"- **Stance**: {participant.stance.value}",
            f"- **Personality**: {participant.personality}",
            f"- **Instructions**: {participant.instructions}",
            "",
        ]

    lines += ["## Judges", ""]
    for judge in judges:
        lines += [
            f"### {judge.name}",
            "",
            f"- **Criteria**: {', '.join(judge.criteria)}",
            f"- **Instructions**: {judge.instructions}",
            "",
        ]

    if messages:
        lines += ["## Debate Transcript", ""]
        current_round = 0
        for msg in sorted(messages, key=lambda m: (m.round, m.turn)):
            if msg.round != current_round:
                current_round = msg.round
                lines += [f"### Round {current_round}", ""]

            name = msg.participant_name or msg.participant_id
            lines += [
                f"**{name} ({_stance_label(msg.stance)}):**",
                "",
                msg.content,
                "",
                f"*Word count: {msg.word_count} | {msg.timestamp.strftime(TIMESTAMP_FORMAT)}*",
                "",
                "---",
                "",
            ]

    if scores:
        totals = total_scores_by_stance(scores, {p.id: p for p in participants})
        winner = determine_winner(totals)

        lines += ["## Judge Scores", "", "### Final Results", ""]
        lines.append(f"- **PRO Total Score**: {totals['pro']}")
        lines.append(f"- **CON Total Score**: {totals['con']}")
        lines += [f"- **Winner**: {winner.value.upper()}", ""]

        lines += ["### Detailed Scores", ""]
        for score in scores:
            judge_name = score.judge_name or score.judge_id
            participant_name = score.participant_name or score.participant_id
            lines += [
                f"**{judge_name}** → **{participant_name} ({_stance_label(score.stance)})**",
                "",
                f"- **Score**: {score.score}/{score.max_score}",
                f"- **Criteria**: {score.criteria}",
                f"- **Comments**: {score.comments}",
                "",
                "---",
                "",
            ]

    return "\n".join(lines)


class TranscriptManager:
    """Builds exports for stored sessions."""

    def __init__(self, store: DebateStore):
        self.store = store

    async def export_markdown(self, session_id: str) -> str:
        session = await self.store.load_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)

        report = format_markdown_report(
            session,
            await self.store.load_participants(session_id),
            await self.store.load_judges(session_id),
            await self.store.load_messages(session_id),
            await self.store.load_scores(session_id),
        )
        logger.info(f"Exported session {session_id} ({len(report)} chars)")
        return report
