"""SQLite database manager for debate sessions, messages and scores."""

import sqlite3
import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from ..models import DebateMessage, DebateSession, Judge, JudgeScore, Participant
from ..types import SessionStatus, Stance
from .schema import SchemaManager

logger = logging.getLogger(__name__)


def _parse_datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class DatabaseManager:
    """Manages SQLite database connections and schema for debate sessions."""

    def __init__(self, db_path: str = "debates.db"):
        self.db_path = Path(db_path)
        self.schema_manager = SchemaManager()
        self._init_database()

    def _init_database(self) -> None:
        """Initialize the database with required tables using schema manager."""
        if not self.schema_manager.validate_schema_files():
            raise RuntimeError("Database schema validation failed - missing schema files")

        if self.db_path.parent != Path("."):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._get_connection() as conn:
            cursor = conn.cursor()
            self.schema_manager.initialize_database_schema(cursor)
            conn.commit()
            logger.info(f"Database initialized at {self.db_path}")

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """Get a database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row  # Enable column access by name
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            if conn:
                conn.close()

    # ------------------------------------------------------------------
    # Participants and judges
    # ------------------------------------------------------------------

    def save_participant(self, participant: Participant) -> None:
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO ai_participants (
                    id, name, api_config_id, stance, personality, instructions, is_active
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    participant.id,
                    participant.name,
                    participant.api_config_id,
                    participant.stance.value,
                    participant.personality,
                    participant.instructions,
                    int(participant.is_active),
                ),
            )
            conn.commit()

    def save_judge(self, judge: Judge) -> None:
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO judges (id, name, api_config_id, criteria, instructions, is_active)
                VALUES (?, ?, ?, ?, ?, ?)
            """,
                (
                    judge.id,
                    judge.name,
                    judge.api_config_id,
                    json.dumps(list(judge.criteria)),
                    judge.instructions,
                    int(judge.is_active),
                ),
            )
            conn.commit()

    def list_participants(self) -> list[Participant]:
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM ai_participants ORDER BY name").fetchall()
        return [self._row_to_participant(row) for row in rows]

    def list_judges(self) -> list[Judge]:
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM judges ORDER BY name").fetchall()
        return [self._row_to_judge(row) for row in rows]

    def load_session_participants(self, session_id: str) -> list[Participant]:
        """Load a session's participants in their configured speaking order."""
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT p.* FROM ai_participants p
                JOIN session_participants sp ON p.id = sp.participant_id
                WHERE sp.session_id = ?
                ORDER BY sp.position
            """,
                (session_id,),
            ).fetchall()
        return [self._row_to_participant(row) for row in rows]

    def load_session_judges(self, session_id: str) -> list[Judge]:
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT j.* FROM judges j
                JOIN session_judges sj ON j.id = sj.judge_id
                WHERE sj.session_id = ?
                ORDER BY sj.position
            """,
                (session_id,),
            ).fetchall()
        return [self._row_to_judge(row) for row in rows]

    @staticmethod
    def _row_to_participant(row: sqlite3.Row) -> Participant:
        return Participant(
            id=row["id"],
            name=row["name"],
            api_config_id=row["api_config_id"],
            stance=Stance(row["stance"]),
            personality=row["personality"],
            instructions=row["instructions"],
            is_active=bool(row["is_active"]),
        )

    @staticmethod
    def _row_to_judge(row: sqlite3.Row) -> Judge:
        return Judge(
            id=row["id"],
            name=row["name"],
            api_config_id=row["api_config_id"],
            criteria=tuple(json.loads(row["criteria"])),
            instructions=row["instructions"],
            is_active=bool(row["is_active"]),
        )

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def save_session(self, session: DebateSession) -> None:
        """Insert a new session together with its participant and judge links."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO debate_sessions (
                    id, topic, description, max_rounds, max_words_per_turn, status,
                    current_round, current_turn, created_at, updated_at, completed_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    session.id,
                    session.topic,
                    session.description,
                    session.max_rounds,
                    session.max_words_per_turn,
                    session.status.value,
                    session.current_round,
                    session.current_turn,
                    session.created_at.isoformat(),
                    session.updated_at.isoformat(),
                    session.completed_at.isoformat() if session.completed_at else None,
                ),
            )
            cursor.executemany(
                "INSERT INTO session_participants (session_id, participant_id, position) VALUES (?, ?, ?)",
                [(session.id, pid, i) for i, pid in enumerate(session.participant_ids)],
            )
            cursor.executemany(
                "INSERT INTO session_judges (session_id, judge_id, position) VALUES (?, ?, ?)",
                [(session.id, jid, i) for i, jid in enumerate(session.judge_ids)],
            )
            conn.commit()
            logger.info(f"Saved debate session {session.id}: {session.topic}")

    def load_session(self, session_id: str) -> DebateSession | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM debate_sessions WHERE id = ?", (session_id,)
            ).fetchone()
            if not row:
                return None
            participant_ids = [
                r["participant_id"]
                for r in conn.execute(
                    "SELECT participant_id FROM session_participants WHERE session_id = ? ORDER BY position",
                    (session_id,),
                )
            ]
            judge_ids = [
                r["judge_id"]
                for r in conn.execute(
                    "SELECT judge_id FROM session_judges WHERE session_id = ? ORDER BY position",
                    (session_id,),
                )
            ]
        return self._row_to_session(row, participant_ids, judge_ids)

    def list_sessions(self) -> list[DebateSession]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT id FROM debate_sessions ORDER BY created_at DESC"
            ).fetchall()
        sessions = [self.load_session(row["id"]) for row in rows]
        return [s for s in sessions if s is not None]

    @staticmethod
    def _row_to_session(
        row: sqlite3.Row, participant_ids: list[str], judge_ids: list[str]
    ) -> DebateSession:
        return DebateSession(
            id=row["id"],
            topic=row["topic"],
            description=row["description"],
            max_rounds=row["max_rounds"],
            max_words_per_turn=row["max_words_per_turn"],
            participant_ids=participant_ids,
            judge_ids=judge_ids,
            status=SessionStatus(row["status"]),
            current_round=row["current_round"],
            current_turn=row["current_turn"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
            completed_at=_parse_datetime(row["completed_at"]),
        )

    def update_session_status(
        self,
        session_id: str,
        status: SessionStatus,
        completed_at: datetime | None = None,
    ) -> None:
        now = datetime.now().isoformat()
        with self._get_connection() as conn:
            if completed_at is not None:
                conn.execute(
                    "UPDATE debate_sessions SET status = ?, completed_at = ?, updated_at = ? WHERE id = ?",
                    (status.value, completed_at.isoformat(), now, session_id),
                )
            else:
                conn.execute(
                    "UPDATE debate_sessions SET status = ?, updated_at = ? WHERE id = ?",
                    (status.value, now, session_id),
                )
            conn.commit()

    def update_counters(
        self,
        session_id: str,
        current_round: int | None = None,
        current_turn: int | None = None,
    ) -> None:
        assignments = []
        params: list[object] = []
        if current_round is not None:
            assignments.append("current_round = ?")
            params.append(current_round)
        if current_turn is not None:
            assignments.append("current_turn = ?")
            params.append(current_turn)
        if not assignments:
            return

        assignments.append("updated_at = ?")
        params.extend([datetime.now().isoformat(), session_id])
        with self._get_connection() as conn:
            conn.execute(
                f"UPDATE debate_sessions SET {', '.join(assignments)} WHERE id = ?",
                params,
            )
            conn.commit()

    # ------------------------------------------------------------------
    # Messages and scores
    # ------------------------------------------------------------------

    def save_message(self, message: DebateMessage) -> None:
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO debate_messages (
                    id, session_id, participant_id, round, turn, content, word_count, timestamp
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    message.id,
                    message.session_id,
                    message.participant_id,
                    message.round,
                    message.turn,
                    message.content,
                    message.word_count,
                    message.timestamp.isoformat(),
                ),
            )
            conn.commit()

    def load_messages(
        self,
        session_id: str,
        before_round: int | None = None,
        participant_id: str | None = None,
    ) -> list[DebateMessage]:
        """Load messages ordered by (round, turn), optionally filtered."""
        query = """
            SELECT dm.*, p.name AS participant_name, p.stance AS stance
            FROM debate_messages dm
            JOIN ai_participants p ON dm.participant_id = p.id
            WHERE dm.session_id = ?
        """
        params: list[object] = [session_id]
        if before_round is not None:
            query += " AND dm.round < ?"
            params.append(before_round)
        if participant_id is not None:
            query += " AND dm.participant_id = ?"
            params.append(participant_id)
        query += " ORDER BY dm.round, dm.turn"

        with self._get_connection() as conn:
            rows = conn.execute(query, params).fetchall()

        return [
            DebateMessage(
                id=row["id"],
                session_id=row["session_id"],
                participant_id=row["participant_id"],
                round=row["round"],
                turn=row["turn"],
                content=row["content"],
                word_count=row["word_count"],
                timestamp=datetime.fromisoformat(row["timestamp"]),
                participant_name=row["participant_name"],
                stance=Stance(row["stance"]),
            )
            for row in rows
        ]

    def save_score(self, score: JudgeScore) -> None:
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO judge_scores (
                    id, session_id, judge_id, participant_id, criteria, score,
                    max_score, comments, timestamp
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
                (
                    score.id,
                    score.session_id,
                    score.judge_id,
                    score.participant_id,
                    score.criteria,
                    score.score,
                    score.max_score,
                    score.comments,
                    score.timestamp.isoformat(),
                ),
            )
            conn.commit()

    def load_scores(self, session_id: str) -> list[JudgeScore]:
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT js.*, j.name AS judge_name, p.name AS participant_name, p.stance AS stance
                FROM judge_scores js
                JOIN judges j ON js.judge_id = j.id
                JOIN ai_participants p ON js.participant_id = p.id
                WHERE js.session_id = ?
                ORDER BY js.timestamp, js.rowid
            """,
                (session_id,),
            ).fetchall()

        return [
            JudgeScore(
                id=row["id"],
                session_id=row["session_id"],
                judge_id=row["judge_id"],
                participant_id=row["participant_id"],
                criteria=row["criteria"],
                score=row["score"],
                max_score=row["max_score"],
                comments=row["comments"] or "",
                timestamp=datetime.fromisoformat(row["timestamp"]),
                judge_name=row["judge_name"],
                participant_name=row["participant_name"],
                stance=Stance(row["stance"]),
            )
            for row in rows
        ]
