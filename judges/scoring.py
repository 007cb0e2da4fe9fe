"""Aggregation of judge scores into a debate verdict."""

from collections.abc import Iterable, Mapping

from debate_engine.models import DebateResult, JudgeScore, Participant
from debate_engine.types import Stance, Winner


def total_scores_by_stance(
    scores: Iterable[JudgeScore],
    participants: Mapping[str, Participant] | None = None,
) -> dict[str, int]:
    """Sum scores per stance across every judge and criterion.

    A score's stance comes from the score itself when the store joined it in,
    otherwise from the participant it was given to. Scores for unknown
    participants are ignored.
    """
    totals = {Stance.PRO.value: 0, Stance.CON.value: 0}
    participants = participants or {}

    for score in scores:
        stance = score.stance
        if stance is None and score.participant_id in participants:
            stance = participants[score.participant_id].stance
        if stance is None:
            continue
        totals[stance.value] += score.score

    return totals


def determine_winner(totals: Mapping[str, int]) -> Winner:
    pro = totals.get(Stance.PRO.value, 0)
    con = totals.get(Stance.CON.value, 0)
    if pro > con:
        return Winner.PRO
    if con > pro:
        return Winner.CON
    return Winner.TIE


def format_summary(winner: Winner, totals: Mapping[str, int]) -> str:
    pro = totals.get(Stance.PRO.value, 0)
    con = totals.get(Stance.CON.value, 0)

    if winner is Winner.TIE:
        return f"Final result: TIE with a total score of {pro} vs {con}"

    winning, losing = (pro, con) if winner is Winner.PRO else (con, pro)
    return (
        f"Final result: {winner.value.upper()} wins with a total score of "
        f"{winning} vs {losing}"
    )


def calculate_debate_result(
    session_id: str,
    scores: list[JudgeScore],
    participants: Mapping[str, Participant] | None = None,
) -> DebateResult:
    """Recompute the verdict of a session from its stored judge scores.

    An empty score set is a tie at 0 vs 0.
    """
    totals = total_scores_by_stance(scores, participants)
    winner = determine_winner(totals)
    return DebateResult(
        session_id=session_id,
        winner=winner,
        total_scores=totals,
        judge_scores=list(scores),
        summary=format_summary(winner, totals),
    )
