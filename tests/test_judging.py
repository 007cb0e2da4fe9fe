"""Tests for judge response parsing and verdict aggregation."""

import asyncio
import random
from dataclasses import replace

import pytest

from debate_engine.models import DebateMessage, JudgeScore
from debate_engine.types import Stance, Winner
from judges.ai_judge import AIJudge, parse_evaluation
from judges.factory import create_judges
from judges.scoring import calculate_debate_result


def _score(participant_id: str, stance: Stance, value: int) -> JudgeScore:
    return JudgeScore(
        session_id="s1",
        judge_id="judge-1",
        participant_id=participant_id,
        criteria="logic",
        score=value,
        comments="",
        stance=stance,
    )


def test_parse_evaluation_reads_score_and_multiline_comments() -> None:
    evaluation = parse_evaluation("score: 7\nComments: Clear structure.\nWeak sources.")

    assert evaluation.score == 7
    assert evaluation.comments == "Clear structure.\nWeak sources."


@pytest.mark.parametrize(
    ("response", "expected"),
    [
        ("SCORE: 15\nCOMMENTS: generous", 10),
        ("SCORE: 0\nCOMMENTS: harsh", 1),
        ("I liked it a lot.", 5),
    ],
)
def test_parse_evaluation_clamps_and_defaults(response: str, expected: int) -> None:
    assert parse_evaluation(response).score == expected


def test_missing_comments_fall_back_to_raw_response() -> None:
    assert parse_evaluation("SCORE: 6").comments == "SCORE: 6"


def test_pro_wins_with_higher_total() -> None:
    scores = [
        _score("pro-1", Stance.PRO, 8),
        _score("con-1", Stance.CON, 6),
        _score("pro-1", Stance.PRO, 5),
        _score("con-1", Stance.CON, 4),
    ]

    result = calculate_debate_result("s1", scores)

    assert result.winner is Winner.PRO
    assert result.total_scores == {"pro": 13, "con": 10}
    assert result.summary == "Final result: PRO wins with a total score of 13 vs 10"


def test_con_win_reports_winning_total_first() -> None:
    result = calculate_debate_result(
        "s1", [_score("pro-1", Stance.PRO, 3), _score("con-1", Stance.CON, 9)]
    )

    assert result.winner is Winner.CON
    assert result.summary == "Final result: CON wins with a total score of 9 vs 3"


def test_empty_score_set_is_a_tie() -> None:
    result = calculate_debate_result("s1", [])

    assert result.winner is Winner.TIE
    assert result.summary == "Final result: TIE with a total score of 0 vs 0"


def test_stance_is_taken_from_participant_when_missing(debaters) -> None:
    score = JudgeScore(
        session_id="s1",
        judge_id="judge-1",
        participant_id="con-1",
        criteria="logic",
        score=4,
        comments="",
    )

    result = calculate_debate_result("s1", [score], {p.id: p for p in debaters})

    assert result.total_scores == {"pro": 0, "con": 4}


def test_ai_judge_scores_participant(model_manager, providers, debaters, judge, make_session) -> None:
    session = make_session()
    providers["judge-config"].responses = ["SCORE: 12\nCOMMENTS: Excellent rebuttals."]
    pro = debaters[0]
    messages = [
        DebateMessage(session.id, pro.id, 1, 1, "Opening.", 1),
        DebateMessage(session.id, pro.id, 2, 1, "Closing.", 1),
    ]

    score = asyncio.run(AIJudge(judge, model_manager).evaluate_participant(session, pro, messages))

    assert score.score == 10
    assert score.comments == "Excellent rebuttals."
    assert score.criteria == "logic, evidence"
    assert score.stance is Stance.PRO
    prompt = providers["judge-config"].prompts[0]
    assert "Round 1: Opening.\n\nRound 2: Closing." in prompt
    assert "Your judging criteria: logic, evidence" in prompt


def test_create_judges_skips_inactive(model_manager, judge) -> None:
    inactive = replace(judge, id="judge-2", is_active=False)

    created = create_judges([judge, inactive], model_manager)

    assert [j.judge.id for j in created] == ["judge-1"]


@pytest.mark.parametrize("seed", range(20))
def test_verdict_matches_stance_totals_for_random_scores(seed: int) -> None:
    rng = random.Random(seed)
    scores = [
        _score(f"{stance.value}-{rng.randint(1, 2)}", stance, rng.randint(1, 10))
        for stance in rng.choices([Stance.PRO, Stance.CON], k=rng.randint(0, 8))
    ]
    pro = sum(s.score for s in scores if s.stance is Stance.PRO)
    con = sum(s.score for s in scores if s.stance is Stance.CON)

    result = calculate_debate_result("s1", scores)

    assert result.total_scores == {"pro": pro, "con": con}
    if pro > con:
        assert result.winner is Winner.PRO
        assert result.summary == f"Final result: PRO wins with a total score of {pro} vs {con}"
    elif con > pro:
        assert result.winner is Winner.CON
        assert result.summary == f"Final result: CON wins with a total score of {con} vs {pro}"
    else:
        assert result.winner is Winner.TIE
        assert result.summary == f"Final result: TIE with a total score of {pro} vs {con}"
