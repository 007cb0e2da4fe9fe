"""Prompt templates for debate participants and judges."""

from .models import DebateMessage, DebateSession, Judge, Participant


class PromptBuilder:
    """Renders the prompts sent to participants and judges."""

    def __init__(self, session: DebateSession):
        self.session = session

    def participant_prompt(self, participant: Participant, round_number: int, context: str) -> str:
        """Create the prompt for a participant's turn."""
        return f"""You are {participant.name}, participating in a debate with the {participant.stance.value} stance on the topic: "{self.session.topic}".

Your personality: {participant.personality}

Additional instructions: {participant.instructions}

This is round {round_number} of the debate. You have a maximum of {self.session.max_words_per_turn} words for your response.

{context}

Please provide your argument for this round:"""

    def judge_prompt(
        self, judge: Judge, participant: Participant, messages: list[DebateMessage]
    ) -> str:
        """Create the scoring prompt for one judge and one participant."""
        participant_arguments = "\n\n".join(
            f"Round {msg.round}: {msg.content}" for msg in messages
        )

        return f"""You are {judge.name}, a judge evaluating a debate on "{self.session.topic}".

Your judging criteria: {', '.join(judge.criteria)}
Your instructions: {judge.instructions}

Please evaluate the following participant's performance:
Participant: {participant.name} ({participant.stance.value} stance)

Their arguments:
{participant_arguments}

Please provide a score from 1-10 and detailed comments explaining your evaluation. Respond in this format:
SCORE: [number from 1-10]
COMMENTS: [detailed explanation]"""
