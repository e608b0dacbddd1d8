# pteprep/core/prompts.py
"""Instruction templates sent to the scoring model, one per generative type."""
from __future__ import annotations

import json
from typing import Dict

from pteprep.core.errors import ValidationFailure
from pteprep.core.question_types import (
    QuestionType,
    Strategy,
    normalized_weights,
    required_traits,
    spec_for,
)
from pteprep.models.schemas import AnswerIn, Question, ScoringRequest

QT = QuestionType

# ---------------- System prompts ----------------

SYSTEM_SPEECH = (
    "You are an expert PTE Academic Speaking evaluator trained on Pearson's scoring methodology.\n"
    "You receive the transcript of a spoken response together with the task's reference material.\n"
    "\n"
    "TRAITS (each scored 0..90):\n"
    "- content: word accuracy against the reference, key points covered, relevance\n"
    "- fluency: rhythm, hesitations and filled pauses, repetitions, false starts, pace\n"
    "- pronunciation: intelligibility of words as transcribed, stress, intonation\n"
    "\n"
    "SCALE:\n"
    "- 79-90 native-like, 65-78 good with minor issues, 50-64 noticeable problems,\n"
    "  35-49 frequent problems, 0-34 major disruption or off-topic.\n"
    "Be strict but fair and use the whole scale.\n"
    "You MUST return ONLY valid JSON with exactly the fields requested."
)

SYSTEM_WRITING = (
    "You are an expert PTE Academic Writing evaluator.\n"
    "\n"
    "TRAITS (each scored 0..90):\n"
    "- content: topic relevance, completeness, accuracy against the source\n"
    "- form: word-count and format requirements of the task\n"
    "- grammar: sentence structure, tense, agreement, punctuation\n"
    "- vocabulary: range, precision, spelling\n"
    "- structure: organisation, coherence, paragraphing\n"
    "\n"
    "A response outside the required word range must lose marks on form.\n"
    "You MUST return ONLY valid JSON with exactly the fields requested."
)

SYSTEM_BY_STRATEGY: Dict[Strategy, str] = {
    Strategy.GENERATIVE_SPEECH: SYSTEM_SPEECH,
    Strategy.GENERATIVE_WRITING: SYSTEM_WRITING,
}

# ---------------- User prompts ----------------

USER_TEMPLATES: Dict[QuestionType, str] = {
    QT.READ_ALOUD: """READ ALOUD
Original text:
"{reference}"

Transcribed speech:
"{response}"

Score content by word-level accuracy: substitutions, omissions and insertions lower it.""",

    QT.REPEAT_SENTENCE: """REPEAT SENTENCE
Original sentence:
"{reference}"

Repeated sentence:
"{response}"

Compare word by word; words in the wrong position earn half credit.""",

    QT.DESCRIBE_IMAGE: """DESCRIBE IMAGE
Image content:
"{reference}"

Student's description:
"{response}"

Score content by coverage of the main elements, key data or trends, and a conclusion.""",

    QT.RETELL_LECTURE: """RE-TELL LECTURE
Lecture content:
"{reference}"

Student's re-telling:
"{response}"

Score content by main ideas, supporting details and logical sequence, in the student's own words.""",

    QT.ANSWER_SHORT_QUESTION: """ANSWER SHORT QUESTION
Question:
"{question}"

Expected answer(s):
"{reference}"

Student's answer:
"{response}"

Content is 90 for a correct answer or accepted synonym, 45 for a related but incomplete one, 0 otherwise.""",

    QT.SUMMARISE_GROUP_DISCUSSION: """SUMMARISE GROUP DISCUSSION
Discussion:
{reference}

Student's spoken summary:
"{response}"

Content must cover the point made by every speaker.""",

    QT.RESPOND_TO_SITUATION: """RESPOND TO SITUATION
Situation:
"{reference}"

Student's response:
"{response}"

Content covers appropriateness of tone and relevance to the situation.""",

    QT.SUMMARIZE_WRITTEN_TEXT: """SUMMARIZE WRITTEN TEXT
Source text:
"{reference}"

Summary ({word_count} words, required {min_words}-{max_words} words in ONE sentence):
"{response}"

Check that it is a single grammatical sentence that captures the key points.""",

    QT.WRITE_ESSAY: """WRITE ESSAY
Prompt:
"{question}"

Essay ({word_count} words, required {min_words}-{max_words} words):
"{response}"

Evaluate argument development, introduction/body/conclusion, grammar and vocabulary range.""",

    QT.SUMMARIZE_SPOKEN_TEXT: """SUMMARIZE SPOKEN TEXT
Audio content:
"{reference}"

Written summary ({word_count} words, required {min_words}-{max_words} words):
"{response}"
""",

    QT.WRITE_FROM_DICTATION: """WRITE FROM DICTATION
Dictated sentence:
"{reference}"

Student's transcription:
"{response}"

Content is the share of dictated words written correctly; spelling counts under vocabulary.""",
}


def _check_templates() -> None:
    missing = [qt.value for qt in QuestionType
               if spec_for(qt).strategy is not Strategy.OBJECTIVE and qt not in USER_TEMPLATES]
    if missing:
        raise RuntimeError(f"generative question types without a prompt: {missing}")


_check_templates()


def word_count(text: str) -> int:
    return len(text.split())


def output_schema(question_type: QuestionType) -> str:
    traits = {name: "<0-90>" for name in required_traits(question_type)}
    schema = {
        "traitScores": traits,
        "confidence": "<0.0-1.0>",
        "strengths": ["<specific strength>", "<specific strength>"],
        "improvements": ["<specific area to improve>", "<specific area to improve>"],
        "tips": ["<actionable practice tip>", "<actionable practice tip>"],
        "overallFeedback": "<short paragraph>",
    }
    return json.dumps(schema, indent=2)


def _reference(question: Question) -> str:
    qt = question.type
    if qt in (QT.RETELL_LECTURE, QT.SUMMARIZE_SPOKEN_TEXT):
        return question.audio_script or question.text or ""
    if qt is QT.DESCRIBE_IMAGE:
        return question.image_description or ""
    if qt is QT.RESPOND_TO_SITUATION:
        return question.context or ""
    if qt is QT.SUMMARISE_GROUP_DISCUSSION:
        return "\n".join(f"- {s.name}: {s.text}" for s in question.discussion) or (question.audio_script or "")
    if qt is QT.ANSWER_SHORT_QUESTION:
        return " / ".join(question.correct_answers)
    if qt is QT.WRITE_FROM_DICTATION:
        return question.audio_script or question.text or ""
    return question.text or ""


def validate_answer(question: Question, answer: AnswerIn) -> None:
    if answer.is_empty(question.type):
        raise ValidationFailure(f"empty answer for {question.type.value}")


def build_request(question: Question, answer: AnswerIn) -> ScoringRequest:
    """Shape the model instruction for a generative question."""
    spec = spec_for(question.type)
    if spec.strategy is Strategy.OBJECTIVE:
        raise ValueError(f"{question.type.value} is scored without the model")
    validate_answer(question, answer)

    response = answer.response_text(spec.strategy)
    count = word_count(response)
    user = USER_TEMPLATES[question.type].format(
        reference=_reference(question),
        question=question.question or "",
        response=response,
        word_count=count,
        min_words=question.min_words if question.min_words is not None else "-",
        max_words=question.max_words if question.max_words is not None else "-",
    )
    schema = output_schema(question.type)
    weights = ", ".join(f"{name} {round(w * 100)}%" for name, w in normalized_weights(question.type).items())
    user += (
        f"\n\nWeights used for the overall score: {weights}."
        f"\n\nRETURN ONLY this JSON:\n{schema}\n"
    )
    return ScoringRequest(
        question_type=question.type,
        section=spec.section,
        strategy=spec.strategy,
        system_prompt=SYSTEM_BY_STRATEGY[spec.strategy],
        user_prompt=user,
        output_schema=schema,
        word_count=count if spec.strategy is Strategy.GENERATIVE_WRITING else None,
    )
