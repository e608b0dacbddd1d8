# pteprep/models/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from pteprep.core.question_types import (
    FILL_BLANK_TYPES,
    QuestionType,
    Section,
    Strategy,
    spec_for,
)


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; both accepted on input."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


# ============================== Questions ==============================

class Option(CamelModel):
    id: str
    text: str


class Blank(CamelModel):
    id: str
    correct_answer: str
    options: List[str] = Field(default_factory=list)


class Speaker(CamelModel):
    name: str
    text: str


class Question(CamelModel):
    """One exam item. Reference data: built once, never mutated."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    type: QuestionType
    title: str
    instruction: str = ""
    difficulty: str = "medium"
    prep_time: int = 0
    response_time: int = 0

    # reference content, used depending on type
    text: Optional[str] = None
    audio_script: Optional[str] = None
    image_description: Optional[str] = None
    question: Optional[str] = None
    context: Optional[str] = None
    discussion: List[Speaker] = Field(default_factory=list)
    options: List[Option] = Field(default_factory=list)
    items: List[Option] = Field(default_factory=list)

    # correct answers
    correct_answers: List[str] = Field(default_factory=list)
    correct_order: List[str] = Field(default_factory=list)
    blanks: List[Blank] = Field(default_factory=list)

    min_words: Optional[int] = None
    max_words: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def _default_word_bounds(cls, data: Any) -> Any:
        if isinstance(data, dict):
            qtype = data.get("type")
            try:
                bounds = spec_for(qtype).word_bounds if qtype else None
            except ValueError:
                bounds = None
            if bounds:
                data = dict(data)
                data.setdefault("min_words", bounds[0])
                data.setdefault("max_words", bounds[1])
        return data

    @property
    def section(self) -> Section:
        return spec_for(self.type).section

    @property
    def strategy(self) -> Strategy:
        return spec_for(self.type).strategy

    @property
    def max_score(self) -> int:
        return spec_for(self.type).max_score

    def public_view(self, include_correct: bool = False) -> Dict[str, Any]:
        hidden = set() if include_correct else {"correct_answers", "correct_order"}
        out = self.model_dump(by_alias=True, exclude=hidden, mode="json")
        if not include_correct:
            out["blanks"] = [{"id": b.id, "options": b.options} for b in self.blanks]
        out["section"] = self.section.value
        out["maxScore"] = self.max_score
        return out


# ============================== Answers ==============================

class AnswerIn(CamelModel):
    """A user's response. Only the fields matching the question type are read."""
    spoken_text: Optional[str] = None
    audio_ref: Optional[str] = None
    written_text: Optional[str] = None
    selected_options: List[str] = Field(default_factory=list)
    ordered_items: List[str] = Field(default_factory=list)
    blank_answers: Dict[str, str] = Field(default_factory=dict)
    duration_seconds: Optional[float] = Field(default=None, ge=0)

    def response_text(self, strategy: Strategy) -> str:
        if strategy is Strategy.GENERATIVE_SPEECH:
            return (self.spoken_text or "").strip()
        if strategy is Strategy.GENERATIVE_WRITING:
            return (self.written_text or "").strip()
        return ""

    def is_empty(self, question_type: QuestionType) -> bool:
        strategy = spec_for(question_type).strategy
        if strategy is not Strategy.OBJECTIVE:
            return not self.response_text(strategy)
        if question_type is QuestionType.REORDER_PARAGRAPHS:
            return not self.ordered_items
        if question_type in FILL_BLANK_TYPES:
            filled = any((v or "").strip() for v in self.blank_answers.values())
            return not filled and not any((s or "").strip() for s in self.selected_options)
        return not self.selected_options

    def rendering(self, question_type: QuestionType) -> str:
        """Plain-text rendering stored in history."""
        strategy = spec_for(question_type).strategy
        if strategy is not Strategy.OBJECTIVE:
            return self.response_text(strategy)
        if question_type is QuestionType.REORDER_PARAGRAPHS:
            return " > ".join(self.ordered_items)
        if self.blank_answers:
            return "; ".join(f"{k}={v}" for k, v in sorted(self.blank_answers.items()))
        return ", ".join(self.selected_options)


# ============================== Results ==============================

class ScoreResult(CamelModel):
    total_score: int
    max_score: int
    percentage: int
    traits: Dict[str, int] = Field(default_factory=dict)
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    overall_feedback: str = ""
    confidence: float = 1.0
    source: str = "objective"  # objective | llm | fallback | validation | limit
    ai_available: bool = True
    needs_review: bool = False
    skill_contributions: Dict[str, float] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _bounded(self) -> "ScoreResult":
        if self.max_score <= 0:
            raise ValueError("max_score must be positive")
        if not 0 <= self.total_score <= self.max_score:
            raise ValueError(f"total_score {self.total_score} outside 0..{self.max_score}")
        if self.percentage != round(self.total_score / self.max_score * 100):
            raise ValueError("percentage does not match total_score / max_score")
        return self


class QuotaInfo(CamelModel):
    state: str  # available | exhausted
    tier: str
    used: int
    limit: int
    remaining: int
    resets_at: datetime


class ScoreOutcome(CamelModel):
    status: str  # scored | limit_reached | failed
    question_id: str
    question_type: QuestionType
    result: ScoreResult
    error_kind: Optional[str] = None
    message: Optional[str] = None
    quota: Optional[QuotaInfo] = None
    attempt_id: Optional[int] = None


class ScoringRequest(CamelModel):
    """Instruction pair sent to the scoring model for one answer."""
    question_type: QuestionType
    section: Section
    strategy: Strategy
    system_prompt: str
    user_prompt: str
    output_schema: str
    word_count: Optional[int] = None


# ============================== API misc ==============================

class TierIn(BaseModel):
    tier: str


class AttemptOut(CamelModel):
    id: int
    question_id: str
    question_type: str
    section: str
    response_text: Optional[str] = None
    total_score: int
    max_score: int
    percentage: int
    traits: Dict[str, Any] = Field(default_factory=dict)
    feedback: Dict[str, Any] = Field(default_factory=dict)
    source: str
    status: str
    duration_seconds: Optional[float] = None
    created_at: datetime


class TranscriptOut(CamelModel):
    text: str
    model_name: str


# ============================== Mock test ==============================

class MockTestAnswerIn(CamelModel):
    question_id: str
    answer: AnswerIn


class MockTestSubmission(CamelModel):
    answers: List[MockTestAnswerIn] = Field(default_factory=list)
    total_questions: Optional[int] = Field(default=None, ge=0)


class SectionScore(CamelModel):
    earned: int = 0
    max_points: int = 0
    answered: int = 0
    score: int = 10  # 10..90


class MockTestScores(CamelModel):
    speaking: int
    writing: int
    reading: int
    listening: int
    overall: int
    total_answered: int
    total_questions: int
    unscored: int = 0
    sections: Dict[str, SectionScore] = Field(default_factory=dict)
