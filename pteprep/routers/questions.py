# pteprep/routers/questions.py
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from pteprep.core.question_types import QUESTION_TYPES, QuestionType, Section, normalized_weights
from pteprep.data.questions import all_questions, get_question

router = APIRouter(prefix="", tags=["questions"])


@router.get("/questions")
def list_questions(
    type: Optional[QuestionType] = Query(None, description="filter by question type"),
    section: Optional[Section] = Query(None),
    include_correct: bool = Query(False),
):
    items = [q.public_view(include_correct) for q in all_questions(type, section)]
    return {"ok": True, "count": len(items), "items": items}


@router.get("/questions/{question_id}")
def question_detail(question_id: str, include_correct: bool = Query(False)):
    q = get_question(question_id)
    if q is None:
        raise HTTPException(status_code=404, detail=f"Unknown question '{question_id}'")
    return q.public_view(include_correct)


@router.get("/question-types")
def question_types():
    items = []
    for qt, spec in QUESTION_TYPES.items():
        items.append({
            "type": qt.value,
            "section": spec.section.value,
            "strategy": spec.strategy.value,
            "maxScore": spec.max_score,
            "weights": normalized_weights(qt),
            "minWords": spec.word_bounds[0] if spec.word_bounds else None,
            "maxWords": spec.word_bounds[1] if spec.word_bounds else None,
            "skills": dict(spec.skill_contributions),
        })
    return {"ok": True, "items": items}
