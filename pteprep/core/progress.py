# pteprep/core/progress.py
from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable

from pteprep.models.db_models import Attempt


def _avg(values) -> float:
    values = list(values)
    return round(sum(values) / len(values), 1) if values else 0.0


def progress_summary(attempts: Iterable[Attempt]) -> Dict[str, Any]:
    """
    Aggregate a user's attempts.

    by_type:  count, average / best percentage and total time per question type
    by_skill: average percentage per skill, weighted by the type's skill contributions
    overall:  plain average percentage over every attempt
    """
    per_type: Dict[str, list] = defaultdict(list)
    skill_num: Dict[str, float] = defaultdict(float)
    skill_den: Dict[str, float] = defaultdict(float)
    percentages = []

    for a in attempts:
        per_type[a.question_type].append(a)
        percentages.append(a.percentage)
        for skill, w in (a.skill_contributions or {}).items():
            try:
                w = float(w)
            except (TypeError, ValueError):
                continue
            if w <= 0:
                continue
            skill_num[skill] += a.percentage * w
            skill_den[skill] += w

    by_type = {}
    for qtype, rows in sorted(per_type.items()):
        by_type[qtype] = {
            "attempts": len(rows),
            "averagePercentage": _avg(r.percentage for r in rows),
            "bestPercentage": max(r.percentage for r in rows),
            "totalTimeSeconds": round(sum(r.duration_seconds or 0 for r in rows), 1),
        }

    by_skill = {
        skill: round(skill_num[skill] / skill_den[skill], 1)
        for skill in sorted(skill_den)
        if skill_den[skill] > 0
    }

    return {
        "attempts": len(percentages),
        "overallPercentage": _avg(percentages),
        "byType": by_type,
        "bySkill": by_skill,
    }
