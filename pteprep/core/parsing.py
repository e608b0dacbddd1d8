# pteprep/core/parsing.py
"""Extract and validate the judgement embedded in the model's text output."""
from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pteprep.core.errors import ParseFailure
from pteprep.core.question_types import (
    TRAIT_MAX,
    TRAIT_MIDPOINT,
    TRAIT_MIN,
    QuestionType,
    required_traits,
)

DEFAULT_CONFIDENCE = 0.85

_DECODER = json.JSONDecoder()


@dataclass
class ParsedJudgement:
    traits: Dict[str, int]
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)
    overall_feedback: str = ""
    confidence: float = DEFAULT_CONFIDENCE
    defaulted: List[str] = field(default_factory=list)


def extract_json_object(text: Optional[str]) -> Dict[str, Any]:
    """Return the first top-level JSON object found in ``text``.

    Prose and code fences around the object are ignored. Raises
    ``ParseFailure`` when no object can be decoded.
    """
    if not text:
        raise ParseFailure("empty model output", raw=text)
    pos = text.find("{")
    while pos != -1:
        try:
            obj, _end = _DECODER.raw_decode(text, pos)
        except ValueError:
            pos = text.find("{", pos + 1)
            continue
        if isinstance(obj, dict):
            return obj
        pos = text.find("{", pos + 1)
    raise ParseFailure("no JSON object in model output", raw=text)


def _number(x: Any) -> Optional[float]:
    if isinstance(x, bool):
        return None
    if isinstance(x, (int, float)):
        try:
            v = float(x)
        except OverflowError:
            return None
        # NaN, Infinity and 1e400 decode fine but are not scores
        return v if math.isfinite(v) else None
    if isinstance(x, str):
        m = re.search(r"-?\d+(?:\.\d+)?", x)
        if m:
            v = float(m.group())
            return v if math.isfinite(v) else None
    if isinstance(x, dict) and "score" in x:
        return _number(x["score"])
    return None


def clamp_trait(value: float) -> int:
    return max(TRAIT_MIN, min(TRAIT_MAX, int(round(value))))


def _lookup_trait(data: Dict[str, Any], name: str) -> Optional[float]:
    nested = data.get("traitScores") or data.get("trait_scores") or data.get("traits")
    candidates = []
    if isinstance(nested, dict):
        candidates.append(nested.get(name))
    candidates += [data.get(name), data.get(f"{name}Score"), data.get(f"{name}_score")]
    for c in candidates:
        v = _number(c)
        if v is not None:
            return v
    return None


def _str_list(x: Any) -> List[str]:
    if isinstance(x, str):
        x = [x]
    if not isinstance(x, list):
        return []
    return [str(s).strip() for s in x if str(s).strip()]


def parse_model_output(text: Optional[str], question_type: QuestionType) -> ParsedJudgement:
    """Parse, default and clamp the traits the aggregator needs for this type."""
    data = extract_json_object(text)
    wanted = required_traits(question_type)

    traits: Dict[str, int] = {}
    defaulted: List[str] = []
    for name in wanted:
        v = _lookup_trait(data, name)
        if v is None:
            defaulted.append(name)
            v = TRAIT_MIDPOINT
        traits[name] = clamp_trait(v)

    if wanted and len(defaulted) == len(wanted):
        raise ParseFailure(f"no trait scores for {question_type.value}", raw=text)

    # feedback may sit at top level, or under detailedAnalysis / feedback
    fb: Dict[str, Any] = dict(data)
    for key in ("detailedAnalysis", "feedback"):
        if isinstance(data.get(key), dict):
            fb.update({k: v for k, v in data[key].items() if v})

    conf = _number(data.get("confidence"))
    confidence = DEFAULT_CONFIDENCE if conf is None else max(0.0, min(1.0, conf))

    overall = data.get("overallFeedback") or data.get("overall_feedback") or ""
    if not isinstance(overall, str):
        overall = ""

    return ParsedJudgement(
        traits=traits,
        strengths=_str_list(fb.get("strengths")) or ["Good attempt"],
        improvements=_str_list(fb.get("improvements")) or ["Continue practicing"],
        tips=_str_list(fb.get("tips")) or ["Practice regularly"],
        overall_feedback=overall.strip(),
        confidence=round(confidence, 2),
        defaulted=defaulted,
    )
