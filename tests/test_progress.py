from pteprep.core.progress import progress_summary
from pteprep.models.db_models import Attempt


def _attempt(qtype, pct, skills, seconds=None):
    return Attempt(
        user_id="u", question_id="q", question_type=qtype, section="x",
        total_score=0, max_score=1, percentage=pct,
        skill_contributions=skills, source="objective", status="scored",
        duration_seconds=seconds,
    )


def test_empty_history():
    assert progress_summary([]) == {"attempts": 0, "overallPercentage": 0.0, "byType": {}, "bySkill": {}}


def test_skills_are_weighted_by_contribution():
    rows = [
        _attempt("read-aloud", 80, {"speaking": 0.5, "reading": 0.5}, 40),
        _attempt("mc-single", 20, {"reading": 1.0}, 60.5),
        _attempt("mc-single", 60, {"reading": 1.0}),
    ]
    out = progress_summary(rows)
    assert out["attempts"] == 3
    assert out["overallPercentage"] == 53.3
    assert out["byType"]["mc-single"] == {
        "attempts": 2, "averagePercentage": 40.0, "bestPercentage": 60, "totalTimeSeconds": 60.5,
    }
    # reading: (80*0.5 + 20 + 60) / 2.5
    assert out["bySkill"] == {"reading": 48.0, "speaking": 80.0}
