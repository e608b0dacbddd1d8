from pteprep.core import llm, quota
from pteprep.core.settings import settings

API = "/api/pte"
USER = {"x-user-id": "student-1"}


def test_root_and_health(client):
    assert client.get("/").json()["prefix"] == API
    assert client.get("/healthz").json() == {"ok": True}
    r = client.get(f"{API}/health")
    assert r.status_code == 200
    assert "llm_configured" in r.json()


def test_question_listing_hides_answers(client):
    r = client.get(f"{API}/questions", params={"section": "reading"})
    assert r.status_code == 200
    items = r.json()["items"]
    assert items and all(q["section"] == "reading" for q in items)
    assert all("correctAnswers" not in q for q in items)

    r = client.get(f"{API}/questions/mcm-1", params={"include_correct": True})
    assert r.json()["correctAnswers"] == ["a", "c"]
    assert client.get(f"{API}/questions/missing").status_code == 404


def test_question_types_table(client):
    items = {t["type"]: t for t in client.get(f"{API}/question-types").json()["items"]}
    assert len(items) == 22
    assert items["write-essay"]["minWords"] == 200
    assert items["mc-single"]["strategy"] == "objective"


def test_score_objective_and_history(client, model):
    r = client.post(f"{API}/score/rop-1", json={"orderedItems": ["p1", "p2", "p4", "p3", "p5"]}, headers=USER)
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "scored"
    assert body["result"]["totalScore"] == 1
    assert body["result"]["maxScore"] == 4
    assert body["attemptId"] is not None
    assert model.calls == []

    hist = client.get(f"{API}/history", headers=USER).json()["items"]
    assert len(hist) == 1
    assert hist[0]["questionId"] == "rop-1"
    assert hist[0]["responseText"] == "p1 > p2 > p4 > p3 > p5"


def test_score_generative(client, model):
    r = client.post(
        f"{API}/score/swt-1",
        json={"writtenText": "Emerging markets are reshaping global trade, creating opportunities and challenges."},
        headers=USER,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["result"]["source"] == "llm"
    assert body["result"]["totalScore"] == 12
    assert body["quota"]["used"] == 1
    assert len(model.calls) == 1


def test_score_limit_returns_429(client, model):
    limit = quota.TIER_LIMITS["free"]
    payload = {"spokenText": "Please remember to bring your card."}
    for _ in range(limit):
        assert client.post(f"{API}/score/rs-1", json=payload, headers=USER).status_code == 200

    r = client.post(f"{API}/score/rs-1", json=payload, headers=USER)
    assert r.status_code == 429
    body = r.json()
    assert body["status"] == "limit_reached"
    assert body["result"]["source"] == "limit"
    assert len(model.calls) == limit

    usage = client.get(f"{API}/usage", headers=USER).json()
    assert usage["state"] == "exhausted"
    assert usage["remaining"] == 0
    # refusals are not history
    assert len(client.get(f"{API}/history", headers=USER, params={"limit": 500}).json()["items"]) == limit


def test_score_requires_user_and_known_question(client):
    assert client.post(f"{API}/score/rs-1", json={"spokenText": "hi"}).status_code == 400
    assert client.post(f"{API}/score/zzz", json={"spokenText": "hi"}, headers=USER).status_code == 404


def test_subscription_needs_api_key(client):
    r = client.put(f"{API}/subscriptions/student-1", json={"tier": "premium"})
    assert r.status_code == 401

    key = {"x-api-key": settings.API_KEY}
    r = client.put(f"{API}/subscriptions/student-1", json={"tier": "premium"}, headers=key)
    assert r.status_code == 200
    assert r.json()["dailyLimit"] == 200
    assert client.get(f"{API}/usage", headers=USER).json()["limit"] == 200

    bad = client.put(f"{API}/subscriptions/student-1", json={"tier": "gold"}, headers=key)
    assert bad.status_code == 400


def test_progress_summary_endpoint(client):
    client.post(f"{API}/score/mcs-1", json={"selectedOptions": ["b"], "durationSeconds": 30}, headers=USER)
    client.post(f"{API}/score/mcs-1", json={"selectedOptions": ["a"], "durationSeconds": 20}, headers=USER)
    body = client.get(f"{API}/progress", headers=USER).json()
    assert body["attempts"] == 2
    mc = body["byType"]["mc-single"]
    assert mc == {"attempts": 2, "averagePercentage": 50.0, "bestPercentage": 100, "totalTimeSeconds": 50.0}
    assert body["bySkill"] == {"reading": 50.0}


def test_transcribe(client, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(llm, "transcribe", lambda data, filename: "hello world")
    r = client.post(f"{API}/transcribe", files={"file": ("a.webm", b"RIFF....", "audio/webm")})
    assert r.status_code == 200
    assert r.json() == {"text": "hello world", "modelName": settings.TRANSCRIBE_MODEL}

    empty = client.post(f"{API}/transcribe", files={"file": ("a.webm", b"", "audio/webm")})
    assert empty.status_code == 400


def test_transcribe_unconfigured(client, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    r = client.post(f"{API}/transcribe", files={"file": ("a.webm", b"abc", "audio/webm")})
    assert r.status_code == 503
