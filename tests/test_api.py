import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from dancecoach.main import app
from dancecoach.core.config import settings
from dancecoach.dependencies import (
    get_current_user,
    get_storage_repository,
    get_text_generator,
    get_video_repository,
)
from dancecoach.middleware import AnalysisRateLimitMiddleware
from dancecoach.application.ports.video_repo import AnalysisStatus, VideoRole

from fakes import FailingGenerator, FakeGenerator, FakeStorage, FakeVideoRepo, make_record


@pytest.fixture
def repo():
    return FakeVideoRepo()


@pytest.fixture
def client(repo):
    ai = FakeGenerator("Strengths:\n- Balanced chakkars\n")
    app.dependency_overrides[get_current_user] = lambda: "u1"
    app.dependency_overrides[get_video_repository] = lambda: repo
    app.dependency_overrides[get_text_generator] = lambda: ai
    app.dependency_overrides[get_storage_repository] = lambda: FakeStorage()
    yield TestClient(app)
    app.dependency_overrides.clear()


def upload(client, **form):
    data = {"video_type": "student", "student_name": "Asha", "dance_style": "kathak", "notes": ""}
    data.update(form)
    return client.post(
        "/videos",
        data=data,
        files={"file": ("tatkaar.mp4", b"fakevideo", "video/mp4")},
    )


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_upload_runs_analysis(client, repo):
    res = upload(client)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    data = body["data"]
    assert data["status"] == "completed"
    assert data["video_type"] == "student"
    assert data["video_url"] == "https://cdn.example.com/dance-videos/tatkaar.mp4"
    assert data["title"] == "tatkaar.mp4"
    assert 60 <= data["overall_score"] <= 100
    assert data["performance_message"]
    assert len(data["feedback"]["strengths"]) == 3
    assert repo.rows[data["id"]].status == AnalysisStatus.COMPLETED


def test_upload_rejects_non_video(client):
    res = client.post(
        "/videos",
        data={"video_type": "teacher"},
        files={"file": ("notes.pdf", b"%PDF", "application/pdf")},
    )
    assert res.status_code == 415
    assert res.json()["success"] is False


def test_upload_student_without_name(client, repo):
    res = upload(client, student_name="")
    assert res.status_code == 422
    assert "student name" in res.json()["error"]
    assert repo.rows == {}


def test_upload_external_failure_returns_502(client, repo):
    app.dependency_overrides[get_text_generator] = lambda: FailingGenerator("model offline")
    res = upload(client)
    assert res.status_code == 502
    assert "model offline" in res.json()["error"]
    (stored,) = repo.rows.values()
    assert stored.status == AnalysisStatus.FAILED


def test_get_video_of_another_user_is_404(client, repo):
    repo.add(make_record("theirs", user_id="u2"))
    res = client.get("/videos/theirs")
    assert res.status_code == 404
    assert res.json()["success"] is False


def test_list_videos_sorted_by_score(client, repo):
    repo.add(make_record("low", VideoRole.STUDENT, 65, 65, 65))
    repo.add(make_record("high", VideoRole.TEACHER, 95, 95, 95))
    res = client.get("/videos", params={"sort_by": "score"})
    assert res.status_code == 200
    assert [v["id"] for v in res.json()["data"]] == ["high", "low"]


def test_list_videos_rejects_unknown_sort(client):
    assert client.get("/videos", params={"sort_by": "views"}).status_code == 422


def test_compare_endpoint(client, repo):
    repo.add(make_record("s1", VideoRole.STUDENT, 70, 65, 72, overall=69, dance_style="kathak"))
    repo.add(make_record("t1", VideoRole.TEACHER, 92, 90, 88, overall=90))
    res = client.get("/comparisons", params={"student_id": "s1", "teacher_id": "t1"})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["overall_gap"] == 21
    assert data["dominant_dimension"] == "rhythm"
    assert len(data["practice_recommendations"]) == 5
    assert len(data["specific_improvements"]) == 6
    assert data["gap_severity"] == {"overall": "high", "technique": "high", "rhythm": "high", "expression": "high"}
    assert data["narrative"]


def test_compare_incomplete_is_409(client, repo):
    repo.add(make_record("s1", VideoRole.STUDENT, status=AnalysisStatus.ANALYZING))
    repo.add(make_record("t1", VideoRole.TEACHER))
    res = client.get("/comparisons", params={"student_id": "s1", "teacher_id": "t1", "include_narrative": "false"})
    assert res.status_code == 409


def test_compare_swapped_roles_is_422(client, repo):
    repo.add(make_record("s1", VideoRole.STUDENT))
    repo.add(make_record("t1", VideoRole.TEACHER))
    res = client.get("/comparisons", params={"student_id": "t1", "teacher_id": "s1", "include_narrative": "false"})
    assert res.status_code == 422
    assert res.json()["success"] is False


def test_dashboard_stats(client, repo):
    repo.add(make_record("a", VideoRole.STUDENT, 70, 70, 70, student_name="Asha"))
    repo.add(make_record("b", VideoRole.TEACHER, 90, 90, 90))
    res = client.get("/dashboard/stats")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["total_videos"] == 2
    assert data["average_score"] == 80
    assert data["students_helped"] == 1


def test_missing_token_is_401(repo):
    app.dependency_overrides[get_video_repository] = lambda: repo
    try:
        res = TestClient(app).get("/videos")
    finally:
        app.dependency_overrides.clear()
    assert res.status_code == 401
    assert res.json()["success"] is False


def test_valid_token_identifies_user(repo, monkeypatch):
    monkeypatch.setattr(settings, "SECRET_KEY", "test-secret")
    repo.add(make_record("mine", user_id="user-9"))
    app.dependency_overrides[get_video_repository] = lambda: repo
    token = jwt.encode({"sub": "user-9"}, "test-secret", algorithm="HS256")
    try:
        res = TestClient(app).get("/videos", headers={"Authorization": f"Bearer {token}"})
    finally:
        app.dependency_overrides.clear()
    assert res.status_code == 200
    assert [v["id"] for v in res.json()["data"]] == ["mine"]


def test_analysis_rate_limit():
    limited = FastAPI()
    limited.add_middleware(AnalysisRateLimitMiddleware, rate_limit=2)

    @limited.post("/videos")
    def submit():
        return {"ok": True}

    @limited.get("/videos")
    def listing():
        return {"ok": True}

    client = TestClient(limited)
    assert client.post("/videos").status_code == 200
    assert client.post("/videos").status_code == 200
    assert client.post("/videos").status_code == 429
    assert client.get("/videos").status_code == 200
