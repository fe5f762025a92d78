from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from dancecoach.application.errors import ExternalCallFailed
from dancecoach.application.ports.video_repo import (
    AnalysisRecord,
    AnalysisStatus,
    Feedback,
    VideoRole,
)


class FakeVideoRepo:
    def __init__(self):
        self.rows: Dict[str, AnalysisRecord] = {}
        self.status_history: Dict[str, List[AnalysisStatus]] = {}
        self._id = 1

    def create(self, user_id: str, title: str, video_url: str, role: VideoRole, student_name: Optional[str], dance_style: str, notes: str):
        rec = AnalysisRecord(
            id=f"video_{self._id}",
            user_id=user_id,
            title=title,
            video_url=video_url,
            role=VideoRole(role),
            student_name=student_name,
            dance_style=dance_style,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )
        self._id += 1
        self.rows[rec.id] = rec
        self.status_history[rec.id] = [rec.status]
        return replace(rec)

    def add(self, record: AnalysisRecord) -> AnalysisRecord:
        self.rows[record.id] = record
        return record

    def get(self, record_id: str):
        rec = self.rows.get(record_id)
        return replace(rec) if rec else None

    def list_for_user(self, user_id: str):
        rows = [r for r in self.rows.values() if r.user_id == user_id]
        return sorted(rows, key=lambda r: r.created_at, reverse=True)

    def update(self, record: AnalysisRecord):
        self.rows[record.id] = replace(record)
        self.status_history.setdefault(record.id, []).append(record.status)
        return replace(record)


class FakeGenerator:
    def __init__(self, text: str = "Solid performance overall."):
        self.text = text
        self.calls = []

    def generate_text(self, prompt: str, max_tokens: int) -> str:
        self.calls.append((prompt, max_tokens))
        return self.text


class FailingGenerator:
    def __init__(self, message: str = "AI service unavailable"):
        self.message = message
        self.calls = 0

    def generate_text(self, prompt: str, max_tokens: int) -> str:
        self.calls += 1
        raise ExternalCallFailed(self.message)


class FakeStorage:
    def __init__(self):
        self.saved = []

    def save_bytes(self, subdir: str, filename: str, data: bytes) -> str:
        self.saved.append((subdir, filename, data))
        return f"https://cdn.example.com/{subdir}/{filename}"


def make_record(
    record_id: str,
    role: VideoRole = VideoRole.STUDENT,
    technique: int = 75,
    rhythm: int = 75,
    expression: int = 75,
    overall: Optional[int] = None,
    dance_style: str = "",
    status: AnalysisStatus = AnalysisStatus.COMPLETED,
    user_id: str = "u1",
    title: str = "practice.mp4",
    student_name: Optional[str] = "Asha",
    created_at: Optional[datetime] = None,
) -> AnalysisRecord:
    completed = status == AnalysisStatus.COMPLETED
    if overall is None and completed:
        overall = round((technique + rhythm + expression) / 3)
    return AnalysisRecord(
        id=record_id,
        user_id=user_id,
        title=title,
        video_url=f"https://cdn.example.com/{record_id}.mp4",
        role=role,
        student_name=student_name if role == VideoRole.STUDENT else None,
        dance_style=dance_style,
        notes="",
        created_at=created_at or datetime.now(timezone.utc),
        status=status,
        analysis_text="narrative" if completed else None,
        technique_score=technique if completed else None,
        rhythm_score=rhythm if completed else None,
        expression_score=expression if completed else None,
        overall_score=overall if completed else None,
        feedback=Feedback(["s"], ["i"], ["r"]) if completed else None,
        analyzed_at=datetime.now(timezone.utc) if completed else None,
    )
