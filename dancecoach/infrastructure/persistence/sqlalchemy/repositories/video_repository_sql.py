import json
from datetime import datetime, timezone
from typing import List, Optional
from sqlmodel import Session, select

from .....db.models import DanceVideo
from .....application.ports.video_repo import (
    AnalysisRecord,
    AnalysisStatus,
    Feedback,
    VideoRepository,
    VideoRole,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite returns stored timestamps without their offset
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class SqlVideoRepository(VideoRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_record(self, v: DanceVideo) -> AnalysisRecord:
        return AnalysisRecord(
            id=v.id,
            user_id=v.user_id,
            title=v.title,
            video_url=v.video_url,
            role=VideoRole(v.video_type),
            student_name=v.student_name,
            dance_style=v.dance_style,
            notes=v.notes,
            created_at=_as_utc(v.created_at),
            status=AnalysisStatus(v.status),
            analysis_text=v.analysis_text,
            technique_score=v.technique_score,
            rhythm_score=v.rhythm_score,
            expression_score=v.expression_score,
            overall_score=v.overall_score,
            feedback=Feedback.from_dict(json.loads(v.feedback)) if v.feedback else None,
            analyzed_at=_as_utc(v.analyzed_at),
            failure_reason=v.failure_reason,
        )

    def create(self, user_id: str, title: str, video_url: str, role: VideoRole, student_name: Optional[str], dance_style: str, notes: str) -> AnalysisRecord:
        entry = DanceVideo(
            user_id=user_id,
            title=title,
            video_url=video_url,
            video_type=VideoRole(role).value,
            student_name=student_name,
            dance_style=dance_style,
            notes=notes,
            status=AnalysisStatus.SUBMITTED.value,
        )
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return self._to_record(entry)

    def get(self, record_id: str) -> Optional[AnalysisRecord]:
        entry = self.session.get(DanceVideo, record_id)
        return self._to_record(entry) if entry else None

    def list_for_user(self, user_id: str) -> List[AnalysisRecord]:
        rows = self.session.exec(
            select(DanceVideo)
            .where(DanceVideo.user_id == user_id)
            .order_by(DanceVideo.created_at.desc())
        ).all()
        return [self._to_record(r) for r in rows]

    def update(self, record: AnalysisRecord) -> AnalysisRecord:
        """Write the mutable analysis fields; identity fields are never changed."""
        entry = self.session.get(DanceVideo, record.id)
        if entry is None:
            raise KeyError(record.id)
        entry.status = AnalysisStatus(record.status).value
        entry.analysis_text = record.analysis_text
        entry.technique_score = record.technique_score
        entry.rhythm_score = record.rhythm_score
        entry.expression_score = record.expression_score
        entry.overall_score = record.overall_score
        entry.feedback = json.dumps(record.feedback.to_dict()) if record.feedback else None
        entry.analyzed_at = record.analyzed_at
        entry.failure_reason = record.failure_reason
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return self._to_record(entry)
