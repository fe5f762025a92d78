from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..errors import DanceAnalysisError
from ..ports.video_repo import AnalysisRecord, VideoRepository, VideoRole
from .comparison_service import get_owned_record


SORT_OPTIONS = ("date", "score", "name")
ROLE_FILTERS = ("all", "teacher", "student")
RECENT_WINDOW = timedelta(days=7)


@dataclass
class DashboardStats:
    total_videos: int
    teacher_videos: int
    student_videos: int
    average_score: int
    recent_analyses: int
    students_helped: int


def _matches(record: AnalysisRecord, term: str) -> bool:
    haystacks = [record.title, record.student_name or "", record.dance_style or ""]
    return any(term in h.lower() for h in haystacks)


@dataclass
class HistoryService:
    video_repo: VideoRepository

    def get_video(self, user_id: str, record_id: str) -> AnalysisRecord:
        return get_owned_record(self.video_repo, user_id, record_id)

    def list_history(self, user_id: str, search: Optional[str] = None, role: str = "all", sort_by: str = "date") -> List[AnalysisRecord]:
        if role not in ROLE_FILTERS:
            raise DanceAnalysisError(f"Unknown role filter '{role}'")
        if sort_by not in SORT_OPTIONS:
            raise DanceAnalysisError(f"Unknown sort option '{sort_by}'")

        records = self.video_repo.list_for_user(user_id)
        if search:
            term = search.lower()
            records = [r for r in records if _matches(r, term)]
        if role != "all":
            records = [r for r in records if r.role == VideoRole(role)]

        if sort_by == "score":
            return sorted(records, key=lambda r: r.overall_score or 0, reverse=True)
        if sort_by == "name":
            return sorted(records, key=lambda r: r.title.lower())
        return sorted(records, key=lambda r: r.created_at, reverse=True)

    def dashboard_stats(self, user_id: str, now: Optional[datetime] = None) -> DashboardStats:
        now = now or datetime.now(timezone.utc)
        records = self.video_repo.list_for_user(user_id)
        scored = [r.overall_score for r in records if r.is_completed]
        average = round(sum(scored) / len(scored)) if scored else 0

        return DashboardStats(
            total_videos=len(records),
            teacher_videos=sum(1 for r in records if r.role == VideoRole.TEACHER),
            student_videos=sum(1 for r in records if r.role == VideoRole.STUDENT),
            average_score=average,
            recent_analyses=sum(1 for r in records if r.created_at > now - RECENT_WINDOW),
            students_helped=len({r.student_name for r in records if r.student_name}),
        )
