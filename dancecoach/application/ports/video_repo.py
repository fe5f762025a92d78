from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class VideoRole(str, Enum):
    TEACHER = "teacher"
    STUDENT = "student"


class AnalysisStatus(str, Enum):
    SUBMITTED = "submitted"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class Feedback:
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "recommendations": list(self.recommendations),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Feedback":
        return cls(
            strengths=list(data.get("strengths") or []),
            improvements=list(data.get("improvements") or []),
            recommendations=list(data.get("recommendations") or []),
        )


@dataclass
class AnalysisRecord:
    id: str
    user_id: str
    title: str
    video_url: str
    role: VideoRole
    student_name: Optional[str]
    dance_style: str
    notes: str
    created_at: datetime
    status: AnalysisStatus = AnalysisStatus.SUBMITTED
    analysis_text: Optional[str] = None
    technique_score: Optional[int] = None
    rhythm_score: Optional[int] = None
    expression_score: Optional[int] = None
    overall_score: Optional[int] = None
    feedback: Optional[Feedback] = None
    analyzed_at: Optional[datetime] = None
    failure_reason: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == AnalysisStatus.COMPLETED


class VideoRepository:
    def create(self, user_id: str, title: str, video_url: str, role: VideoRole, student_name: Optional[str], dance_style: str, notes: str) -> AnalysisRecord:
        ...

    def get(self, record_id: str) -> Optional[AnalysisRecord]:
        ...

    def list_for_user(self, user_id: str) -> List[AnalysisRecord]:
        ...

    def update(self, record: AnalysisRecord) -> AnalysisRecord:
        ...
