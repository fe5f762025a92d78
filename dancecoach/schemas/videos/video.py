# dancecoach/schemas/videos.py
from pydantic import BaseModel, Field
from typing import List, Optional

from ...application.ports.video_repo import AnalysisRecord
from ...application.services.scoring import performance_message


class FeedbackSchema(BaseModel):
    strengths: List[str] = Field(default_factory=list, description="What the dancer is doing well")
    improvements: List[str] = Field(default_factory=list, description="Areas for improvement")
    recommendations: List[str] = Field(default_factory=list, description="Practice recommendations")


class VideoAnalysisResponse(BaseModel):
    id: str
    title: str
    video_url: str
    video_type: str
    student_name: Optional[str] = None
    dance_style: str
    notes: str
    status: str
    analysis_text: Optional[str] = None
    technique_score: Optional[int] = Field(None, ge=0, le=100)
    rhythm_score: Optional[int] = Field(None, ge=0, le=100)
    expression_score: Optional[int] = Field(None, ge=0, le=100)
    overall_score: Optional[int] = Field(None, ge=0, le=100)
    performance_message: Optional[str] = None
    feedback: Optional[FeedbackSchema] = None
    failure_reason: Optional[str] = None
    created_at: str
    analyzed_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: AnalysisRecord) -> "VideoAnalysisResponse":
        return cls(
            id=record.id,
            title=record.title,
            video_url=record.video_url,
            video_type=record.role.value,
            student_name=record.student_name,
            dance_style=record.dance_style,
            notes=record.notes,
            status=record.status.value,
            analysis_text=record.analysis_text,
            technique_score=record.technique_score,
            rhythm_score=record.rhythm_score,
            expression_score=record.expression_score,
            overall_score=record.overall_score,
            performance_message=performance_message(record.overall_score) if record.is_completed else None,
            feedback=FeedbackSchema(**record.feedback.to_dict()) if record.feedback else None,
            failure_reason=record.failure_reason,
            created_at=record.created_at.isoformat(),
            analyzed_at=record.analyzed_at.isoformat() if record.analyzed_at else None,
        )


class DashboardStatsResponse(BaseModel):
    total_videos: int
    teacher_videos: int
    student_videos: int
    average_score: int = Field(..., ge=0, le=100)
    recent_analyses: int = Field(..., description="Videos uploaded in the last 7 days")
    students_helped: int
