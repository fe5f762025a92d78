# dancecoach/schemas/comparison.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from ...application.services.gap_analyzer import ComparisonReport, ScoreDimension, gap_severity


class ComparisonResponse(BaseModel):
    student_video_id: str
    teacher_video_id: str
    overall_gap: int = Field(..., description="teacher.overall - student.overall, may be negative")
    technique_gap: int
    rhythm_gap: int
    expression_gap: int
    gap_severity: Dict[str, str]
    key_differences: List[str]
    specific_improvements: List[str]
    practice_recommendations: List[str]
    progress_areas: List[str]
    dominant_dimension: Optional[str] = None
    narrative: Optional[str] = None

    @classmethod
    def from_report(cls, report: ComparisonReport) -> "ComparisonResponse":
        severity = {"overall": gap_severity(report.overall_gap)}
        severity.update({d.value: gap_severity(report.gap_for(d)) for d in ScoreDimension})
        return cls(
            student_video_id=report.student_id,
            teacher_video_id=report.teacher_id,
            overall_gap=report.overall_gap,
            technique_gap=report.technique_gap,
            rhythm_gap=report.rhythm_gap,
            expression_gap=report.expression_gap,
            gap_severity=severity,
            key_differences=list(report.key_differences),
            specific_improvements=list(report.specific_improvements),
            practice_recommendations=list(report.practice_recommendations),
            progress_areas=list(report.progress_areas),
            dominant_dimension=report.dominant_dimension.value if report.dominant_dimension else None,
            narrative=report.narrative,
        )
