import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..errors import IncompleteRecord
from ..ports.video_repo import AnalysisRecord
from .style_content import (
    INTENSIFY_PRACTICE,
    DanceStyle,
    practice_recommendations_for,
    specific_improvements_for,
)

logger = logging.getLogger(__name__)

SIGNIFICANT_DIMENSION_GAP = 10
INTENSIFY_OVERALL_GAP = 20


class ScoreDimension(str, Enum):
    # Declaration order is the precedence used when scanning for the dominant gap.
    TECHNIQUE = "technique"
    RHYTHM = "rhythm"
    EXPRESSION = "expression"


DIFFERENCE_STATEMENTS = {
    ScoreDimension.TECHNIQUE: "Significant technique gap in posture and form execution",
    ScoreDimension.RHYTHM: "Timing and rhythm synchronization needs improvement",
    ScoreDimension.EXPRESSION: "Emotional expression and artistic interpretation can be enhanced",
}

CLOSING_DIFFERENCES = (
    "Teacher demonstrates more refined movement quality",
    "Student shows good foundation but needs refinement",
)

FOCUS_STATEMENTS = {
    ScoreDimension.TECHNIQUE: "Technique is the primary focus area",
    ScoreDimension.RHYTHM: "Rhythm and timing need immediate attention",
    ScoreDimension.EXPRESSION: "Artistic expression requires development",
}

ENCOURAGEMENT = (
    "Consistent practice will show improvement",
    "Focus on one area at a time for better results",
)


def gap_severity(gap: int) -> str:
    if gap <= 5:
        return "low"
    if gap <= 15:
        return "moderate"
    return "high"


@dataclass(frozen=True)
class ComparisonReport:
    student_id: str
    teacher_id: str
    overall_gap: int
    technique_gap: int
    rhythm_gap: int
    expression_gap: int
    key_differences: Tuple[str, ...]
    specific_improvements: Tuple[str, ...]
    practice_recommendations: Tuple[str, ...]
    progress_areas: Tuple[str, ...]
    dominant_dimension: Optional[ScoreDimension] = None
    narrative: Optional[str] = None

    def gap_for(self, dimension: ScoreDimension) -> int:
        return getattr(self, f"{dimension.value}_gap")


def _score(record: AnalysisRecord, dimension: ScoreDimension) -> int:
    return getattr(record, f"{dimension.value}_score")


def dominant_dimension(technique_gap: int, rhythm_gap: int, expression_gap: int) -> Optional[ScoreDimension]:
    """The dimension whose gap is strictly larger than both others, if any."""
    gaps = {
        ScoreDimension.TECHNIQUE: technique_gap,
        ScoreDimension.RHYTHM: rhythm_gap,
        ScoreDimension.EXPRESSION: expression_gap,
    }
    for dimension in ScoreDimension:
        others = [g for d, g in gaps.items() if d is not dimension]
        if all(gaps[dimension] > g for g in others):
            return dimension
    return None


class GapAnalyzer:
    """Turns a completed student record and a completed teacher reference
    into a ComparisonReport.

    Gaps are ``teacher - student`` and keep their sign; a student who
    outperforms the teacher gets a negative gap, which never crosses the
    positive thresholds below. Content lists are keyed on the student's
    declared style.
    """

    def compare(self, student: AnalysisRecord, teacher: AnalysisRecord) -> ComparisonReport:
        for record in (student, teacher):
            if not record.is_completed:
                raise IncompleteRecord(record.id, record.status.value)

        gaps = {d: _score(teacher, d) - _score(student, d) for d in ScoreDimension}
        overall_gap = teacher.overall_score - student.overall_score
        style = DanceStyle.from_tag(student.dance_style)
        dominant = dominant_dimension(
            gaps[ScoreDimension.TECHNIQUE],
            gaps[ScoreDimension.RHYTHM],
            gaps[ScoreDimension.EXPRESSION],
        )

        logger.info(
            f"Compared student {student.id} with teacher {teacher.id}: "
            f"overall gap {overall_gap}, style {style.value}, dominant {dominant.value if dominant else None}"
        )

        return ComparisonReport(
            student_id=student.id,
            teacher_id=teacher.id,
            overall_gap=overall_gap,
            technique_gap=gaps[ScoreDimension.TECHNIQUE],
            rhythm_gap=gaps[ScoreDimension.RHYTHM],
            expression_gap=gaps[ScoreDimension.EXPRESSION],
            key_differences=self._key_differences(gaps),
            specific_improvements=self._specific_improvements(style, overall_gap),
            practice_recommendations=tuple(practice_recommendations_for(style)),
            progress_areas=self._progress_areas(dominant),
            dominant_dimension=dominant,
        )

    def _key_differences(self, gaps) -> Tuple[str, ...]:
        differences = [
            DIFFERENCE_STATEMENTS[d] for d in ScoreDimension if gaps[d] > SIGNIFICANT_DIMENSION_GAP
        ]
        differences.extend(CLOSING_DIFFERENCES)
        return tuple(differences)

    def _specific_improvements(self, style: DanceStyle, overall_gap: int) -> Tuple[str, ...]:
        improvements = specific_improvements_for(style)
        if overall_gap > INTENSIFY_OVERALL_GAP:
            improvements.extend(INTENSIFY_PRACTICE)
        return tuple(improvements)

    def _progress_areas(self, dominant: Optional[ScoreDimension]) -> Tuple[str, ...]:
        areas = [FOCUS_STATEMENTS[dominant]] if dominant else []
        areas.extend(ENCOURAGEMENT)
        return tuple(areas)
