import logging
from dataclasses import dataclass, field, replace

from starlette.concurrency import run_in_threadpool

from ..errors import InvalidRole, RecordNotFound
from ..ports.text_generator import TextGenerator
from ..ports.video_repo import AnalysisRecord, VideoRepository, VideoRole
from .gap_analyzer import ComparisonReport, GapAnalyzer
from .prompts import build_comparison_prompt

logger = logging.getLogger(__name__)

DEFAULT_COMPARISON_MAX_TOKENS = 1200


def get_owned_record(video_repo: VideoRepository, user_id: str, record_id: str) -> AnalysisRecord:
    record = video_repo.get(record_id)
    if record is None or record.user_id != user_id:
        raise RecordNotFound(record_id)
    return record


def require_role(record: AnalysisRecord, role: VideoRole) -> AnalysisRecord:
    if record.role != role:
        raise InvalidRole(f"Video {record.id} is a {record.role.value} recording, expected {role.value}")
    return record


@dataclass
class ComparisonService:
    video_repo: VideoRepository
    text_generator: TextGenerator
    gap_analyzer: GapAnalyzer = field(default_factory=GapAnalyzer)
    max_tokens: int = DEFAULT_COMPARISON_MAX_TOKENS

    async def compare(self, user_id: str, student_id: str, teacher_id: str, include_narrative: bool = True) -> ComparisonReport:
        student = require_role(get_owned_record(self.video_repo, user_id, student_id), VideoRole.STUDENT)
        teacher = require_role(get_owned_record(self.video_repo, user_id, teacher_id), VideoRole.TEACHER)

        # Rejects incomplete records before any external call is made.
        report = self.gap_analyzer.compare(student, teacher)
        if not include_narrative:
            return report

        logger.info(f"Requesting comparison narrative for {student_id} vs {teacher_id}")

        prompt = build_comparison_prompt(student, teacher)
        narrative = await run_in_threadpool(self.text_generator.generate_text, prompt, self.max_tokens)
        return replace(report, narrative=narrative)
