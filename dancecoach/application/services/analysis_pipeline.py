import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional

from starlette.concurrency import run_in_threadpool

from ..errors import AnalysisFailed, InvalidRole
from ..ports.text_generator import TextGenerator
from ..ports.video_repo import AnalysisRecord, AnalysisStatus, VideoRepository, VideoRole
from .feedback_parser import FeedbackParser, TemplateFeedbackParser
from .prompts import build_analysis_prompt
from .scoring import ScoreSynthesizer

logger = logging.getLogger(__name__)

DEFAULT_ANALYSIS_MAX_TOKENS = 1000


@dataclass
class VideoSubmission:
    user_id: str
    title: str
    video_url: str
    role: str
    dance_style: str = ""
    notes: str = ""
    student_name: Optional[str] = None


def validate_submission(submission: VideoSubmission) -> VideoRole:
    try:
        role = VideoRole(submission.role)
    except ValueError:
        raise InvalidRole(f"Unknown video role '{submission.role}'")
    if role == VideoRole.STUDENT and not (submission.student_name or "").strip():
        raise InvalidRole("Student videos require a student name")
    return role


@dataclass
class AnalysisPipeline:
    """Takes one uploaded video from ``submitted`` to ``completed``.

    The text-generation call is the only suspension point. If it fails the
    record is moved to ``failed`` with the reason and ``AnalysisFailed`` is
    raised; no partially scored record is ever stored.
    """

    video_repo: VideoRepository
    text_generator: TextGenerator
    score_synthesizer: ScoreSynthesizer = field(default_factory=ScoreSynthesizer)
    feedback_parser: FeedbackParser = field(default_factory=TemplateFeedbackParser)
    max_tokens: int = DEFAULT_ANALYSIS_MAX_TOKENS

    async def run(self, submission: VideoSubmission, seed: Optional[int] = None) -> AnalysisRecord:
        role = validate_submission(submission)

        record = self.video_repo.create(
            user_id=submission.user_id,
            title=submission.title,
            video_url=submission.video_url,
            role=role,
            student_name=submission.student_name.strip() if role == VideoRole.STUDENT else None,
            dance_style=submission.dance_style or "",
            notes=submission.notes or "",
        )
        logger.info(f"Video {record.id} submitted by user {record.user_id} ({role.value})")

        record = self.video_repo.update(replace(record, status=AnalysisStatus.ANALYZING))
        logger.info(f"Video {record.id} analyzing")

        prompt = build_analysis_prompt(role, record.dance_style, record.student_name, record.notes)
        try:
            analysis_text = await run_in_threadpool(self.text_generator.generate_text, prompt, self.max_tokens)
        except Exception as e:
            reason = str(e) or e.__class__.__name__
            logger.error(f"Text generation failed for video {record.id}: {reason}")
            self.video_repo.update(replace(record, status=AnalysisStatus.FAILED, failure_reason=reason))
            raise AnalysisFailed(record.id, reason) from e

        scores = self.score_synthesizer.synthesize(role, seed=seed)
        feedback = self.feedback_parser.parse(analysis_text, role, seed=seed)

        completed = replace(
            record,
            status=AnalysisStatus.COMPLETED,
            analysis_text=analysis_text,
            technique_score=scores.technique,
            rhythm_score=scores.rhythm,
            expression_score=scores.expression,
            overall_score=scores.overall,
            feedback=feedback,
            analyzed_at=datetime.now(timezone.utc),
        )
        completed = self.video_repo.update(completed)
        logger.info(f"Video {completed.id} completed with overall score {completed.overall_score}")
        return completed
