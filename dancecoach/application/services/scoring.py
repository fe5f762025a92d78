import math
import random
from dataclasses import dataclass
from typing import Optional, Union

from ..ports.video_repo import VideoRole

BASE_SCORES = {
    VideoRole.TEACHER: 85,
    VideoRole.STUDENT: 75,
}

MIN_SCORE = 60
MAX_SCORE = 100
MAX_VARIATION = 10.0

# Each dimension follows the shared variation with its own weight.
RHYTHM_WEIGHT = 0.8
EXPRESSION_WEIGHT = 1.2


@dataclass(frozen=True)
class ScoreCard:
    technique: int
    rhythm: int
    expression: int
    overall: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, round_half_up(value)))


def overall_from(technique: int, rhythm: int, expression: int) -> int:
    """Overall score is always the rounded mean of the three sub-scores."""
    return round_half_up((technique + rhythm + expression) / 3)


def performance_message(overall: int) -> str:
    if overall >= 90:
        return "Excellent performance!"
    if overall >= 80:
        return "Great work!"
    if overall >= 70:
        return "Good effort!"
    return "Keep practicing!"


class ScoreSynthesizer:
    """Derives technique, rhythm and expression scores for one recording.

    Teachers start from a stronger prior than students. A single perturbation
    drawn uniformly from [-10, 10] moves all three dimensions, each clamped to
    [60, 100]. Pass ``seed`` for a reproducible card; otherwise the injected
    ``rng`` is used.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def synthesize(self, role: Union[VideoRole, str], seed: Optional[int] = None) -> ScoreCard:
        role = VideoRole(role)
        rng = random.Random(seed) if seed is not None else self._rng
        base = BASE_SCORES[role]
        variation = rng.uniform(-MAX_VARIATION, MAX_VARIATION)

        technique = clamp_score(base + variation)
        rhythm = clamp_score(base + variation * RHYTHM_WEIGHT)
        expression = clamp_score(base + variation * EXPRESSION_WEIGHT)

        return ScoreCard(
            technique=technique,
            rhythm=rhythm,
            expression=expression,
            overall=overall_from(technique, rhythm, expression),
        )
