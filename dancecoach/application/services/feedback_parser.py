import logging
import random
import re
from typing import Dict, List, Optional, Protocol, Union

from ..errors import EmptyNarrative
from ..ports.video_repo import Feedback, VideoRole

logger = logging.getLogger(__name__)

PHRASES_PER_CATEGORY = 3

# The first three phrases of each pool are the canonical defaults.
TEMPLATES: Dict[VideoRole, Dict[str, List[str]]] = {
    VideoRole.STUDENT: {
        "strengths": [
            "Good posture and alignment",
            "Clear movement execution",
            "Appropriate energy level",
            "Confident stage presence",
        ],
        "improvements": [
            "Focus on smoother transitions",
            "Enhance musical interpretation",
            "Increase movement precision",
            "Hold final positions with more control",
        ],
        "recommendations": [
            "Practice basic positions daily",
            "Work with metronome for timing",
            "Record practice sessions for self-review",
            "Stretch before each practice session",
        ],
    },
    VideoRole.TEACHER: {
        "strengths": [
            "Clear demonstration of core positions",
            "Consistent tempo throughout the sequence",
            "Movements are easy for students to follow",
            "Expressive use of face and hands",
        ],
        "improvements": [
            "Slow down complex sequences for learners",
            "Break down transitions into smaller steps",
            "Face the camera during key movements",
            "Call out counts while demonstrating",
        ],
        "recommendations": [
            "Record a slowed-down version of the demonstration",
            "Add a mirrored view for students",
            "Include a short warm-up segment",
            "Annotate key positions in the video notes",
        ],
    },
}

CATEGORIES = ("strengths", "improvements", "recommendations")


class FeedbackParser(Protocol):
    def parse(self, narrative: str, role: Union[VideoRole, str], seed: Optional[int] = None) -> Feedback:
        ...


def _pick(pool: List[str], rng: Optional[random.Random]) -> List[str]:
    if rng is None:
        return pool[:PHRASES_PER_CATEGORY]
    indexes = sorted(rng.sample(range(len(pool)), PHRASES_PER_CATEGORY))
    return [pool[i] for i in indexes]


class TemplateFeedbackParser:
    """Role-appropriate template feedback; the narrative content is not inspected.

    Without a seed the canonical phrases are returned. A seed picks a
    reproducible variation from each phrase pool, keeping pool order.
    """

    def parse(self, narrative: str, role: Union[VideoRole, str], seed: Optional[int] = None) -> Feedback:
        templates = TEMPLATES[VideoRole(role)]
        rng = random.Random(seed) if seed is not None else None
        return Feedback(
            strengths=_pick(templates["strengths"], rng),
            improvements=_pick(templates["improvements"], rng),
            recommendations=_pick(templates["recommendations"], rng),
        )


_BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")
_DECORATION_RE = re.compile(r"[*#_`]+")
_DASH_BULLET_RE = re.compile(r"^\s*[-*•]\s+")
_NUMBERED_RE = re.compile(r"^\s*\d+[.)]\s+")
_SECTION_KEYWORDS = (
    ("strengths", ("strength",)),
    ("improvements", ("improvement", "weakness")),
    ("recommendations", ("recommend",)),
)
_MAX_HEADING_WORDS = 5


def _clean(line: str) -> str:
    text = _BULLET_RE.sub("", line)
    text = _DECORATION_RE.sub("", text)
    return text.strip().rstrip(":").strip()


def _looks_like_heading(line: str) -> bool:
    raw = line.strip()
    if raw.startswith("#") or raw.endswith(":"):
        return True
    body = _BULLET_RE.sub("", raw).rstrip(":")
    return body.startswith("**") and body.endswith("**")


def _section_for(text: str) -> Optional[str]:
    if len(text.split()) > _MAX_HEADING_WORDS:
        return None
    lowered = text.lower()
    for category, keywords in _SECTION_KEYWORDS:
        if any(k in lowered for k in keywords):
            return category
    return None


class SectionFeedbackParser:
    """Extracts bulleted items listed under strength, improvement and
    recommendation headings of the narrative.

    Dash bullets are always items. Inside an open section a numbered line is an
    item unless it is styled as a heading, or the section's items so far are
    dash bullets (an outline like "2. Rhythm & Timing" above "- On the beat").
    A heading without a known keyword closes the section.

    Any category that yields nothing is filled from the template parser so the
    output lists are never empty.
    """

    def __init__(self, fallback: Optional[TemplateFeedbackParser] = None) -> None:
        self.fallback = fallback or TemplateFeedbackParser()

    def extract(self, narrative: str) -> Dict[str, List[str]]:
        if not narrative or not narrative.strip():
            raise EmptyNarrative("Narrative text is empty")

        found: Dict[str, List[str]] = {c: [] for c in CATEGORIES}
        current: Optional[str] = None
        dash_items = False
        for line in narrative.splitlines():
            text = _clean(line)
            if not text:
                continue

            if _DASH_BULLET_RE.match(line):
                if current:
                    found[current].append(text)
                    dash_items = True
                continue

            numbered = bool(_NUMBERED_RE.match(line))
            heading = _looks_like_heading(line)
            if numbered and current and not heading and not dash_items:
                found[current].append(text)
                continue

            section = _section_for(text)
            if section:
                current, dash_items = section, False
            elif heading or (numbered and current):
                current, dash_items = None, False

        if not any(found.values()):
            raise EmptyNarrative("No feedback sections found in narrative")
        return found

    def parse(self, narrative: str, role: Union[VideoRole, str], seed: Optional[int] = None) -> Feedback:
        defaults = self.fallback.parse(narrative, role, seed=seed)
        try:
            found = self.extract(narrative)
        except EmptyNarrative as e:
            logger.warning(f"Falling back to template feedback: {e}")
            return defaults

        return Feedback(
            strengths=found["strengths"] or defaults.strengths,
            improvements=found["improvements"] or defaults.improvements,
            recommendations=found["recommendations"] or defaults.recommendations,
        )


def get_feedback_parser(name: str) -> FeedbackParser:
    if name == "sections":
        return SectionFeedbackParser()
    if name != "template":
        logger.warning(f"Unknown feedback parser '{name}', using template parser")
    return TemplateFeedbackParser()
