from enum import Enum
from typing import Dict, List, Optional


class DanceStyle(str, Enum):
    BHARATANATYAM = "bharatanatyam"
    KATHAK = "kathak"
    GENERIC = "generic"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "DanceStyle":
        """Exact match against the recognised styles; anything else is generic."""
        for style in cls:
            if style is not cls.GENERIC and style.value == tag:
                return style
        return cls.GENERIC


# Adding a style means adding a member above and a row in each table below.
SPECIFIC_IMPROVEMENTS: Dict[DanceStyle, List[str]] = {
    DanceStyle.BHARATANATYAM: [
        "Focus on precise aramandi (half-sitting position)",
        "Improve hasta mudras (hand gestures) clarity",
        "Work on facial expressions (abhinaya)",
        "Strengthen leg positions and stability",
    ],
    DanceStyle.KATHAK: [
        "Practice chakkars (spins) with better balance",
        "Improve tatkaar (footwork) precision",
        "Work on bhava (emotional expression)",
        "Enhance rhythm coordination with tabla",
    ],
    DanceStyle.GENERIC: [
        "Focus on core technique fundamentals",
        "Improve movement flow and transitions",
        "Work on musical interpretation",
        "Enhance performance presence",
    ],
}

INTENSIFY_PRACTICE: List[str] = [
    "Consider additional practice sessions",
    "Focus on basic positions before complex movements",
]

PRACTICE_RECOMMENDATIONS: Dict[DanceStyle, List[str]] = {
    DanceStyle.BHARATANATYAM: [
        "Daily practice of basic adavus (steps)",
        "Mirror work for posture correction",
        "Strengthen leg muscles with specific exercises",
        "Practice mudras with storytelling",
        "Work with live music for better rhythm",
    ],
    DanceStyle.KATHAK: [
        "Practice tatkaar daily for 15-20 minutes",
        "Work on balance exercises for chakkars",
        "Study different gharana styles",
        "Practice with tabla accompaniment",
        "Focus on bhava through storytelling",
    ],
    DanceStyle.GENERIC: [
        "Daily technique practice sessions",
        "Video recording for self-assessment",
        "Work with qualified instructor",
        "Focus on flexibility and strength",
        "Regular performance practice",
    ],
}


def specific_improvements_for(style: DanceStyle) -> List[str]:
    return list(SPECIFIC_IMPROVEMENTS[style])


def practice_recommendations_for(style: DanceStyle) -> List[str]:
    return list(PRACTICE_RECOMMENDATIONS[style])
