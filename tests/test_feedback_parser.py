from dancecoach.application.ports.video_repo import VideoRole
from dancecoach.application.services.feedback_parser import (
    TEMPLATES,
    SectionFeedbackParser,
    TemplateFeedbackParser,
    get_feedback_parser,
)


NARRATIVE = """Overall this was an engaging performance.

**Strengths:**
- Strong aramandi posture
- Crisp footwork

## Areas for Improvement
- Smoother transitions between adavus

Recommendations:
1. Practice adavus slowly with a metronome
2. Record weekly sessions
"""


def test_template_student_defaults():
    fb = TemplateFeedbackParser().parse("anything at all", VideoRole.STUDENT)
    assert fb.strengths == ["Good posture and alignment", "Clear movement execution", "Appropriate energy level"]
    assert fb.improvements == ["Focus on smoother transitions", "Enhance musical interpretation", "Increase movement precision"]
    assert fb.recommendations == ["Practice basic positions daily", "Work with metronome for timing", "Record practice sessions for self-review"]


def test_template_ignores_narrative_content():
    parser = TemplateFeedbackParser()
    assert parser.parse("great", "teacher") == parser.parse("", "teacher")


def test_template_teacher_differs_from_student():
    parser = TemplateFeedbackParser()
    assert parser.parse("x", "teacher").strengths != parser.parse("x", "student").strengths


def test_seeded_template_is_reproducible_and_ordered():
    parser = TemplateFeedbackParser()
    first = parser.parse("x", VideoRole.STUDENT, seed=3)
    assert first == parser.parse("x", VideoRole.STUDENT, seed=3)
    pool = TEMPLATES[VideoRole.STUDENT]["strengths"]
    assert len(first.strengths) == 3
    assert [pool.index(s) for s in first.strengths] == sorted(pool.index(s) for s in first.strengths)


def test_section_parser_extracts_items():
    fb = SectionFeedbackParser().parse(NARRATIVE, VideoRole.STUDENT)
    assert fb.strengths == ["Strong aramandi posture", "Crisp footwork"]
    assert fb.improvements == ["Smoother transitions between adavus"]
    assert fb.recommendations == ["Practice adavus slowly with a metronome", "Record weekly sessions"]


def test_section_parser_fills_missing_categories_from_template():
    narrative = "Strengths\n- Expressive eyes\n"
    fb = SectionFeedbackParser().parse(narrative, VideoRole.STUDENT)
    defaults = TemplateFeedbackParser().parse(narrative, VideoRole.STUDENT)
    assert fb.strengths == ["Expressive eyes"]
    assert fb.improvements == defaults.improvements
    assert fb.recommendations == defaults.recommendations


def test_section_parser_falls_back_on_empty_narrative():
    fb = SectionFeedbackParser().parse("   ", VideoRole.TEACHER)
    assert fb == TemplateFeedbackParser().parse("", VideoRole.TEACHER)


def test_section_parser_falls_back_on_unstructured_prose():
    fb = SectionFeedbackParser().parse("A lovely piece with good energy.", VideoRole.STUDENT)
    assert fb.strengths and fb.improvements and fb.recommendations


def test_dash_bullets_are_never_headings():
    narrative = "Recommendations:\n- Strength training twice a week\n"
    fb = SectionFeedbackParser().parse(narrative, VideoRole.STUDENT)
    assert fb.recommendations == ["Strength training twice a week"]


def test_get_feedback_parser():
    assert isinstance(get_feedback_parser("sections"), SectionFeedbackParser)
    assert isinstance(get_feedback_parser("template"), TemplateFeedbackParser)
    assert isinstance(get_feedback_parser("nlp-v9"), TemplateFeedbackParser)


def test_numbered_recommendation_mentioning_keyword_stays_an_item():
    narrative = "Recommendations:\n1. Build leg strength daily\n2. Use a metronome\n"
    fb = SectionFeedbackParser().parse(narrative, VideoRole.STUDENT)
    assert fb.recommendations == ["Build leg strength daily", "Use a metronome"]
    assert fb.strengths == TemplateFeedbackParser().parse(narrative, VideoRole.STUDENT).strengths


def test_numbered_outline_heading_closes_dash_bullet_section():
    narrative = "Strengths:\n- Graceful arms\n2. Rhythm & Timing\n- On the beat\n"
    fb = SectionFeedbackParser().parse(narrative, VideoRole.STUDENT)
    assert fb.strengths == ["Graceful arms"]


def test_numbered_outline_from_analysis_prompt():
    narrative = """1. Technique & Form
- Clean lines in the araimandi
2. Rhythm & Timing
- Slightly ahead of the beat
4. Areas for Improvement
- Hold the final pose longer
5. Specific recommendations
- Practice with a slower tempo
"""
    found = SectionFeedbackParser().extract(narrative)
    assert found == {
        "strengths": [],
        "improvements": ["Hold the final pose longer"],
        "recommendations": ["Practice with a slower tempo"],
    }


def test_bold_numbered_heading_switches_section():
    narrative = "Strengths:\n1. Expressive eyes\n2. **Recommendations**\n3. Drill the tatkaar\n"
    found = SectionFeedbackParser().extract(narrative)
    assert found["strengths"] == ["Expressive eyes"]
    assert found["recommendations"] == ["Drill the tatkaar"]
