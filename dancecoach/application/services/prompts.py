from ..ports.video_repo import AnalysisRecord, VideoRole


def build_analysis_prompt(role: VideoRole, dance_style: str, student_name: str = None, notes: str = None) -> str:
    if role == VideoRole.TEACHER:
        subject = "dance teacher demonstration"
        focus = "Analyze teaching effectiveness and demonstration quality."
    else:
        subject = f"student dance performance by {student_name}"
        focus = "Focus on constructive feedback for student development."

    prompt = f"""Analyze this {subject} video for {dance_style or 'general dance'} style.

Provide detailed feedback on:
1. Technique & Form (posture, alignment, precision)
2. Rhythm & Timing (beat accuracy, musical interpretation)
3. Movement Quality (fluidity, expression, energy)
4. Areas for Improvement
5. Specific recommendations

{focus}"""
    if notes:
        prompt += f"\nAdditional context: {notes}"
    return prompt


def build_comparison_prompt(student: AnalysisRecord, teacher: AnalysisRecord) -> str:
    style = student.dance_style or "general dance"
    return f"""Compare this student's {style} dance performance with the teacher's demonstration.

Student Performance:
- Name: {student.student_name}
- Technique Score: {student.technique_score}%
- Rhythm Score: {student.rhythm_score}%
- Expression Score: {student.expression_score}%
- Overall Score: {student.overall_score}%

Teacher Demonstration:
- Technique Score: {teacher.technique_score}%
- Rhythm Score: {teacher.rhythm_score}%
- Expression Score: {teacher.expression_score}%
- Overall Score: {teacher.overall_score}%

Dance Style: {style}

Please provide a detailed comparison focusing on:
1. Key differences between student and teacher performance
2. Specific areas where student needs improvement
3. Targeted practice recommendations for {style}
4. Progressive learning steps to bridge the gap
5. Cultural and technical aspects specific to {style}

Format the response with clear sections for differences, improvements, and recommendations."""
